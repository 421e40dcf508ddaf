"""Field constructors for exceptions and sequences of exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .arrays import array
from .field import Field, FieldType, skip


@dataclass(frozen=True)
class _ErrorElement:
    """Wraps one exception so that it marshals as ``{"error": str(err)}``."""

    err: BaseException

    def marshal_log_object(self, enc: Any) -> None:
        enc.add_string("error", str(self.err))


@dataclass(frozen=True)
class ErrorArray:
    """A sequence of exceptions; ``None`` entries are left out when marshalling."""

    values: tuple = ()

    def marshal_log_array(self, arr: Any) -> None:
        """Append each non-None exception to ``arr`` as an object with an "error" key."""
        for err in self.values:
            if err is None:
                continue
            arr.append_object(_ErrorElement(err))


def error(err: BaseException | None) -> Field:
    """Shorthand for ``named_error("error", err)``."""
    return named_error("error", err)


def named_error(key: str, err: BaseException | None) -> Field:
    """A field carrying an exception under ``key``; ``None`` gives a no-op field."""
    if err is None:
        return skip()
    if not isinstance(err, BaseException):
        raise TypeError(f"named_error needs an exception, got {type(err).__name__}")
    return Field(key=key, type=FieldType.ERROR, interface=err)


def _check_error(err: Any) -> BaseException | None:
    if err is not None and not isinstance(err, BaseException):
        raise TypeError(f"errors needs exception elements, got {type(err).__name__}")
    return err


def errors(key: str, errs: Iterable[BaseException | None] | None) -> Field:
    """A sequence of exceptions, each logged as an object with an "error" key."""
    values = () if errs is None else tuple(_check_error(e) for e in errs)
    return array(key, ErrorArray(values))