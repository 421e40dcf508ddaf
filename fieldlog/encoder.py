"""A registry mapping encoder names to encoder constructors."""

from __future__ import annotations

import threading
from typing import Any, Callable, Mapping

EncoderConstructor = Callable[[Any], Any]


class NoEncoderNameError(ValueError):
    """Raised when an encoder is registered or requested without a name."""

    def __init__(self) -> None:
        super().__init__("no encoder name specified")


class EncoderRegistry:
    """Thread-safe name-to-constructor table for encoders."""

    def __init__(self, constructors: Mapping[str, EncoderConstructor] | None = None) -> None:
        self._lock = threading.RLock()
        self._constructors: dict[str, EncoderConstructor] = dict(constructors or {})

    def register(self, name: str, constructor: EncoderConstructor) -> None:
        """Register ``constructor`` under ``name``; names cannot be reused."""
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            if name in self._constructors:
                raise ValueError(f'encoder already registered for name "{name}"')
            self._constructors[name] = constructor

    def new_encoder(self, name: str, config: Any) -> Any:
        """Build the encoder registered under ``name`` from ``config``."""
        if getattr(config, "time_key", "") and getattr(config, "encode_time", None) is None:
            raise ValueError("missing EncodeTime in EncoderConfig")
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            try:
                constructor = self._constructors[name]
            except KeyError:
                raise ValueError(f'no encoder registered for name "{name}"') from None
        return constructor(config)

    def names(self) -> list[str]:
        """The registered names, sorted."""
        with self._lock:
            return sorted(self._constructors)


_default_registry = EncoderRegistry()


def register_encoder(name: str, constructor: EncoderConstructor) -> None:
    """Register an encoder constructor in the process-wide registry."""
    _default_registry.register(name, constructor)


def new_encoder(name: str, config: Any) -> Any:
    """Build an encoder from the process-wide registry."""
    return _default_registry.new_encoder(name, config)