"""Pick the best field constructor for an arbitrary value."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Sequence

from . import arrays
from . import field as fields
from .errfields import errors, named_error
from .field import Field

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


def _int_field(key: str, value: int) -> Field:
    if _INT64_MIN <= value <= _INT64_MAX:
        return fields.integer(key, value)
    if 0 <= value <= _UINT64_MAX:
        return fields.uint64(key, value)
    return fields.reflect(key, value)


def _all(values: Sequence[Any], kinds: type | tuple, exclude: type | None = None) -> bool:
    return all(
        isinstance(v, kinds) and not (exclude is not None and isinstance(v, exclude))
        for v in values
    )


def _sequence_field(key: str, values: list | tuple) -> Field | None:
    if not values:
        return None
    builder: Callable[[str, Any], Field] | None = None
    if _all(values, bool):
        builder = arrays.bools
    elif _all(values, int, exclude=bool):
        builder = arrays.ints
    elif _all(values, float):
        builder = arrays.float64s
    elif _all(values, complex):
        builder = arrays.complex128s
    elif _all(values, str):
        builder = arrays.strings
    elif _all(values, datetime):
        builder = arrays.times
    elif _all(values, timedelta):
        builder = arrays.durations
    elif _all(values, (BaseException, type(None))) and any(v is not None for v in values):
        builder = errors
    if builder is None:
        return None
    try:
        return builder(key, values)
    except OverflowError:
        return None


def any_field(key: str, value: Any) -> Field:
    """Choose the most specific field for ``value``, falling back to :func:`reflect`."""
    if callable(getattr(value, "marshal_log_object", None)):
        return fields.marshal_object(key, value)
    if callable(getattr(value, "marshal_log_array", None)):
        return arrays.array(key, value)
    if value is None:
        return fields.nil_field(key)
    if isinstance(value, bool):
        return fields.boolean(key, value)
    if isinstance(value, int):
        return _int_field(key, value)
    if isinstance(value, float):
        return fields.float64(key, value)
    if isinstance(value, complex):
        return fields.complex128(key, value)
    if isinstance(value, str):
        return fields.string(key, value)
    if isinstance(value, (bytes, bytearray)):
        return fields.binary(key, value)
    if isinstance(value, datetime):
        return fields.timestamp(key, value)
    if isinstance(value, timedelta):
        return fields.duration(key, value)
    if isinstance(value, BaseException):
        return named_error(key, value)
    if isinstance(value, (list, tuple)):
        seq = _sequence_field(key, value)
        if seq is not None:
            return seq
        return fields.reflect(key, value)
    if type(value).__str__ is not object.__str__:
        return fields.stringer(key, value)
    return fields.reflect(key, value)