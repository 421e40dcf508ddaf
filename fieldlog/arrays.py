"""Field constructors for homogeneous sequences.

Each constructor wraps its values in an array marshaler. That is an object
with a ``marshal_log_array(arr)`` method, which feeds the elements one by
one to an array encoder when the field is serialised. ``None`` in place of
a sequence is logged as an empty array.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable

from .field import (
    Field,
    FieldType,
    _checked_int,
    _duration_nanos,
    _require_method,
    _signed,
    _to_float32,
    _unsigned,
)


@dataclass(frozen=True)
class TypedArray:
    """Values of one primitive kind, appended with a single encoder method."""

    append_method: str
    values: tuple = ()

    def marshal_log_array(self, arr: Any) -> None:
        """Append every value to ``arr`` with the encoder's ``append_method``."""
        append = getattr(arr, self.append_method)
        for value in self.values:
            append(value)


@dataclass(frozen=True)
class ObjectArray:
    """Objects with a ``marshal_log_object`` method, appended as nested objects.

    Marshalling stops at the first object whose marshaller raises; the
    exception propagates to the caller.
    """

    values: tuple = ()

    def marshal_log_array(self, arr: Any) -> None:
        """Append every object to ``arr`` in order."""
        for obj in self.values:
            arr.append_object(obj)


@dataclass(frozen=True)
class StringerArray:
    """Arbitrary values logged through their ``str()`` form."""

    values: tuple = ()

    def marshal_log_array(self, arr: Any) -> None:
        """Append the string form of every value to ``arr``."""
        for value in self.values:
            arr.append_string(str(value))


def array(key: str, val: Any) -> Field:
    """A field holding any object with a ``marshal_log_array(arr)`` method."""
    _require_method(val, "marshal_log_array", "array")
    return Field(key=key, type=FieldType.ARRAY_MARSHALER, interface=val)


def _collect(values: Iterable[Any] | None, convert: Callable[[Any], Any]) -> tuple:
    if values is None:
        return ()
    return tuple(convert(v) for v in values)


def _typed(key: str, method: str, values: Iterable[Any] | None, convert: Callable[[Any], Any]) -> Field:
    return array(key, TypedArray(method, _collect(values, convert)))


def _int_checker(lo: int, hi: int, kind: str) -> Callable[[Any], int]:
    return lambda v: _checked_int(v, lo, hi, kind)


def _check_bool(v: Any) -> bool:
    if not isinstance(v, bool):
        raise TypeError(f"bools needs bool elements, got {type(v).__name__}")
    return v


def _check_str(v: Any) -> str:
    if not isinstance(v, str):
        raise TypeError(f"strings needs str elements, got {type(v).__name__}")
    return v


def _check_time(v: Any) -> datetime:
    if not isinstance(v, datetime):
        raise TypeError(f"times needs datetime elements, got {type(v).__name__}")
    return v


def _to_complex64(v: Any) -> complex:
    c = complex(v)
    return complex(_to_float32(c.real), _to_float32(c.imag))


def bools(key: str, bs: Iterable[bool] | None) -> Field:
    """A sequence of booleans."""
    return _typed(key, "append_bool", bs, _check_bool)


def byte_strings(key: str, bss: Iterable[bytes] | None) -> Field:
    """A sequence of UTF-8 encoded byte strings."""
    return _typed(key, "append_byte_string", bss, bytes)


def complex128s(key: str, nums: Iterable[complex] | None) -> Field:
    """A sequence of double-precision complex numbers."""
    return _typed(key, "append_complex128", nums, complex)


def complex64s(key: str, nums: Iterable[complex] | None) -> Field:
    """A sequence of complex numbers rounded to single precision."""
    return _typed(key, "append_complex64", nums, _to_complex64)


def durations(key: str, ds: Iterable[Any] | None) -> Field:
    """A sequence of durations (timedelta or int nanoseconds), kept as nanoseconds."""
    return _typed(key, "append_duration", ds, _duration_nanos)


def float64s(key: str, nums: Iterable[float] | None) -> Field:
    """A sequence of doubles."""
    return _typed(key, "append_float64", nums, float)


def float32s(key: str, nums: Iterable[float] | None) -> Field:
    """A sequence of floats rounded to single precision."""
    return _typed(key, "append_float32", nums, lambda v: _to_float32(float(v)))


def ints(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of machine-sized signed integers."""
    return _typed(key, "append_int", nums, _int_checker(*_signed(64), "int"))


def int64s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 64-bit signed integers."""
    return _typed(key, "append_int64", nums, _int_checker(*_signed(64), "int64"))


def int32s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 32-bit signed integers."""
    return _typed(key, "append_int32", nums, _int_checker(*_signed(32), "int32"))


def int16s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 16-bit signed integers."""
    return _typed(key, "append_int16", nums, _int_checker(*_signed(16), "int16"))


def int8s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 8-bit signed integers."""
    return _typed(key, "append_int8", nums, _int_checker(*_signed(8), "int8"))


def strings(key: str, ss: Iterable[str] | None) -> Field:
    """A sequence of strings."""
    return _typed(key, "append_string", ss, _check_str)


def times(key: str, ts: Iterable[datetime] | None) -> Field:
    """A sequence of datetimes."""
    return _typed(key, "append_time", ts, _check_time)


def uints(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of machine-sized unsigned integers."""
    return _typed(key, "append_uint", nums, _int_checker(*_unsigned(64), "uint"))


def uint64s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 64-bit unsigned integers."""
    return _typed(key, "append_uint64", nums, _int_checker(*_unsigned(64), "uint64"))


def uint32s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 32-bit unsigned integers."""
    return _typed(key, "append_uint32", nums, _int_checker(*_unsigned(32), "uint32"))


def uint16s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 16-bit unsigned integers."""
    return _typed(key, "append_uint16", nums, _int_checker(*_unsigned(16), "uint16"))


def uint8s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of 8-bit unsigned integers."""
    return _typed(key, "append_uint8", nums, _int_checker(*_unsigned(8), "uint8"))


def uintptrs(key: str, us: Iterable[int] | None) -> Field:
    """A sequence of pointer-sized unsigned integers."""
    return _typed(key, "append_uintptr", us, _int_checker(*_unsigned(64), "uintptr"))


def _check_object(v: Any) -> Any:
    _require_method(v, "marshal_log_object", "objects")
    return v


def objects(key: str, values: Iterable[Any] | None) -> Field:
    """A sequence of objects that each have a ``marshal_log_object(enc)`` method."""
    return array(key, ObjectArray(_collect(values, _check_object)))


def stringers(key: str, values: Iterable[Any] | None) -> Field:
    """A sequence of values logged through their ``str()`` form."""
    return array(key, StringerArray(_collect(values, lambda v: v)))