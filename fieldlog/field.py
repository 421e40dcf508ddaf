"""Strongly typed log fields and their constructors.

A :class:`Field` is a small tagged union: the ``type`` tag says which of
``integer``, ``string`` or ``interface`` carries the value. Serialisation is
left to an encoder, so building a field is cheap and never formats anything.

Every constructor that takes a value also accepts ``None`` and then returns a
field that marshals explicitly as nil (see :func:`nil_field`).
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FieldType(IntEnum):
    """Tag telling an encoder how to interpret a field's payload."""

    UNKNOWN = 0
    ARRAY_MARSHALER = 1
    OBJECT_MARSHALER = 2
    BINARY = 3
    BOOL = 4
    BYTE_STRING = 5
    COMPLEX128 = 6
    COMPLEX64 = 7
    DURATION = 8
    FLOAT64 = 9
    FLOAT32 = 10
    INT64 = 11
    INT32 = 12
    INT16 = 13
    INT8 = 14
    STRING = 15
    TIME = 16
    TIME_FULL = 17
    UINT64 = 18
    UINT32 = 19
    UINT16 = 20
    UINT8 = 21
    UINTPTR = 22
    REFLECT = 23
    NAMESPACE = 24
    STRINGER = 25
    ERROR = 26
    SKIP = 27
    INLINE_MARSHALER = 28


@dataclass
class Field:
    """A key, a type tag and the payload slot(s) the tag selects."""

    key: str = ""
    type: FieldType = FieldType.UNKNOWN
    integer: int = 0
    string: str = ""
    interface: Any = None


def _to_int64(val: int) -> int:
    """Reinterpret a 64-bit unsigned value as a signed one."""
    return val - 2**64 if val > _INT64_MAX else val


def _checked_int(val: Any, lo: int, hi: int, kind: str) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        raise TypeError(f"{kind} field needs an int, got {type(val).__name__}")
    if not lo <= val <= hi:
        raise OverflowError(f"{val} does not fit in {kind}")
    return val


def _signed(bits: int) -> tuple[int, int]:
    return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, 2**bits - 1


def _to_float32(val: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", val))[0]
    except OverflowError:
        return math.copysign(math.inf, val)


def _duration_nanos(val: timedelta | int) -> int:
    if isinstance(val, timedelta):
        nanos = (val.days * 86400 + val.seconds) * 10**9 + val.microseconds * 1000
    else:
        nanos = _checked_int(val, _INT64_MIN, _INT64_MAX, "duration")
    if not _INT64_MIN <= nanos <= _INT64_MAX:
        raise OverflowError(f"duration {val!r} does not fit in 64-bit nanoseconds")
    return nanos


def _require_method(val: Any, method: str, kind: str) -> None:
    if not callable(getattr(val, method, None)):
        raise TypeError(f"{kind} needs an object with a {method}() method")


def skip() -> Field:
    """A no-op field, useful when a constructor gets an invalid input."""
    return Field(type=FieldType.SKIP)


def nil_field(key: str) -> Field:
    """A field that marshals explicitly as nil."""
    return reflect(key, None)


def binary(key: str, val: bytes | None) -> Field:
    """An opaque binary blob; encoders choose how to represent it."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BINARY, interface=val)


def boolean(key: str, val: bool | None) -> Field:
    """A boolean, stored as 1 or 0."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BOOL, integer=1 if val else 0)


def byte_string(key: str, val: bytes | None) -> Field:
    """UTF-8 encoded text carried as bytes."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BYTE_STRING, interface=val)


def complex128(key: str, val: complex | None) -> Field:
    """A double-precision complex number."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.COMPLEX128, interface=complex(val))


def complex64(key: str, val: complex | None) -> Field:
    """A single-precision complex number; both parts are rounded to float32."""
    if val is None:
        return nil_field(key)
    c = complex(val)
    rounded = complex(_to_float32(c.real), _to_float32(c.imag))
    return Field(key=key, type=FieldType.COMPLEX64, interface=rounded)


def float64(key: str, val: float | None) -> Field:
    """A double, stored as its IEEE-754 bit pattern."""
    if val is None:
        return nil_field(key)
    (bits,) = struct.unpack("<q", struct.pack("<d", float(val)))
    return Field(key=key, type=FieldType.FLOAT64, integer=bits)


def float32(key: str, val: float | None) -> Field:
    """A single-precision float, stored as its IEEE-754 bit pattern."""
    if val is None:
        return nil_field(key)
    (bits,) = struct.unpack("<I", struct.pack("<f", _to_float32(float(val))))
    return Field(key=key, type=FieldType.FLOAT32, integer=bits)


def integer(key: str, val: int | None) -> Field:
    """A machine-sized signed integer (stored as int64)."""
    return int64(key, val)


def int64(key: str, val: int | None) -> Field:
    """A 64-bit signed integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_signed(64), "int64")
    return Field(key=key, type=FieldType.INT64, integer=n)


def int32(key: str, val: int | None) -> Field:
    """A 32-bit signed integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_signed(32), "int32")
    return Field(key=key, type=FieldType.INT32, integer=n)


def int16(key: str, val: int | None) -> Field:
    """A 16-bit signed integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_signed(16), "int16")
    return Field(key=key, type=FieldType.INT16, integer=n)


def int8(key: str, val: int | None) -> Field:
    """An 8-bit signed integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_signed(8), "int8")
    return Field(key=key, type=FieldType.INT8, integer=n)


def string(key: str, val: str | None) -> Field:
    """A text value."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.STRING, string=val)


def uint(key: str, val: int | None) -> Field:
    """A machine-sized unsigned integer (stored as uint64)."""
    return uint64(key, val)


def uint64(key: str, val: int | None) -> Field:
    """A 64-bit unsigned integer; the payload holds its two's-complement bits."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_unsigned(64), "uint64")
    return Field(key=key, type=FieldType.UINT64, integer=_to_int64(n))


def uint32(key: str, val: int | None) -> Field:
    """A 32-bit unsigned integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_unsigned(32), "uint32")
    return Field(key=key, type=FieldType.UINT32, integer=n)


def uint16(key: str, val: int | None) -> Field:
    """A 16-bit unsigned integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_unsigned(16), "uint16")
    return Field(key=key, type=FieldType.UINT16, integer=n)


def uint8(key: str, val: int | None) -> Field:
    """An 8-bit unsigned integer."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, *_unsigned(8), "uint8")
    return Field(key=key, type=FieldType.UINT8, integer=n)


def uintptr(key: str, val: int | None) -> Field:
    """A pointer-sized unsigned integer such as an address."""
    if val is None:
        return nil_field(key)
    n = _checked_int(val, 0, _UINT64_MAX, "uintptr")
    return Field(key=key, type=FieldType.UINTPTR, integer=_to_int64(n))


def reflect(key: str, val: Any) -> Field:
    """An arbitrary object, serialised generically by the encoder."""
    return Field(key=key, type=FieldType.REFLECT, interface=val)


def namespace(key: str) -> Field:
    """Open a named scope; all following fields are nested under it."""
    return Field(key=key, type=FieldType.NAMESPACE)


def stringer(key: str, val: Any) -> Field:
    """A value logged through its ``str()`` form, computed lazily."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.STRINGER, interface=val)


def timestamp(key: str, val: datetime | None) -> Field:
    """A point in time.

    Times representable as signed 64-bit nanoseconds since the epoch are
    stored as that count plus their tzinfo (``None`` for naive, local times);
    anything outside that range keeps the whole datetime.
    """
    if val is None:
        return nil_field(key)
    aware = val if val.tzinfo is not None else val.astimezone()
    delta = aware - _EPOCH
    nanos = (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000
    if not _INT64_MIN <= nanos <= _INT64_MAX:
        return Field(key=key, type=FieldType.TIME_FULL, interface=val)
    return Field(key=key, type=FieldType.TIME, integer=nanos, interface=val.tzinfo)


def duration(key: str, val: timedelta | int | None) -> Field:
    """A span of time; an int is taken as nanoseconds."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.DURATION, integer=_duration_nanos(val))


def marshal_object(key: str, val: Any) -> Field:
    """A user type with a ``marshal_log_object(enc)`` method, marshalled lazily."""
    if val is None:
        return nil_field(key)
    _require_method(val, "marshal_log_object", "marshal_object")
    return Field(key=key, type=FieldType.OBJECT_MARSHALER, interface=val)


def inline(val: Any) -> Field:
    """Like :func:`marshal_object`, but adds the object's keys to the current scope."""
    _require_method(val, "marshal_log_object", "inline")
    return Field(type=FieldType.INLINE_MARSHALER, interface=val)