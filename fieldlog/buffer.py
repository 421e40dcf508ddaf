"""A reusable byte buffer with text formatters, and a pool that hands them out."""

from __future__ import annotations

import math
import threading
from datetime import datetime
from decimal import Decimal

from .field import _to_float32

_SIZE = 1024


def _format_float(f: float, bit_size: int) -> str:
    if bit_size not in (32, 64):
        raise ValueError(f"bit size must be 32 or 64, got {bit_size}")
    f = float(f)
    if bit_size == 32:
        f = _to_float32(f)
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    if bit_size == 32:
        shortest = next(
            text
            for precision in range(1, 10)
            for text in [format(f, f".{precision}g")]
            if _to_float32(float(text)) == f
        )
    else:
        shortest = repr(f)
    text = format(Decimal(shortest), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Buffer:
    """A growable byte buffer, normally obtained from a :class:`Pool`."""

    def __init__(self, pool: Pool | None = None) -> None:
        self._data = bytearray()
        self._pool = pool

    def append_byte(self, v: int) -> None:
        """Append a single byte (0-255)."""
        self._data.append(v)

    def append_string(self, s: str) -> None:
        """Append text encoded as UTF-8."""
        self._data += s.encode("utf-8")

    def append_int(self, i: int) -> None:
        """Append an integer in base 10."""
        self._data += str(int(i)).encode("ascii")

    def append_uint(self, i: int) -> None:
        """Append a non-negative integer in base 10."""
        if i < 0:
            raise ValueError(f"unsigned value cannot be negative: {i}")
        self._data += str(int(i)).encode("ascii")

    def append_bool(self, v: bool) -> None:
        """Append ``true`` or ``false``."""
        self._data += b"true" if v else b"false"

    def append_float(self, f: float, bit_size: int) -> None:
        """Append the shortest positional form of ``f`` at the given precision.

        NaN and infinities are written unquoted as ``NaN``, ``+Inf`` and ``-Inf``.
        """
        self._data += _format_float(f, bit_size).encode("ascii")

    def append_time(self, t: datetime, layout: str) -> None:
        """Append ``t`` formatted with the strftime ``layout``."""
        self._data += t.strftime(layout).encode("utf-8")

    def write(self, bs: bytes) -> int:
        """Append raw bytes and return how many were written."""
        self._data += bs
        return len(bs)

    def write_byte(self, v: int) -> None:
        """Append a single byte."""
        self.append_byte(v)

    def write_string(self, s: str) -> int:
        """Append text and return the number of bytes written."""
        encoded = s.encode("utf-8")
        self._data += encoded
        return len(encoded)

    def trim_newline(self) -> None:
        """Remove one trailing newline, if there is one."""
        if self._data.endswith(b"\n"):
            del self._data[-1]

    def reset(self) -> None:
        """Empty the buffer."""
        self._data.clear()

    def free(self) -> None:
        """Return the buffer to its pool; it must not be used afterwards."""
        if self._pool is not None:
            self._pool._put(self)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __enter__(self) -> Buffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.free()


class Pool:
    """A thread-safe pool of reusable :class:`Buffer` objects."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._free: list[Buffer] = []

    def get(self) -> Buffer:
        """Take an empty buffer from the pool, creating one if none is free."""
        with self._lock:
            buf = self._free.pop() if self._free else None
        if buf is None:
            buf = Buffer(self)
        buf.reset()
        buf._pool = self
        return buf

    def _put(self, buf: Buffer) -> None:
        with self._lock:
            self._free.append(buf)