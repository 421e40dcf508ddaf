# fieldlog

Building blocks for structured, leveled logging: typed fields, array fields, error fields, automatic
field selection, an encoder registry and a pooled byte buffer.

## Modules

### `fieldlog.field`: typed fields

A `Field` is a dataclass with `key`, `type` (a `FieldType`), `integer`, `string` and `interface`.
The `type` tag says which payload slot holds the value. The constructors don't format anything.

- `string`, `boolean`, `integer`, `int64`, `int32`, `int16`, `int8`, `uint`, `uint64`, `uint32`,
  `uint16`, `uint8`, `uintptr`. Integers are range-checked for their width. A value that doesn't
  fit raises `OverflowError`. A value that isn't an `int` raises `TypeError`. Unsigned 64-bit
  values are stored as their two's-complement bits.
- `float64` and `float32` store the IEEE-754 bit pattern. `complex128` and `complex64` store the
  number itself. `complex64` rounds both parts to single precision.
- `timestamp(key, datetime)` stores nanoseconds since the epoch together with the tzinfo. When the
  time is outside the signed 64-bit nanosecond range, it keeps the whole datetime (`TIME_FULL`).
- `duration(key, timedelta | int)` stores nanoseconds. An `int` is taken as nanoseconds.
- `binary`, `byte_string`, `reflect`, `stringer`, `namespace`.
- `marshal_object(key, obj)` and `inline(obj)` need an object with a `marshal_log_object(enc)`
  method.
- `skip()` gives a no-op field. `nil_field(key)` gives a field that marshals explicitly as nil.

Passing `None` as the value to a value-taking constructor gives `nil_field(key)`.

### `fieldlog.arrays`: sequence fields

`bools`, `byte_strings`, `complex128s`, `complex64s`, `durations`, `float64s`, `float32s`, `ints`,
`int64s`, `int32s`, `int16s`, `int8s`, `strings`, `times`, `uints`, `uint64s`, `uint32s`,
`uint16s`, `uint8s`, `uintptrs`.

- Each helper checks and converts its elements, then wraps them in a `TypedArray`.
- `objects` builds an `ObjectArray` and `stringers` builds a `StringerArray`.
- `array(key, val)` accepts any object with a `marshal_log_array(arr)` method.
- `None` in place of a sequence is logged as an empty array.
- When the field is encoded, `marshal_log_array` feeds the elements to an array encoder, one
  `append_*` call per element.
- `ObjectArray` stops at the first object whose marshaller raises, and the exception propagates.

### `fieldlog.errfields`: error fields

- `named_error(key, err)` builds a field carrying the exception.
- `error(err)` is `named_error("error", err)`.
- Both return `skip()` for `None`.
- `errors(key, errs)` builds an `ErrorArray`. Each non-`None` exception is marshalled as an object
  `{"error": str(err)}`, and `None` entries are left out.

### `fieldlog.anyfield`: automatic choice

`any_field(key, value)` chooses the most specific constructor for `value`. It checks, in order:

1. Marshaler objects.
2. `None`, `bool`, `int`, `float`, `complex`, `str`, `bytes`, `datetime`, `timedelta`, exceptions.
3. Homogeneous lists and tuples.
4. Objects with their own `__str__`.

If none of these apply, it falls back to `reflect`.

### `fieldlog.encoder`: encoder registry

`EncoderRegistry` is a thread-safe table that maps names to encoder constructors. It has
`register(name, constructor)`, `new_encoder(name, config)` and `names()`. The module functions
`register_encoder` and `new_encoder` use a process-wide registry.

- An empty name raises `NoEncoderNameError`.
- A duplicate or unknown name raises `ValueError`.
- A config with a non-empty `time_key` but no `encode_time` also raises `ValueError`.

### `fieldlog.buffer`: pooled buffers

`Pool.get()` returns an empty `Buffer`. `Buffer.free()` returns it to the pool. Using the buffer as
a context manager also frees it on exit.

A buffer supports:

- `append_byte`, `append_string`, `append_int`, `append_uint`, `append_bool`.
- `append_float(f, bit_size)`: shortest positional form, with `NaN`, `+Inf` and `-Inf` unquoted.
- `append_time(t, layout)`: `layout` is a strftime format.
- `write`, `write_byte`, `write_string`, `trim_newline`, `reset`.
- `len()`, `bytes()` and `str()`.

## What is not included

The package has no logger, no logging levels and no output sinks. It ships no encoders: the
registry starts empty, and nothing in the package turns fields into JSON or console text. To
serialise fields, supply an encoder object with the matching `add_*` and `append_*` methods and
register its constructor.

## Install

```
pip install fieldlog
```

## Example

```python
from fieldlog.field import string, int64
from fieldlog.arrays import ints
from fieldlog.anyfield import any_field
from fieldlog.buffer import Pool

fields = [
    string("url", "http://example.com"),
    int64("attempt", 3),
    ints("codes", [200, 503]),
    any_field("retry", True),
]

pool = Pool()
with pool.get() as buf:
    buf.append_string("attempt=")
    buf.append_int(3)
    print(str(buf))   # attempt=3
```

## Running the tests

```
pip install -e .[test]
pytest
```