import ipaddress
from datetime import datetime, timedelta, timezone

import pytest

from fieldlog import field as f
from fieldlog.field import Field, FieldType

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Username:
    def __init__(self, name):
        self.name = name

    def marshal_log_object(self, enc):
        enc.add_string("username", self.name)

    def __eq__(self, other):
        return isinstance(other, Username) and other.name == self.name


NAME = Username("phil")
ADDR = ipaddress.ip_address("1.2.3.4")
INTS = [5, 6]


@pytest.mark.parametrize(
    "expect, got",
    [
        (Field(type=FieldType.SKIP), f.skip()),
        (Field(key="k", type=FieldType.BINARY, interface=b"ab12"), f.binary("k", b"ab12")),
        (Field(key="k", type=FieldType.BOOL, integer=1), f.boolean("k", True)),
        (Field(key="k", type=FieldType.BOOL, integer=0), f.boolean("k", False)),
        (Field(key="k", type=FieldType.BYTE_STRING, interface=b"ab12"), f.byte_string("k", b"ab12")),
        (Field(key="k", type=FieldType.COMPLEX128, interface=1 + 2j), f.complex128("k", 1 + 2j)),
        (Field(key="k", type=FieldType.COMPLEX64, interface=1 + 2j), f.complex64("k", 1 + 2j)),
        (Field(key="k", type=FieldType.DURATION, integer=1), f.duration("k", 1)),
        (Field(key="k", type=FieldType.INT64, integer=1), f.integer("k", 1)),
        (Field(key="k", type=FieldType.INT64, integer=1), f.int64("k", 1)),
        (Field(key="k", type=FieldType.INT32, integer=1), f.int32("k", 1)),
        (Field(key="k", type=FieldType.INT16, integer=1), f.int16("k", 1)),
        (Field(key="k", type=FieldType.INT8, integer=1), f.int8("k", 1)),
        (Field(key="k", type=FieldType.STRING, string="foo"), f.string("k", "foo")),
        (Field(key="k", type=FieldType.UINT64, integer=1), f.uint("k", 1)),
        (Field(key="k", type=FieldType.UINT64, integer=1), f.uint64("k", 1)),
        (Field(key="k", type=FieldType.UINT32, integer=1), f.uint32("k", 1)),
        (Field(key="k", type=FieldType.UINT16, integer=1), f.uint16("k", 1)),
        (Field(key="k", type=FieldType.UINT8, integer=1), f.uint8("k", 1)),
        (Field(key="k", type=FieldType.UINTPTR, integer=10), f.uintptr("k", 0xA)),
        (Field(key="k", type=FieldType.REFLECT, interface=INTS), f.reflect("k", INTS)),
        (Field(key="k", type=FieldType.REFLECT), f.reflect("k", None)),
        (Field(key="k", type=FieldType.STRINGER, interface=ADDR), f.stringer("k", ADDR)),
        (Field(key="k", type=FieldType.OBJECT_MARSHALER, interface=NAME), f.marshal_object("k", NAME)),
        (Field(type=FieldType.INLINE_MARSHALER, interface=NAME), f.inline(NAME)),
        (Field(key="k", type=FieldType.NAMESPACE), f.namespace("k")),
    ],
)
def test_field_constructors(expect, got):
    assert got == expect


@pytest.mark.parametrize(
    "ctor",
    [
        f.boolean, f.complex128, f.complex64, f.duration, f.float64, f.float32,
        f.integer, f.int64, f.int32, f.int16, f.int8, f.string, f.timestamp,
        f.uint, f.uint64, f.uint32, f.uint16, f.uint8, f.uintptr,
    ],
)
def test_none_gives_nil_field(ctor):
    assert ctor("k", None) == f.nil_field("k")
    assert f.nil_field("k") == Field(key="k", type=FieldType.REFLECT, interface=None)


def test_present_value_matches_plain_constructor():
    assert f.boolean("k", True) == Field(key="k", type=FieldType.BOOL, integer=1)
    assert f.duration("k", timedelta(seconds=1)) == Field(
        key="k", type=FieldType.DURATION, integer=1_000_000_000
    )


def test_time_epoch():
    assert f.timestamp("k", EPOCH) == Field(
        key="k", type=FieldType.TIME, integer=0, interface=timezone.utc
    )


def test_time_one_microsecond():
    got = f.timestamp("k", EPOCH + timedelta(microseconds=1))
    assert got == Field(key="k", type=FieldType.TIME, integer=1000, interface=timezone.utc)


def test_time_near_lower_bound_still_fits():
    val = EPOCH + timedelta(microseconds=-9223372036854775)
    got = f.timestamp("k", val)
    assert got == Field(
        key="k", type=FieldType.TIME, integer=-9223372036854775000, interface=timezone.utc
    )


def test_time_just_below_lower_bound_is_full():
    val = EPOCH + timedelta(microseconds=-9223372036854776)
    assert f.timestamp("k", val) == Field(key="k", type=FieldType.TIME_FULL, interface=val)


def test_time_zero_value_is_full():
    val = datetime(1, 1, 1, tzinfo=timezone.utc)
    assert f.timestamp("k", val) == Field(key="k", type=FieldType.TIME_FULL, interface=val)


def test_time_far_future_is_full():
    val = datetime(9999, 12, 31, tzinfo=timezone.utc)
    assert f.timestamp("k", val) == Field(key="k", type=FieldType.TIME_FULL, interface=val)


def test_time_keeps_timezone():
    tz = timezone(timedelta(hours=2))
    got = f.timestamp("k", datetime(1970, 1, 1, 2, tzinfo=tz))
    assert got.integer == 0
    assert got.interface is tz


def test_time_naive_has_no_tzinfo():
    val = datetime(2000, 1, 2, 3, 4, 5)
    got = f.timestamp("k", val)
    assert got.type is FieldType.TIME
    assert got.interface is None
    assert got.integer == f.timestamp("k", val.astimezone()).integer


def test_float64_bits():
    assert f.float64("k", 1.0).integer == 4607182418800017408
    assert f.float64("k", -2.0).integer == -4611686018427387904


def test_float32_bits():
    assert f.float32("k", 1.0) == Field(key="k", type=FieldType.FLOAT32, integer=1065353216)


def test_float32_overflow_becomes_infinity():
    assert f.float32("k", 1e300).integer == 0x7F800000


def test_complex64_rounds_parts():
    got = f.complex64("k", 1.1 + 0j)
    assert got.interface.real == 1.100000023841858


def test_uint64_wraps_to_signed():
    assert f.uint64("k", 2**64 - 1).integer == -1
    assert f.uintptr("k", 2**63).integer == -(2**63)


@pytest.mark.parametrize(
    "ctor, val",
    [
        (f.int8, 128),
        (f.int8, -129),
        (f.int16, 2**15),
        (f.int32, 2**31),
        (f.int64, 2**63),
        (f.uint8, 256),
        (f.uint8, -1),
        (f.uint16, 2**16),
        (f.uint32, 2**32),
        (f.uint64, 2**64),
        (f.duration, 2**63),
    ],
)
def test_out_of_range_integers(ctor, val):
    with pytest.raises(OverflowError):
        ctor("k", val)


def test_integer_rejects_bool_and_str():
    with pytest.raises(TypeError):
        f.int64("k", True)
    with pytest.raises(TypeError):
        f.int32("k", "1")


def test_marshal_object_requires_method():
    with pytest.raises(TypeError):
        f.marshal_object("k", object())
    with pytest.raises(TypeError):
        f.inline(42)


def test_field_key_can_be_changed():
    fld = f.string("", "v")
    fld.key = "k"
    assert fld == Field(key="k", type=FieldType.STRING, string="v")