"""Tests for the indexed encoder."""

import io
from dataclasses import dataclass
from typing import Optional

import pytest

from robtop.de import from_robtop_str
from robtop.errors import SerializeEncodingError, SerializeError, SerializeIoError, SerializeUnsupported
from robtop.kinds import BOOL, BYTES, F64, I32, IGNORE, STR, U8, DefaultToNone, MapOf, Option, Seq, Struct, ThunkField
from robtop.schema import robtop_field, robtop_format
from robtop.ser import encode, to_robtop_bytes, to_robtop_string, write_robtop_data
from robtop.thunk import PercentDecoder, Thunk


@robtop_format(":")
@dataclass
class Keyed:
    first: int = robtop_field("1", I32)
    second: Optional[str] = robtop_field("2", Option(STR))


@robtop_format(",", map_like=False)
@dataclass
class Triple:
    first: str = robtop_field("1", STR)
    second: Optional[str] = robtop_field("2", Option(STR))
    third: str = robtop_field("3", STR)


@robtop_format(",", map_like=False)
@dataclass
class LeadingOptional:
    first: Optional[str] = robtop_field("1", Option(STR))
    second: str = robtop_field("2", STR)


@dataclass
class WithGap:
    first: str = robtop_field("1", STR)
    gap: None = robtop_field("2", IGNORE, default=None)
    third: str = robtop_field("3", STR, default="")


@robtop_format("~")
@dataclass
class Scalars:
    flag: bool = robtop_field("1", BOOL)
    small: int = robtop_field("2", U8)
    ratio: float = robtop_field("3", F64)
    account: Optional[int] = robtop_field("4", DefaultToNone(U8))


@robtop_format("~|~")
@dataclass
class Linked:
    link: Thunk = robtop_field("10", ThunkField(PercentDecoder))


@robtop_format(":")
@dataclass
class Outer:
    first: int = robtop_field("1", I32)
    inner: Keyed = robtop_field("2", Struct(Keyed))


@robtop_format(",", map_like=False)
@dataclass
class OuterList:
    first: str = robtop_field("1", STR)
    inner: Optional[Triple] = robtop_field("2", Option(Struct(Triple)))


@dataclass
class Unformatted:
    first: int = robtop_field("1", I32)


class FailingSink:
    def write(self, text):
        raise OSError("disk full")


class TestEncoding:
    """Token layout."""

    def test_map_like(self):
        assert to_robtop_string(Keyed(5, "x")) == "1:5:2:x"

    def test_none_is_empty_slot(self):
        assert to_robtop_string(Keyed(5, None)) == "1:5:2:"

    def test_list_like(self):
        assert to_robtop_string(Triple("foo", None, "bar")) == "foo,,bar"

    def test_leading_empty_slot(self):
        """An empty first field is still followed by the delimiter."""
        assert to_robtop_string(LeadingOptional(None, "b")) == ",b"

    def test_ignored_field_list_like(self):
        """Ignored fields keep their position in list-like output."""
        buf = io.StringIO()
        encode(WithGap("x", None, "z"), ",", False, buf)
        assert buf.getvalue() == "x,,z"

    def test_ignored_field_map_like(self):
        buf = io.StringIO()
        encode(WithGap("x", None, "z"), ":", True, buf)
        assert buf.getvalue() == "1:x:3:z"

    def test_scalars(self):
        assert to_robtop_string(Scalars(True, 7, 8.03, None)) == "1~1~2~7~3~8.03~4~0"
        assert to_robtop_string(Scalars(False, 0, 1.0, 3)) == "1~0~2~0~3~1.0~4~3"

    def test_bare_value_with_kind(self):
        buf = io.StringIO()
        encode(b"\xfb\xff", ":", False, buf, kind=BYTES)
        assert buf.getvalue() == "-_8="

    def test_write_to_sink(self):
        buf = io.StringIO()
        buf.write("prefix|")
        write_robtop_data(Keyed(1, "a"), buf)
        assert buf.getvalue() == "prefix|1:1:2:a"

    def test_bytes_output(self):
        assert to_robtop_bytes(Keyed(5, None)) == b"1:5:2:"


class TestThunks:
    """Thunks write their wire text."""

    def test_unprocessed_verbatim(self):
        """Untouched raw text is written back as is, even if not canonical."""
        value = Linked(Thunk.unprocessed(PercentDecoder, "http%3a%2F%2Fexample.com"))
        assert to_robtop_string(value) == "10~|~http%3a%2F%2Fexample.com"

    def test_processed_reencoded(self):
        value = Linked(Thunk.unprocessed(PercentDecoder, "http%3A%2F%2Fexample.com"))
        value.link.process()
        value.link.set("https://example.com/a b")
        assert to_robtop_string(value) == "10~|~https%3A%2F%2Fexample.com%2Fa%20b"


class TestRoundTrip:
    """decode(encode(v)) == v in both addressing modes."""

    @pytest.mark.parametrize("value", [Keyed(5, "x"), Keyed(-3, None)])
    def test_map_like(self, value):
        assert from_robtop_str(Keyed, to_robtop_string(value)) == value

    @pytest.mark.parametrize("value", [Triple("a", "b", "c"), Triple("a", None, "")])
    def test_list_like(self, value):
        assert from_robtop_str(Triple, to_robtop_string(value)) == value

    def test_text_first(self):
        text = "2:x:99:skipped:1:5"
        decoded = from_robtop_str(Keyed, text)
        assert from_robtop_str(Keyed, to_robtop_string(decoded)) == decoded


class TestErrors:
    """Values the encoder rejects."""

    def test_wrong_type_names_field(self):
        with pytest.raises(SerializeError) as exc:
            to_robtop_string(Keyed("five", None))
        assert exc.value.field == "1"
        assert str(exc.value) == "expected i32, got str (field '1')"

    def test_out_of_range(self):
        with pytest.raises(SerializeError) as exc:
            to_robtop_string(Scalars(True, 256, 1.0, None))
        assert exc.value.field == "2"

    def test_bare_sequence_unsupported(self):
        with pytest.raises(SerializeUnsupported):
            encode([1, 2], ",", False, io.StringIO(), kind=Seq(I32))

    def test_map_unsupported(self):
        with pytest.raises(SerializeUnsupported):
            encode({"1": "a"}, ":", True, io.StringIO(), kind=MapOf(STR))

    def test_value_without_kind(self):
        with pytest.raises(SerializeUnsupported):
            encode(5, ":", True, io.StringIO())

    def test_sink_failure(self):
        with pytest.raises(SerializeIoError) as exc:
            encode(Keyed(1, None), ":", True, FailingSink())
        assert isinstance(exc.value.error, OSError)
        assert exc.value.field is None

    def test_text_encoding_failure(self):
        with pytest.raises(SerializeEncodingError):
            to_robtop_bytes(Triple("é", None, "x"), encoding="ascii")

    def test_needs_declared_format(self):
        with pytest.raises(TypeError):
            to_robtop_string(Unformatted(1))

    def test_nested_struct_unsupported(self):
        """Nested structs cannot be decoded, so they are not written either."""
        with pytest.raises(SerializeUnsupported) as exc:
            to_robtop_string(Outer(1, Keyed(4, None)))
        assert exc.value.operation == "nested struct"
        assert exc.value.field == "2"

    def test_nested_struct_unsupported_list_like(self):
        with pytest.raises(SerializeUnsupported):
            to_robtop_string(OuterList("a", Triple("b", None, "c")))

    def test_absent_optional_struct(self):
        assert to_robtop_string(OuterList("a", None)) == "a,"
