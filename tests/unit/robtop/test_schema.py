"""Tests for schema declarations and utilities."""

from dataclasses import dataclass
from typing import Optional

import pytest

from robtop.de import from_robtop_str
from robtop.errors import DeserializeError
from robtop.kinds import I32, IGNORE, STR, Option, ThunkField
from robtop.schema import robtop_field, robtop_format, schema_of
from robtop.ser import to_robtop_string
from robtop.thunk import PercentDecoder
from robtop.util import cyclic_xor


@robtop_format("~|~")
@dataclass
class Song:
    song_id: int = robtop_field("1", I32)
    name: Optional[str] = robtop_field("2", Option(STR))
    link: object = robtop_field("10", ThunkField(PercentDecoder))
    gap: None = robtop_field("9", IGNORE, default=None)
    note: str = "not on the wire"


class TestSchema:
    """Field descriptors collected from dataclass metadata."""

    def test_fields_in_declaration_order(self):
        schema = schema_of(Song)
        assert [spec.key for spec in schema.fields] == ["1", "2", "10", "9"]
        assert schema.delimiter == "~|~"
        assert schema.map_like

    def test_flags(self):
        by_key = schema_of(Song).by_key
        assert by_key["2"].optional
        assert not by_key["1"].optional
        assert by_key["10"].thunk
        assert by_key["9"].has_default

    def test_cached(self):
        assert schema_of(Song) is schema_of(Song)

    def test_build_fills_optional_and_ignored(self):
        song = schema_of(Song).build({"song_id": 1, "link": None})
        assert song.name is None
        assert song.gap is None

    def test_build_missing_required(self):
        with pytest.raises(DeserializeError) as exc:
            schema_of(Song).build({"song_id": 1})
        assert exc.value.index == "10"

    def test_not_a_dataclass(self):
        class Plain:
            pass

        with pytest.raises(TypeError):
            schema_of(Plain)

    def test_list_like_keys_default_to_position(self):
        @robtop_format(":", map_like=False)
        @dataclass
        class Positional:
            first: int = robtop_field(kind=I32)
            second: str = robtop_field(STR)
            third: Optional[str] = robtop_field(kind=Option(STR), default=None)

        assert [spec.key for spec in schema_of(Positional).fields] == ["1", "2", "3"]
        assert from_robtop_str(Positional, "5:x") == Positional(5, "x", None)
        assert to_robtop_string(Positional(5, "x", "y")) == "5:x:y"

    def test_position_error_attribution(self):
        @robtop_format(":", map_like=False)
        @dataclass
        class Positional:
            first: int = robtop_field(kind=I32)
            second: int = robtop_field(kind=I32)

        with pytest.raises(DeserializeError) as exc:
            from_robtop_str(Positional, "1:x")
        assert exc.value.index == "2"

    def test_map_like_needs_keys(self):
        @robtop_format(":")
        @dataclass
        class Keyless:
            first: int = robtop_field(kind=I32)

        with pytest.raises(TypeError):
            schema_of(Keyless)

    def test_kind_required(self):
        with pytest.raises(TypeError):
            robtop_field("1")

    def test_duplicate_key(self):
        @dataclass
        class Twice:
            a: int = robtop_field("1", I32)
            b: int = robtop_field("1", I32)

        with pytest.raises(TypeError):
            schema_of(Twice)


class TestCyclicXor:
    def test_known_vector(self):
        assert cyclic_xor(b"1000000", "26364") == b"\x03\x06\x03\x06\x04\x02\x06"

    def test_involution(self):
        data = b"some level data"
        assert cyclic_xor(cyclic_xor(data, b"key"), b"key") == data

    def test_empty_key(self):
        with pytest.raises(ValueError):
            cyclic_xor(b"abc", "")
