"""Field kinds understood by the indexed decoder and the two encoders.

A kind describes how a single field is read from an
:class:`~robtop.de.IndexedDecoder`, written to an
:class:`~robtop.ser.IndexedEncoder` and written to a
:class:`~robtop.form.FormEncoder`. Scalar kinds only need ``decode`` and
``to_text``; aggregates override the encoder hooks.
"""

from __future__ import annotations
import base64
import enum
from typing import Any, Iterable, Optional, Type

from .errors import DeserializeError, ProcessError, SerializeError, SerializeUnsupported
from .schema import schema_of
from .thunk import Thunk, ThunkProcessor
from .constants import BOOL_FALSE, BOOL_TRUE, TWO_BOOL_TRUE


class Kind:
    """Base kind. Decoding it directly is a self-describing decode and fails."""

    name = "any"
    optional = False
    thunk = False
    ignored = False

    def decode(self, de) -> Any:
        return de.decode_any()

    def to_text(self, value: Any) -> str:
        raise SerializeUnsupported(f"serialize_{self.name}")

    def encode_indexed(self, enc, value: Any) -> None:
        enc.append(self.to_text(value))

    def encode_form(self, enc, key: str, value: Any) -> None:
        enc.append_pair(key, self.to_text(value))

    def __repr__(self) -> str:
        return self.name


class Int(Kind):
    """Integer of the given width, range-checked in both directions."""

    def __init__(self, bits: int = 32, signed: bool = True):
        self.bits = bits
        self.signed = signed
        self.name = f"{'i' if signed else 'u'}{bits}"
        if signed:
            self.minimum = -(1 << (bits - 1))
            self.maximum = (1 << (bits - 1)) - 1
        else:
            self.minimum = 0
            self.maximum = (1 << bits) - 1

    def decode(self, de) -> int:
        return de.decode_int(self.minimum, self.maximum)

    def to_text(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SerializeError(f"expected {self.name}, got {type(value).__name__}")
        if not self.minimum <= value <= self.maximum:
            raise SerializeError(f"{value} does not fit into {self.name}")
        return str(value)


class Float(Kind):
    name = "float"

    def decode(self, de) -> float:
        return de.decode_float()

    def to_text(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SerializeError(f"expected float, got {type(value).__name__}")
        return repr(float(value))


class Bool(Kind):
    """Boolean, written as "0"/"1"."""

    name = "bool"

    def decode(self, de) -> bool:
        return de.decode_bool()

    def to_text(self, value: Any) -> str:
        if not isinstance(value, bool):
            raise SerializeError(f"expected bool, got {type(value).__name__}")
        return BOOL_TRUE if value else BOOL_FALSE


class TwoBool(Bool):
    """Boolean written as "2"/"0". Decodes like :class:`Bool`."""

    name = "two_bool"

    def to_text(self, value: Any) -> str:
        if not isinstance(value, bool):
            raise SerializeError(f"expected bool, got {type(value).__name__}")
        return TWO_BOOL_TRUE if value else BOOL_FALSE


class Str(Kind):
    name = "str"

    def decode(self, de) -> str:
        return de.decode_str()

    def to_text(self, value: Any) -> str:
        if not isinstance(value, str):
            raise SerializeError(f"expected str, got {type(value).__name__}")
        return value


class Bytes(Kind):
    """Binary payload, URL-safe base64 on the wire."""

    name = "bytes"

    def decode(self, de) -> bytes:
        return de.decode_bytes()

    def to_text(self, value: Any) -> str:
        if not isinstance(value, (bytes, bytearray)):
            raise SerializeError(f"expected bytes, got {type(value).__name__}")
        return base64.urlsafe_b64encode(bytes(value)).decode("ascii")

    def encode_form(self, enc, key: str, value: Any) -> None:
        raise SerializeUnsupported("serialize_bytes")


class Option(Kind):
    """``None`` for an empty or missing token, otherwise the inner kind."""

    optional = True

    def __init__(self, inner: Kind):
        self.inner = inner
        self.name = f"Option[{inner.name}]"
        self.thunk = inner.thunk

    def decode(self, de) -> Any:
        return de.decode_option(self.inner)

    def to_text(self, value: Any) -> str:
        if value is None:
            return ""
        return self.inner.to_text(value)

    def encode_indexed(self, enc, value: Any) -> None:
        if value is None:
            enc.append("")
        else:
            self.inner.encode_indexed(enc, value)

    def encode_form(self, enc, key: str, value: Any) -> None:
        if value is None:
            enc.append_pair(key, "")
        else:
            self.inner.encode_form(enc, key, value)


class DefaultToNone(Kind):
    """Field where a sentinel value (usually ``0``) means "not set".

    The sentinel, an empty token and a missing token decode to ``None``;
    ``None`` encodes back to the sentinel.
    """

    optional = True

    def __init__(self, inner: Kind, empty: Any = 0):
        self.inner = inner
        self.empty = empty
        self.name = f"DefaultToNone[{inner.name}]"

    def decode(self, de) -> Any:
        value = de.decode_option(self.inner)
        # False == 0 in Python; only a value of the sentinel's own type counts
        if type(value) is type(self.empty) and value == self.empty:
            return None
        return value

    def to_text(self, value: Any) -> str:
        return self.inner.to_text(self.empty if value is None else value)


class EnumOf(Kind):
    """Scalar enum, stored on the wire as its value."""

    def __init__(self, enum_cls: Type[enum.Enum], inner: Optional[Kind] = None):
        self.enum_cls = enum_cls
        self.inner = inner if inner is not None else I32
        self.name = enum_cls.__name__

    def decode(self, de) -> enum.Enum:
        raw = self.inner.decode(de)
        try:
            return self.enum_cls(raw)
        except ValueError:
            raise DeserializeError(f"unknown variant {raw!r} of {self.name}", value=de.last_token())

    def to_text(self, value: Any) -> str:
        if not isinstance(value, self.enum_cls):
            raise SerializeError(f"expected {self.name}, got {type(value).__name__}")
        return self.inner.to_text(value.value)


class ThunkField(Kind):
    """Raw token kept in a :class:`~robtop.thunk.Thunk` for later processing."""

    thunk = True

    def __init__(self, processor: Type[ThunkProcessor]):
        self.processor = processor
        self.name = f"Thunk[{processor.__name__}]"

    def decode(self, de) -> Thunk:
        return Thunk.unprocessed(self.processor, de.decode_str())

    def to_text(self, value: Any) -> str:
        if not isinstance(value, Thunk):
            raise SerializeError(f"expected Thunk, got {type(value).__name__}")
        try:
            return value.as_unprocessed()
        except ProcessError as e:
            raise SerializeError(str(e)) from e


class Ignore(Kind):
    """Recognized index whose value is not modelled; skips exactly one token."""

    name = "ignore"
    ignored = True

    def decode(self, de) -> None:
        de.ignore()
        return None

    def to_text(self, value: Any) -> str:
        return ""

    def encode_form(self, enc, key: str, value: Any) -> None:
        pass


class Seq(Kind):
    """Run of values of one kind.

    Decodes list-like input until it runs out. In request forms the values
    are comma-joined; the indexed encoder cannot write bare sequences.
    """

    def __init__(self, inner: Kind):
        self.inner = inner
        self.name = f"Seq[{inner.name}]"

    def decode(self, de) -> list:
        return de.decode_seq(self.inner)

    def encode_indexed(self, enc, value: Any) -> None:
        raise SerializeUnsupported("serialize_seq")

    def encode_form(self, enc, key: str, value: Iterable[Any]) -> None:
        if isinstance(self.inner, (Seq, MapOf)):
            raise SerializeUnsupported("nested sequence")
        enc.append_sequence(key, [self.inner.to_text(item) for item in value])


class MapOf(Kind):
    """Arbitrary map-like input decoded to a dict of raw keys (decode only)."""

    def __init__(self, inner: Kind, known_keys: Optional[Iterable[str]] = None):
        self.inner = inner
        self.known_keys = None if known_keys is None else frozenset(known_keys)
        self.name = f"MapOf[{inner.name}]"

    def decode(self, de) -> dict:
        return de.decode_map(self.inner, self.known_keys)

    def encode_indexed(self, enc, value: Any) -> None:
        raise SerializeUnsupported("serialize_map")

    def encode_form(self, enc, key: str, value: Any) -> None:
        raise SerializeUnsupported("serialize_map")


class Struct(Kind):
    """Object described by a schema dataclass.

    Only a top-level struct can be written in the indexed format; request
    forms inline its pairs into the parent's.
    """

    def __init__(self, cls: type):
        self.cls = cls
        self.name = cls.__name__

    def decode(self, de) -> Any:
        return de.decode_struct(schema_of(self.cls))

    def encode_indexed(self, enc, value: Any) -> None:
        enc.encode_struct(value)

    def encode_form(self, enc, key: str, value: Any) -> None:
        enc.encode_struct(value)


I8 = Int(8)
I16 = Int(16)
I32 = Int(32)
I64 = Int(64)
U8 = Int(8, signed=False)
U16 = Int(16, signed=False)
U32 = Int(32, signed=False)
U64 = Int(64, signed=False)
F32 = Float()
F64 = Float()
BOOL = Bool()
TWO_BOOL = TwoBool()
STR = Str()
BYTES = Bytes()
IGNORE = Ignore()
ANY = Kind()
