"""Decoder for RobTop's indexed data format.

The format is used in server responses and when storing level data. All
fields of an object are concatenated, separated by a delimiter. There are two
variants:

* **Map-like**: every second token is a key (almost always an integer) telling
  which field the following value belongs to.
* **List-like**: there are no keys, fields are identified by their position.
  The decoder labels them with 1-based ordinals in error messages.

The format is not self-describing: the decoder is always driven by a field
kind or a schema class.
"""

from __future__ import annotations
import base64
import binascii
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from .constants import BOOL_FALSE_TOKENS, BOOL_TRUE_TOKENS
from .errors import DeserializeError, DeserializeUnsupported, UnexpectedEof
from .kinds import STR, Struct
from .schema import Schema, schema_of
from .split import Splitter

log = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class IndexedDecoder:
    """Decoder over a single RobTop-format string.

    Args:
        source: The input string
        delimiter: The delimiter separating the individual fields
        map_like: Whether the input is map-like (keys precede values) or
            list-like
    """

    def __init__(self, source: str, delimiter: str, map_like: bool):
        self.source = source
        self.delimiter = delimiter
        self.map_like = map_like
        self.splitter = Splitter(source, delimiter)
        self._depth = 0

    # Tokens

    def _next_token(self) -> str:
        token = self.splitter.consume()
        if token is None:
            raise UnexpectedEof()
        return token

    def is_eof(self) -> bool:
        return self.splitter.is_eof()

    def last_token(self) -> Optional[str]:
        return self.splitter.nth_last(1)

    # Scalars

    def decode_int(self, minimum: int, maximum: int) -> int:
        token = self._next_token()
        if not token:
            raise DeserializeError("cannot parse integer from empty string", value=token)
        # Unsigned targets reject a minus sign, even in "-0"
        if not _INT_RE.fullmatch(token) or (minimum == 0 and token.startswith("-")):
            raise DeserializeError("invalid digit found in string", value=token)
        value = int(token)
        if value > maximum:
            raise DeserializeError("number too large to fit in target type", value=token)
        if value < minimum:
            raise DeserializeError("number too small to fit in target type", value=token)
        return value

    def decode_float(self) -> float:
        token = self._next_token()
        if not token:
            raise DeserializeError("cannot parse float from empty string", value=token)
        if not _FLOAT_RE.fullmatch(token):
            raise DeserializeError("invalid float literal", value=token)
        return float(token)

    def decode_bool(self) -> bool:
        # RobTop's booleans are inconsistent: false is "0" or the empty string
        # (or a missing trailing field), true is "1", "2" or "10".
        token = self.splitter.consume()
        if token is None or token in BOOL_FALSE_TOKENS:
            return False
        if token in BOOL_TRUE_TOKENS:
            return True
        raise DeserializeError("Expected 0, 1, 2, 10 or the empty string", value=token)

    def decode_str(self) -> str:
        return self._next_token()

    def decode_bytes(self) -> bytes:
        token = self._next_token()
        try:
            return base64.b64decode(token, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as e:
            raise DeserializeError(f"invalid base64: {e}", value=token) from e

    def decode_any(self) -> Any:
        # the data format is by no means self describing
        raise DeserializeUnsupported("deserialize_any")

    def ignore(self) -> None:
        """Skip exactly one token (nothing at EOF)."""
        self.splitter.consume()

    # Aggregates

    def decode_option(self, kind: Any) -> Any:
        """Decode ``kind``, or return None if the next token is empty or absent."""
        token = self.splitter.peek()
        if token is None or token == "":
            self.splitter.consume()
            return None
        return kind.decode(self)

    def decode_seq(self, kind: Any) -> List[Any]:
        """Decode elements of ``kind`` until the input runs out."""
        items: List[Any] = []
        ordinal = 0
        while not self.is_eof():
            ordinal += 1
            try:
                items.append(kind.decode(self))
            except UnexpectedEof:
                break
            except DeserializeUnsupported:
                raise
            except DeserializeError as err:
                raise err.enrich(index=str(ordinal), value=self.last_token())
        return items

    def decode_struct(self, schema: Schema) -> Any:
        """Decode the fields of ``schema`` and build an instance of it."""
        if self._depth:
            raise DeserializeUnsupported("nested struct")
        self._depth += 1
        try:
            if self.map_like:
                values = self._decode_keyed(schema)
            else:
                values = self._decode_positional(schema)
        finally:
            self._depth -= 1
        return schema.build(values)

    def _decode_keyed(self, schema: Schema) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        while True:
            key = self.splitter.consume()
            if key is None:
                return values
            spec = schema.by_key.get(key)
            if spec is None:
                # Unknown or newly added server field, never fatal
                log.debug(f"{schema.name}: ignoring unmapped index {key!r} (value {self.splitter.peek()!r})")
                self.ignore()
                continue
            if spec.name in values:
                raise DeserializeError(f"duplicate field `{key}`", index=key, value=self.splitter.peek())
            try:
                values[spec.name] = spec.kind.decode(self)
            except UnexpectedEof:
                raise DeserializeError("unexpected end of input", index=key)
            except DeserializeUnsupported:
                raise
            except DeserializeError as err:
                raise err.enrich(index=key, value=self.last_token())

    def _decode_positional(self, schema: Schema) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for ordinal, spec in enumerate(schema.fields, start=1):
            try:
                values[spec.name] = spec.kind.decode(self)
            except UnexpectedEof:
                break
            except DeserializeUnsupported:
                raise
            except DeserializeError as err:
                raise err.enrich(index=str(ordinal), value=self.last_token())
        if not self.is_eof():
            log.debug(f"{schema.name}: ignoring trailing data at offset {self.splitter.position}")
        return values

    def decode_map(self, kind: Any, known_keys: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Decode map-like input into a dict of raw keys to values of ``kind``.

        Keys not contained in ``known_keys`` (if given) are logged but kept.
        """
        known = None if known_keys is None else set(known_keys)
        values: Dict[str, Any] = {}
        while True:
            key = self.splitter.consume()
            if key is None:
                return values
            if known is not None and key not in known:
                log.debug(f"Unknown index {key!r} (value {self.splitter.peek()!r})")
            try:
                values[key] = kind.decode(self)
            except UnexpectedEof:
                raise DeserializeError("unexpected end of input", index=key)
            except DeserializeUnsupported:
                raise
            except DeserializeError as err:
                raise err.enrich(index=key, value=self.last_token())


def _as_kind(target: Any) -> Any:
    if isinstance(target, type):
        return Struct(target)
    return target


def decode(text: str, delimiter: str, map_like: bool, target: Any) -> Any:
    """Decode ``text`` into a value of ``target``.

    Args:
        text: RobTop-format input
        delimiter: Field delimiter
        map_like: Whether keys precede values
        target: A field kind or a schema dataclass

    Raises:
        DeserializeError: If the text does not match ``target``
    """
    return _as_kind(target).decode(IndexedDecoder(text, delimiter, map_like))


def from_robtop_str(cls: type, text: str) -> Any:
    """Decode ``text`` into an instance of the schema class ``cls``.

    Uses the delimiter and addressing mode declared with ``robtop_format``.
    """
    schema = schema_of(cls)
    if schema.delimiter is None:
        raise TypeError(f"{cls.__name__} has no robtop_format declaration")
    return IndexedDecoder(text, schema.delimiter, schema.map_like).decode_struct(schema)


def decode_map(text: str, delimiter: str, known_keys: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """Decode arbitrary map-like text into a dict of raw keys to raw values.

    Handy for looking at payloads no schema exists for yet.
    """
    return IndexedDecoder(text, delimiter, True).decode_map(STR, known_keys)
