"""Encoder for RobTop's indexed data format."""

from __future__ import annotations
import io
from typing import Any, Optional, TextIO

from .errors import SerializeEncodingError, SerializeError, SerializeIoError, SerializeUnsupported
from .kinds import Struct
from .schema import schema_of


class IndexedEncoder:
    """Writes values as delimiter-joined tokens onto a text sink.

    Args:
        delimiter: Delimiter put between tokens
        sink: Writable text stream owned by the caller
        map_like: Whether every value is preceded by its key
    """

    def __init__(self, delimiter: str, sink: TextIO, map_like: bool):
        self.delimiter = delimiter
        self.sink = sink
        self.map_like = map_like
        # A writer-is-empty check cannot replace this flag: a list-like
        # object may start with an empty (None) field, which still needs
        # the delimiter after it.
        self._is_start = True
        self._depth = 0

    def append(self, token: str) -> None:
        """Write one token, preceded by the delimiter unless it is the first."""
        try:
            if self._is_start:
                self._is_start = False
            else:
                self.sink.write(self.delimiter)
            self.sink.write(token)
        except OSError as e:
            raise SerializeIoError(e) from e

    def encode(self, kind: Any, value: Any) -> None:
        kind.encode_indexed(self, value)

    def encode_struct(self, obj: Any) -> None:
        """Write every field of a schema instance in declared order.

        Raises:
            SerializeUnsupported: If a field is itself a struct; the decoder
                could not read it back
        """
        if self._depth:
            raise SerializeUnsupported("nested struct")
        self._depth += 1
        try:
            self._encode_fields(schema_of(type(obj)), obj)
        finally:
            self._depth -= 1

    def _encode_fields(self, schema: Any, obj: Any) -> None:
        for spec in schema.fields:
            if spec.kind.ignored and self.map_like:
                continue
            value = getattr(obj, spec.name)
            try:
                if self.map_like:
                    self.append(spec.key)
                spec.kind.encode_indexed(self, value)
            except SerializeIoError:
                raise
            except SerializeError as err:
                if err.field is None:
                    err.field = spec.key
                raise


def _kind_of(value: Any, kind: Any) -> Any:
    if kind is not None:
        return kind
    if not hasattr(type(value), "__dataclass_fields__"):
        raise SerializeUnsupported(f"serialize_{type(value).__name__} without a kind")
    return Struct(type(value))


def encode(value: Any, delimiter: str, map_like: bool, sink: TextIO, kind: Any = None) -> None:
    """Write ``value`` to ``sink`` in the indexed format.

    Args:
        value: Schema instance, or any value if ``kind`` is given
        delimiter: Field delimiter
        map_like: Whether keys precede values
        sink: Writable text stream; holds a truncated prefix if this fails
        kind: Field kind of ``value``; defaults to the value's schema

    Raises:
        SerializeError: If the value cannot be written
    """
    IndexedEncoder(delimiter, sink, map_like).encode(_kind_of(value, kind), value)


def _declared_format(obj: Any):
    schema = schema_of(type(obj))
    if schema.delimiter is None:
        raise TypeError(f"{schema.name} has no robtop_format declaration")
    return schema


def write_robtop_data(obj: Any, sink: TextIO) -> None:
    """Write a schema instance using its declared delimiter and addressing mode."""
    schema = _declared_format(obj)
    IndexedEncoder(schema.delimiter, sink, schema.map_like).encode_struct(obj)


def to_robtop_string(obj: Any, sink: Optional[io.StringIO] = None) -> str:
    """Serialize a schema instance to a string in its declared format."""
    buf = sink if sink is not None else io.StringIO()
    write_robtop_data(obj, buf)
    return buf.getvalue()


def to_robtop_bytes(obj: Any, encoding: str = "utf-8") -> bytes:
    """Serialize a schema instance and encode the result.

    Raises:
        SerializeEncodingError: If the text cannot be encoded
    """
    text = to_robtop_string(obj)
    try:
        return text.encode(encoding)
    except UnicodeEncodeError as e:
        raise SerializeEncodingError(e) from e
