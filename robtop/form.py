"""Encoder for the form bodies of requests to RobTop's servers.

Requests use a variation of ``application/x-www-form-urlencoded``: ``key=value``
pairs joined by ``&``, where

* fields holding a struct are inlined into the parent's pairs,
* sequences are comma-joined, ``-`` when empty, and a few legacy fields are
  additionally wrapped in parentheses (``completedLevels=(1,2,3)``),
* ``None`` is written as ``key=``.
"""

from __future__ import annotations
import io
from typing import Any, Iterable, List, Optional, TextIO
from urllib.parse import quote_plus

from .constants import (
    FORM_EMPTY_SEQUENCE,
    FORM_KEY_VALUE_SEPARATOR,
    FORM_PAIR_SEPARATOR,
    FORM_SEQUENCE_SEPARATOR,
    PARENTHESIZED_FIELDS,
)
from .errors import SerializeError, SerializeIoError, SerializeUnsupported
from .schema import schema_of


def escape(text: str) -> str:
    """Form-escape a single value.

    Alphanumerics and ``*-._`` stay literal, space becomes ``+``, everything
    else is percent encoded (``~`` included).
    """
    return quote_plus(text, safe="*").replace("~", "%7E")


class FormEncoder:
    """Writes request structs as ``&``-joined ``key=value`` pairs.

    Args:
        sink: Writable text stream owned by the caller
        parenthesized: Names of sequence fields wrapped in parentheses
    """

    def __init__(self, sink: TextIO, parenthesized: Iterable[str] = PARENTHESIZED_FIELDS):
        self.sink = sink
        self.parenthesized = frozenset(parenthesized)
        # Shared by inlined structs so no pair starts with a spurious '&'
        self._is_first = True

    def _write_pair(self, key: str, text: str) -> None:
        try:
            if self._is_first:
                self._is_first = False
            else:
                self.sink.write(FORM_PAIR_SEPARATOR)
            self.sink.write(key)
            self.sink.write(FORM_KEY_VALUE_SEPARATOR)
            self.sink.write(text)
        except OSError as e:
            raise SerializeIoError(e) from e

    def append_pair(self, key: str, value: str) -> None:
        self._write_pair(key, escape(value))

    def append_sequence(self, key: str, values: List[str]) -> None:
        if not values:
            self._write_pair(key, FORM_EMPTY_SEQUENCE)
            return
        joined = FORM_SEQUENCE_SEPARATOR.join(escape(v) for v in values)
        if key in self.parenthesized:
            joined = f"({joined})"
        self._write_pair(key, joined)

    def encode_struct(self, obj: Any) -> None:
        """Write (or inline) every field of a request struct in declared order."""
        if not hasattr(type(obj), "__dataclass_fields__"):
            raise SerializeUnsupported(f"serialize_{type(obj).__name__}")
        schema = schema_of(type(obj))
        for spec in schema.fields:
            value = getattr(obj, spec.name)
            if spec.omit_if is not None and spec.omit_if(value):
                continue
            try:
                spec.kind.encode_form(self, spec.key, value)
            except SerializeIoError:
                raise
            except SerializeError as err:
                if err.field is None:
                    err.field = spec.key
                raise


def encode_form(value: Any, sink: TextIO, parenthesized: Iterable[str] = PARENTHESIZED_FIELDS) -> None:
    """Write a request struct to ``sink`` as a form body.

    Raises:
        SerializeError: If the struct contains values the form grammar
            cannot express (nested sequences, maps, bytes)
    """
    FormEncoder(sink, parenthesized).encode_struct(value)


def to_form_string(value: Any, parenthesized: Optional[Iterable[str]] = None) -> str:
    """Serialize a request struct to a form body string."""
    buf = io.StringIO()
    encode_form(value, buf, PARENTHESIZED_FIELDS if parenthesized is None else parenthesized)
    return buf.getvalue()
