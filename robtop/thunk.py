"""Lazily processed field values.

A Thunk holds either the raw text a field was decoded from or the result of
processing that text. Processing (percent decoding, base64 decoding, ...) is
only done when the caller asks for it, and re-encoding an untouched Thunk
writes the raw text back verbatim.
"""

from __future__ import annotations
import base64
import binascii
from typing import Any, Generic, Optional, Type, TypeVar
from urllib.parse import quote, unquote

from .constants import PERCENT_SAFE_CHARS
from .errors import ProcessError

T = TypeVar("T")

_UNSET = object()


class ThunkProcessor:
    """Pair of transforms between a field's raw text and its processed value.

    Subclasses implement both as static methods. They must be pure:
    ``from_unprocessed(as_unprocessed(x)) == x`` for every valid ``x``.
    """

    @staticmethod
    def from_unprocessed(unprocessed: str) -> Any:
        raise NotImplementedError

    @staticmethod
    def as_unprocessed(processed: Any) -> str:
        raise NotImplementedError


class Thunk(Generic[T]):
    """Field value whose processing has been deferred.

    Use :meth:`unprocessed` / :meth:`processed` to construct one.
    """

    __slots__ = ("processor", "_raw", "_value")

    def __init__(self, processor: Type[ThunkProcessor], raw: Optional[str] = None, value: Any = _UNSET):
        if (raw is None) == (value is _UNSET):
            raise ValueError("a Thunk is either unprocessed or processed")
        self.processor = processor
        self._raw = raw
        self._value = value

    @classmethod
    def unprocessed(cls, processor: Type[ThunkProcessor], raw: str) -> "Thunk":
        return cls(processor, raw=raw)

    @classmethod
    def processed(cls, processor: Type[ThunkProcessor], value: T) -> "Thunk[T]":
        return cls(processor, value=value)

    @property
    def is_processed(self) -> bool:
        return self._value is not _UNSET

    @property
    def raw(self) -> Optional[str]:
        """Captured raw text, ``None`` once processed."""
        return self._raw

    @property
    def value(self) -> T:
        """Processed value.

        Raises:
            ValueError: If the thunk has not been processed yet
        """
        if self._value is _UNSET:
            raise ValueError("Thunk has not been processed")
        return self._value

    def set(self, value: T) -> None:
        """Replace the content with an already processed value."""
        self._raw = None
        self._value = value

    def process(self) -> T:
        """Process the raw text if needed and return the processed value.

        Idempotent: once processed, the stored value is returned as is.

        Raises:
            ProcessError: If the processor rejects the raw text. The thunk
                stays unprocessed in that case.
        """
        if self._value is _UNSET:
            self._value = self.processor.from_unprocessed(self._raw)
            self._raw = None
        return self._value

    def into_processed(self) -> T:
        """Return the processed value without storing it in the thunk."""
        if self._value is _UNSET:
            return self.processor.from_unprocessed(self._raw)
        return self._value

    def as_unprocessed(self) -> str:
        """Wire text of this thunk.

        The captured text if unprocessed, otherwise the processor's reverse
        transform of the current value.
        """
        if self._value is _UNSET:
            return self._raw
        return self.processor.as_unprocessed(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Thunk):
            return NotImplemented
        if self.is_processed != other.is_processed:
            return False
        if self.is_processed:
            return self._value == other._value
        return self._raw == other._raw

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return f"Thunk.unprocessed({self.processor.__name__}, {self._raw!r})"
        return f"Thunk.processed({self.processor.__name__}, {self._value!r})"


class PercentDecoder(ThunkProcessor):
    """Percent-encoded text, as used for song download links."""

    @staticmethod
    def from_unprocessed(unprocessed: str) -> str:
        try:
            return unquote(unprocessed, errors="strict")
        except UnicodeDecodeError as e:
            raise ProcessError(ProcessError.UTF8, str(e)) from e

    @staticmethod
    def as_unprocessed(processed: str) -> str:
        # quote() never escapes '~', RobTop does
        return quote(processed, safe=PERCENT_SAFE_CHARS).replace("~", "%7E")


class Base64Decoder(ThunkProcessor):
    """URL-safe base64 encoded UTF-8 text, as used for descriptions and comments."""

    @staticmethod
    def from_unprocessed(unprocessed: str) -> str:
        try:
            decoded = base64.b64decode(unprocessed, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as e:
            raise ProcessError(ProcessError.BASE64, str(e)) from e
        try:
            return decoded.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProcessError(ProcessError.UTF8, str(e)) from e

    @staticmethod
    def as_unprocessed(processed: str) -> str:
        return base64.urlsafe_b64encode(processed.encode("utf-8")).decode("ascii")
