"""Error types raised while (de)serializing RobTop's data formats."""

from __future__ import annotations
from typing import Optional


class RobtopError(Exception):
    """Base class of every error raised by this package."""
    pass


# Deserialization

class DeserializeError(RobtopError):
    """Some value did not match the shape expected at its position.

    Errors are created with whatever context is available at the point of
    failure and enriched while they propagate through the enclosing structs
    and sequences.

    Attributes:
        message: What went wrong
        index: Key (map-like) or ordinal (list-like) of the offending field,
            ``None`` if no index was available (e.g. while parsing the key)
        value: Raw token that caused the error, ``None`` if the error is not
            related to a single token
    """

    def __init__(self, message: str, index: Optional[str] = None, value: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.index = index
        self.value = value

    def enrich(self, index: Optional[str] = None, value: Optional[str] = None) -> "DeserializeError":
        """Fill in index and value where they are still unknown.

        Returns:
            The error itself, so it can be re-raised directly
        """
        if self.index is None:
            self.index = index
        if self.value is None:
            self.value = value
        return self

    def __str__(self) -> str:
        return f"{self.value!r} at index {self.index!r} caused {self.message}"


class UnexpectedEof(DeserializeError):
    """All input was consumed while more data was expected.

    Optional values, sequences and structs treat this as a terminator; it only
    reaches the caller if a required scalar ran out of input.
    """

    def __init__(self):
        super().__init__("Unexpected EOF while parsing")

    def __str__(self) -> str:
        return self.message


class DeserializeUnsupported(DeserializeError):
    """A decode operation the format cannot express was requested."""

    def __init__(self, operation: str):
        super().__init__(f"unsupported deserializer function: {operation}")
        self.operation = operation

    def __str__(self) -> str:
        return self.message


# Serialization

class SerializeError(RobtopError):
    """A value could not be serialized.

    Attributes:
        message: What went wrong
        field: Key of the field being written when the error occurred
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.message} (field {self.field!r})"


class SerializeUnsupported(SerializeError):
    """A value the wire grammar cannot express was passed to an encoder."""

    def __init__(self, operation: str):
        super().__init__(f"unsupported serializer function: {operation}")
        self.operation = operation


class SerializeIoError(SerializeError):
    """Writing to the output sink failed."""

    def __init__(self, error: OSError):
        super().__init__(f"io error: {error}")
        self.error = error


class SerializeEncodingError(SerializeError):
    """Serialized text could not be encoded to bytes."""

    def __init__(self, error: UnicodeError):
        super().__init__(f"text encoding error: {error}")
        self.error = error


# Thunk processing

class ProcessError(RobtopError):
    """Processing a Thunk failed.

    Kept apart from DeserializeError: processing happens after decoding,
    on the caller's request, and never has a field index.

    Attributes:
        kind: ``"utf8"``, ``"base64"`` or ``"int"``
    """

    UTF8 = "utf8"
    BASE64 = "base64"
    INT = "int"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"
