"""Codec for RobTop's indexed data format and request forms."""

# Public API exports
from .de import IndexedDecoder, decode, decode_map, from_robtop_str
from .ser import IndexedEncoder, encode, write_robtop_data, to_robtop_string, to_robtop_bytes
from .form import FormEncoder, encode_form, to_form_string
from .split import Splitter
from .schema import robtop_field, robtop_format, schema_of, Schema, FieldSpec
from .thunk import Thunk, ThunkProcessor, PercentDecoder, Base64Decoder
from .util import cyclic_xor
from .errors import (
    RobtopError,
    DeserializeError,
    UnexpectedEof,
    DeserializeUnsupported,
    SerializeError,
    SerializeUnsupported,
    SerializeIoError,
    SerializeEncodingError,
    ProcessError,
)
from .constants import PARENTHESIZED_FIELDS

__all__ = [
    # Decoding
    "IndexedDecoder",
    "decode",
    "decode_map",
    "from_robtop_str",

    # Encoding
    "IndexedEncoder",
    "encode",
    "write_robtop_data",
    "to_robtop_string",
    "to_robtop_bytes",
    "FormEncoder",
    "encode_form",
    "to_form_string",

    # Tokenizer
    "Splitter",

    # Schemas
    "robtop_field",
    "robtop_format",
    "schema_of",
    "Schema",
    "FieldSpec",

    # Thunks
    "Thunk",
    "ThunkProcessor",
    "PercentDecoder",
    "Base64Decoder",

    # Utilities
    "cyclic_xor",

    # Errors
    "RobtopError",
    "DeserializeError",
    "UnexpectedEof",
    "DeserializeUnsupported",
    "SerializeError",
    "SerializeUnsupported",
    "SerializeIoError",
    "SerializeEncodingError",
    "ProcessError",

    # Constants
    "PARENTHESIZED_FIELDS",
]
