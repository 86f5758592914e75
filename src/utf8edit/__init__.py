"""UTF-8 codec and character-indexed editing over byte buffers."""

from .codec import (
    BOM,
    BYTE,
    BYTE1,
    BYTE1_MASK,
    BYTE2,
    BYTE2_MASK,
    BYTE3,
    BYTE3_MASK,
    BYTE4,
    BYTE4_MASK,
    BYTE_MASK,
    NOT_A_CHARACTER,
    DecodeStep,
    StringDecoder,
    Utf8DecodeError,
    decode,
    encode,
    encode_string,
    iter_steps,
    length,
    validate,
)
from .view import IndexValidationError, StringView, byte_span

__all__ = [
    "BOM",
    "BYTE",
    "BYTE1",
    "BYTE1_MASK",
    "BYTE2",
    "BYTE2_MASK",
    "BYTE3",
    "BYTE3_MASK",
    "BYTE4",
    "BYTE4_MASK",
    "BYTE_MASK",
    "NOT_A_CHARACTER",
    "DecodeStep",
    "IndexValidationError",
    "StringDecoder",
    "StringView",
    "Utf8DecodeError",
    "byte_span",
    "decode",
    "encode",
    "encode_string",
    "iter_steps",
    "length",
    "validate",
]

__version__ = "0.1.0"
