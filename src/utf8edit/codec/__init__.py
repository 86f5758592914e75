"""UTF-8 encoder, decoding cursor and bulk helpers."""

from .constants import (
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
)
from .decoder import (
    DecodeStep,
    StringDecoder,
    Utf8DecodeError,
    as_bytes,
    decode,
    iter_steps,
    length,
    validate,
)
from .encoder import encode, encode_string

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
    "StringDecoder",
    "Utf8DecodeError",
    "as_bytes",
    "decode",
    "encode",
    "encode_string",
    "iter_steps",
    "length",
    "validate",
]
