"""Scalar value to UTF-8 encoding."""

from __future__ import annotations

from typing import Iterable

from .constants import BYTE, BYTE2, BYTE3, BYTE4, BYTE_MASK, NOT_A_CHARACTER

_PAYLOAD = ~BYTE_MASK & 0xFF


def _continuation(value: int, shift: int) -> int:
    return ((value >> shift) & _PAYLOAD) | BYTE


def encode(scalar: int) -> bytes:
    """Encode one scalar value.

    Values above ``NOT_A_CHARACTER`` are clamped to it rather than rejected.
    Surrogates are encoded like any other 3-byte value.
    """

    if scalar < 0:
        raise ValueError(f"scalar values are non-negative, got {scalar}")
    if scalar > NOT_A_CHARACTER:
        scalar = NOT_A_CHARACTER

    if scalar <= 0x7F:
        return bytes((scalar,))
    if scalar <= 0x07FF:
        return bytes(((scalar >> 6) | BYTE2, _continuation(scalar, 0)))
    if scalar <= 0xFFFF:
        return bytes(
            (
                (scalar >> 12) | BYTE3,
                _continuation(scalar, 6),
                _continuation(scalar, 0),
            )
        )
    return bytes(
        (
            (scalar >> 18) | BYTE4,
            _continuation(scalar, 12),
            _continuation(scalar, 6),
            _continuation(scalar, 0),
        )
    )


def encode_string(scalars: Iterable[int]) -> bytes:
    """Concatenate the encodings of ``scalars``; no BOM is added."""

    encoded = bytearray()
    for scalar in scalars:
        encoded += encode(scalar)
    return bytes(encoded)


__all__ = ["encode", "encode_string"]
