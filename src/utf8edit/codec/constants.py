"""Leading/continuation byte patterns and reserved scalar values."""

from __future__ import annotations

# Leading byte patterns; ``byte & MASK == PATTERN`` selects the sequence width.
BYTE1 = 0x00
BYTE1_MASK = 0x80
BYTE2 = 0xC0
BYTE2_MASK = 0xE0
BYTE3 = 0xE0
BYTE3_MASK = 0xF0
BYTE4 = 0xF0
BYTE4_MASK = 0xF8

# Continuation byte: 10xxxxxx
BYTE = 0x80
BYTE_MASK = 0xC0

BOM = 0xFEFF
NOT_A_CHARACTER = 0x10FFFF

# (pattern, mask, continuation count) ordered by width.
LEADING_PATTERNS: tuple[tuple[int, int, int], ...] = (
    (BYTE1, BYTE1_MASK, 0),
    (BYTE2, BYTE2_MASK, 1),
    (BYTE3, BYTE3_MASK, 2),
    (BYTE4, BYTE4_MASK, 3),
)

__all__ = [
    "BYTE1",
    "BYTE1_MASK",
    "BYTE2",
    "BYTE2_MASK",
    "BYTE3",
    "BYTE3_MASK",
    "BYTE4",
    "BYTE4_MASK",
    "BYTE",
    "BYTE_MASK",
    "BOM",
    "NOT_A_CHARACTER",
    "LEADING_PATTERNS",
]
