"""Argument checks shared by the editing view."""

from __future__ import annotations

from typing import Optional


class IndexValidationError(ValueError):
    """Raised when a character index or length is negative."""

    def __init__(self, message: str, *, name: str, value: int) -> None:
        super().__init__(message)
        self.name = name
        self.value = value


def ensure_index(name: str, value: int) -> int:
    if value < 0:
        raise IndexValidationError(
            f"{name} must be a non-negative character index, got {value}",
            name=name,
            value=value,
        )
    return value


def ensure_span(name: str, value: Optional[int]) -> Optional[int]:
    """Like :func:`ensure_index`; ``None`` means "through the end"."""

    if value is None:
        return None
    return ensure_index(name, value)


def ensure_fill_byte(byte: int | bytes | str) -> int:
    if isinstance(byte, int):
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"fill byte must be in range 0..255, got {byte}")
        return byte
    raw = byte.encode("latin-1") if isinstance(byte, str) else bytes(byte)
    if len(raw) != 1:
        raise ValueError(f"fill byte must be a single byte, got {byte!r}")
    return raw[0]
