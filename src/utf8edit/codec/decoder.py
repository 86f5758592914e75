"""Forward-only UTF-8 decoding cursor and bulk helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from utf8edit.runtime import telemetry

from .constants import BYTE, BYTE_MASK, LEADING_PATTERNS, NOT_A_CHARACTER
from .encoder import encode_string

BytesLike = Union[bytes, bytearray, memoryview]
Source = Union[BytesLike, str]

_PAYLOAD = ~BYTE_MASK & 0xFF
# Smallest value that needs a sequence of the given width.
_MINIMUM_FOR_WIDTH = {1: 0x00, 2: 0x80, 3: 0x800, 4: 0x10000}


def as_bytes(source: Source) -> BytesLike:
    """Return ``source`` as a bytes-like object, encoding ``str`` input."""

    if isinstance(source, str):
        return encode_string(ord(char) for char in source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return source
    raise TypeError(f"expected bytes-like or str, got {type(source).__name__}")


@dataclass(frozen=True, slots=True)
class DecodeStep:
    """Outcome of decoding one unit starting at ``offset``.

    ``consumed`` is the number of bytes the cursor moved past. For invalid
    units ``value`` is ``NOT_A_CHARACTER``, except in strict mode where it
    holds the rejected (overlong, surrogate or out of range) value.
    """

    offset: int
    consumed: int
    value: int
    valid: bool = True

    @property
    def scalar(self) -> int:
        return self.value if self.valid else NOT_A_CHARACTER


class Utf8DecodeError(ValueError):
    """Raised by :func:`validate` at the first malformed unit."""

    def __init__(self, step: DecodeStep) -> None:
        super().__init__(
            f"invalid UTF-8 at byte {step.offset} ({step.consumed} byte(s) consumed)"
        )
        self.offset = step.offset
        self.consumed = step.consumed
        self.value = step.value


def _invalid(offset: int, consumed: int) -> DecodeStep:
    return DecodeStep(offset, consumed, NOT_A_CHARACTER, valid=False)


def _is_canonical(value: int, width: int) -> bool:
    if value < _MINIMUM_FOR_WIDTH[width]:
        return False
    if 0xD800 <= value <= 0xDFFF:
        return False
    return value <= NOT_A_CHARACTER


class StringDecoder:
    """Cursor producing one scalar value per :meth:`next` call.

    The cursor reads ``data[begin:end]`` in place and never moves backwards.
    Malformed input yields ``NOT_A_CHARACTER`` and resynchronizes right after
    the bytes examined for that attempt. Overlong encodings decode like any
    other sequence unless ``strict`` is set.
    """

    __slots__ = ("_data", "_position", "_end", "strict")

    def __init__(
        self,
        data: Source,
        begin: int = 0,
        end: Optional[int] = None,
        *,
        strict: bool = False,
    ) -> None:
        self._data = as_bytes(data)
        size = len(self._data)
        if begin < 0 or (end is not None and end < 0):
            raise ValueError("begin and end must be non-negative")
        self._end = size if end is None else min(end, size)
        self._position = min(begin, self._end)
        self.strict = strict

    @property
    def position(self) -> int:
        return self._position

    @property
    def end(self) -> int:
        return self._end

    def has_more(self) -> bool:
        return self._position < self._end

    def __bool__(self) -> bool:
        return self.has_more()

    def __iter__(self) -> Iterator[int]:
        while self.has_more():
            yield self.next()

    def next(self) -> int:
        """Decode the next scalar, or return ``NOT_A_CHARACTER``."""

        step = self.step()
        return NOT_A_CHARACTER if step is None else step.scalar

    def step(self) -> Optional[DecodeStep]:
        """Decode the next unit as a tagged result; ``None`` at end of input."""

        if self._position >= self._end:
            return None

        data = self._data
        start = self._position
        lead = data[start]
        self._position += 1

        for pattern, mask, count in LEADING_PATTERNS:
            if lead & mask == pattern:
                break
        else:
            return _invalid(start, 1)

        value = lead & ~mask & 0xFF
        for index in range(count):
            cursor = self._position + index
            if cursor >= self._end:
                self._position = self._end
                return _invalid(start, self._end - start)
            byte = data[cursor]
            if byte & BYTE_MASK != BYTE:
                self._position = cursor + 1
                return _invalid(start, cursor + 1 - start)
            value = (value << 6) | (byte & _PAYLOAD)

        self._position += count
        width = count + 1
        if self.strict and not _is_canonical(value, width):
            return DecodeStep(start, width, value, valid=False)
        return DecodeStep(start, width, value)

    def advance(self, count: Optional[int]) -> int:
        """Skip up to ``count`` characters (all when ``None``); return how many."""

        skipped = 0
        while self.has_more() and (count is None or skipped < count):
            self.step()
            skipped += 1
        return skipped

    def __repr__(self) -> str:
        return (
            f"StringDecoder(position={self._position}, end={self._end}, "
            f"strict={self.strict})"
        )


def iter_steps(data: Source, *, strict: bool = False) -> Iterator[DecodeStep]:
    decoder = StringDecoder(data, strict=strict)
    while True:
        step = decoder.step()
        if step is None:
            return
        yield step


def decode(data: Source, *, strict: bool = False) -> list[int]:
    """Decode every unit of ``data``; invalid units become ``NOT_A_CHARACTER``."""

    decoded: list[int] = []
    invalid = 0
    for step in iter_steps(data, strict=strict):
        if not step.valid:
            invalid += 1
        decoded.append(step.scalar)
    if invalid:
        telemetry.record_event(
            "codec::decode_invalid",
            level="debug",
            data={"invalid_units": invalid, "characters": len(decoded)},
        )
    return decoded


def length(data: Source) -> int:
    """Count characters in ``data``; each invalid unit counts as one."""

    return StringDecoder(data).advance(None)


def validate(data: Source, *, strict: bool = False) -> int:
    """Return the character count of ``data`` or raise :class:`Utf8DecodeError`."""

    count = 0
    for step in iter_steps(data, strict=strict):
        if not step.valid:
            raise Utf8DecodeError(step)
        count += 1
    return count


__all__ = [
    "BytesLike",
    "DecodeStep",
    "Source",
    "StringDecoder",
    "Utf8DecodeError",
    "as_bytes",
    "decode",
    "iter_steps",
    "length",
    "validate",
]
