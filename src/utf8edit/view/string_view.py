"""Character-indexed view over a caller-owned UTF-8 ``bytearray``."""

from __future__ import annotations

from typing import ContextManager, Optional, Union

from utf8edit.codec.decoder import BytesLike, StringDecoder, as_bytes, decode
from utf8edit.codec.decoder import length as char_length
from utf8edit.runtime import telemetry

from .validation import ensure_fill_byte, ensure_index, ensure_span


def byte_span(
    data: BytesLike | str, pos: int, count: Optional[int] = None
) -> tuple[int, int]:
    """Return the byte range covering ``count`` characters starting at ``pos``.

    Both walks stop at the end of ``data``, so out-of-range arguments shrink
    the span instead of failing. ``count=None`` extends it to the end.
    """

    ensure_index("pos", pos)
    ensure_span("count", count)
    decoder = StringDecoder(data)
    decoder.advance(pos)
    start = decoder.position
    decoder.advance(count)
    return start, decoder.position


class StringView:
    """Edit a UTF-8 ``bytearray`` in place, addressing it by character index.

    The view does not copy ``ref``; every operation re-walks it from byte
    zero. Mutators return the view so calls can be chained::

        StringView(buf).erase(0, 1).insert(2, "é")
    """

    __slots__ = ("ref", "name")

    def __init__(self, ref: bytearray, *, name: str = "default") -> None:
        if not isinstance(ref, bytearray):
            raise TypeError(
                f"StringView edits a bytearray in place, got {type(ref).__name__}"
            )
        self.ref = ref
        self.name = name

    def length(self) -> int:
        return char_length(self.ref)

    def __len__(self) -> int:
        return self.length()

    def decode(self) -> list[int]:
        return decode(self.ref)

    def byte_offset(self, pos: int) -> int:
        return byte_span(self.ref, pos, 0)[0]

    def erase(self, pos: int, length: Optional[int] = None) -> "StringView":
        with self._edit("erase", pos=pos, len=length):
            start, end = byte_span(self.ref, pos, length)
            del self.ref[start:end]
        return self

    def insert(
        self,
        pos: int,
        source: Union[BytesLike, str, "StringView"],
        subpos: int = 0,
        sublen: Optional[int] = None,
    ) -> "StringView":
        """Insert characters ``[subpos, subpos + sublen)`` of ``source`` at ``pos``.

        The sub-range is located by decoding ``source``; the bytes it spans are
        then copied verbatim.
        """

        with self._edit("insert", pos=pos, subpos=subpos, sublen=sublen):
            self._insert_raw(pos, _source_chunk(source, subpos, sublen))
        return self

    def insert_bytes(
        self, pos: int, data: BytesLike | str, n: Optional[int] = None
    ) -> "StringView":
        """Insert the first ``n`` bytes of ``data`` (all when ``None``) at ``pos``."""

        with self._edit("insert_bytes", pos=pos, n=n):
            self._insert_raw(pos, _raw_chunk(data, n))
        return self

    def insert_fill(
        self, pos: int, count: int, byte: int | bytes | str
    ) -> "StringView":
        with self._edit("insert_fill", pos=pos, count=count):
            self._insert_raw(pos, _fill_chunk(count, byte))
        return self

    def replace(
        self,
        pos: int,
        length: Optional[int],
        source: Union[BytesLike, str, "StringView"],
        subpos: int = 0,
        sublen: Optional[int] = None,
    ) -> "StringView":
        """Erase ``length`` characters at ``pos``, then insert there.

        The source sub-range is resolved before anything is erased, so a
        rejected argument leaves ``ref`` untouched.
        """

        with self._edit("replace", pos=pos, len=length, subpos=subpos, sublen=sublen):
            self._replace_raw(pos, length, _source_chunk(source, subpos, sublen))
        return self

    def replace_bytes(
        self,
        pos: int,
        length: Optional[int],
        data: BytesLike | str,
        n: Optional[int] = None,
    ) -> "StringView":
        with self._edit("replace_bytes", pos=pos, len=length, n=n):
            self._replace_raw(pos, length, _raw_chunk(data, n))
        return self

    def replace_fill(
        self, pos: int, length: Optional[int], count: int, byte: int | bytes | str
    ) -> "StringView":
        with self._edit("replace_fill", pos=pos, len=length, count=count):
            self._replace_raw(pos, length, _fill_chunk(count, byte))
        return self

    def _insert_raw(self, pos: int, chunk: bytes) -> None:
        offset = self.byte_offset(pos)
        self.ref[offset:offset] = chunk

    def _replace_raw(self, pos: int, length: Optional[int], chunk: bytes) -> None:
        ensure_index("pos", pos)
        ensure_span("len", length)
        self.erase(pos, length)
        self._insert_raw(pos, chunk)

    def _edit(self, label: str, **metadata: object) -> ContextManager[object]:
        return telemetry.span(
            f"view::{label}",
            component="view",
            metadata={"view": self.name, **metadata},
        )

    def __repr__(self) -> str:
        return f"StringView(name={self.name!r}, bytes={len(self.ref)})"


def _source_chunk(
    source: Union[BytesLike, str, StringView], subpos: int, sublen: Optional[int]
) -> bytes:
    ensure_index("subpos", subpos)
    ensure_span("sublen", sublen)
    raw = source.ref if isinstance(source, StringView) else as_bytes(source)
    start, end = byte_span(raw, subpos, sublen)
    return bytes(raw[start:end])


def _raw_chunk(data: BytesLike | str, n: Optional[int]) -> bytes:
    raw = as_bytes(data)
    count = len(raw) if n is None else ensure_index("n", n)
    return bytes(raw[:count])


def _fill_chunk(count: int, byte: int | bytes | str) -> bytes:
    ensure_index("count", count)
    return bytes((ensure_fill_byte(byte),)) * count


__all__ = ["StringView", "byte_span"]
