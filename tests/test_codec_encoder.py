from __future__ import annotations

import pytest

from utf8edit import BOM, NOT_A_CHARACTER, encode, encode_string


@pytest.mark.parametrize(
    ("scalar", "expected"),
    [
        (0x41, b"\x41"),
        (0xE9, b"\xc3\xa9"),
        (0x20AC, b"\xe2\x82\xac"),
        (0x1F600, b"\xf0\x9f\x98\x80"),
    ],
)
def test_encode_selects_width_by_range(scalar: int, expected: bytes) -> None:
    assert encode(scalar) == expected


def test_encode_matches_python_codec_at_width_boundaries() -> None:
    for scalar in (0x00, 0x7F, 0x80, 0x7FF, 0x800, 0xFFFD, 0xFFFF, 0x10000, 0x10FFFE):
        assert encode(scalar) == chr(scalar).encode("utf-8")


def test_encode_clamps_values_above_max() -> None:
    assert encode(0x110000) == encode(NOT_A_CHARACTER) == b"\xf4\x8f\xbf\xbf"
    assert encode(0xFFFFFFFF) == b"\xf4\x8f\xbf\xbf"


def test_encode_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        encode(-1)


def test_encode_string_concatenates_without_bom() -> None:
    assert encode_string([0x63, 0x61, 0x66, 0xE9]) == "café".encode("utf-8")
    assert encode_string([]) == b""


def test_bom_is_prepended_only_on_request() -> None:
    encoded = encode_string([BOM, 0x41])

    assert encoded == b"\xef\xbb\xbfA"
