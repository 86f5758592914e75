from __future__ import annotations

import pytest

from utf8edit import (
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
from utf8edit.runtime import telemetry

SAMPLE = "héllo wörld € 😀 \u0000\u07ff\u0800\U0010fffe"


def test_round_trip_for_valid_scalars() -> None:
    scalars = [ord(char) for char in SAMPLE]

    assert decode(encode_string(scalars)) == scalars


def test_round_trip_across_scalar_range() -> None:
    boundaries = [0x7F, 0x80, 0x7FF, 0x800, 0xFFFF, 0x10000, 0x10FFFE]
    scalars = list(range(0, NOT_A_CHARACTER, 0x3F)) + boundaries

    assert decode(encode_string(scalars)) == scalars
    for scalar in boundaries:
        assert decode(encode(scalar)) == [scalar]


def test_length_agrees_with_decode() -> None:
    data = SAMPLE.encode("utf-8")

    assert length(data) == len(decode(data)) == len(SAMPLE)


def test_truncated_sequence_consumes_rest_of_buffer() -> None:
    decoder = StringDecoder(b"\xe2\x82")

    assert decoder.next() == NOT_A_CHARACTER
    assert decoder.position == 2
    assert not decoder
    assert decode(b"\xe2\x82") == [NOT_A_CHARACTER]


def test_lone_continuation_byte_resyncs_after_one_byte() -> None:
    steps = list(iter_steps(b"\x80\x41"))

    assert steps == [
        DecodeStep(0, 1, NOT_A_CHARACTER, valid=False),
        DecodeStep(1, 1, 0x41),
    ]
    assert decode(b"\x80\x41") == [NOT_A_CHARACTER, 0x41]


def test_bad_continuation_is_consumed_with_the_attempt() -> None:
    assert decode(b"\xc3\x41\x42") == [NOT_A_CHARACTER, 0x42]

    decoder = StringDecoder(b"\xf0\x9f\x41Z")
    step = decoder.step()
    assert step is not None
    assert (step.offset, step.consumed, step.valid) == (0, 3, False)
    assert decoder.next() == ord("Z")


def test_invalid_leading_byte() -> None:
    assert decode(b"\xff\xf8a") == [NOT_A_CHARACTER, NOT_A_CHARACTER, ord("a")]


def test_next_at_end_does_not_advance() -> None:
    decoder = StringDecoder(b"a")
    decoder.next()

    assert decoder.next() == NOT_A_CHARACTER
    assert decoder.step() is None
    assert decoder.position == decoder.end == 1


def test_every_byte_value_terminates() -> None:
    data = bytes(range(256)) * 2

    decoded = decode(data)

    assert len(decoded) == length(data)
    assert 0 < len(decoded) <= len(data)


def test_overlong_encoding_accepted_by_default() -> None:
    assert decode(b"\xc1\x81") == [0x41]


def test_strict_mode_rejects_overlong_surrogate_and_out_of_range() -> None:
    assert decode(b"\xc1\x81", strict=True) == [NOT_A_CHARACTER]
    assert decode(b"\xed\xa0\x80") == [0xD800]
    assert decode(b"\xed\xa0\x80", strict=True) == [NOT_A_CHARACTER]
    assert decode(b"\xf5\x80\x80\x80") == [0x140000]
    assert decode(b"\xf5\x80\x80\x80", strict=True) == [NOT_A_CHARACTER]

    step = StringDecoder(b"\xc1\x81", strict=True).step()
    assert step == DecodeStep(0, 2, 0x41, valid=False)
    assert step.scalar == NOT_A_CHARACTER


def test_reserved_scalar_is_distinguishable_through_steps() -> None:
    data = encode(NOT_A_CHARACTER) + b"\x80"

    assert decode(data) == [NOT_A_CHARACTER, NOT_A_CHARACTER]
    assert [step.valid for step in iter_steps(data)] == [True, False]


def test_decoder_window_and_offsets() -> None:
    assert list(StringDecoder(b"abc", 1, 2)) == [ord("b")]
    assert list(StringDecoder(b"abc", 0, 99)) == [ord("a"), ord("b"), ord("c")]

    snapped = StringDecoder(b"abc", 3, 1)
    assert snapped.position == snapped.end == 1
    assert not snapped.has_more()

    assert StringDecoder("héllo", 1).next() == 0xE9


def test_decoder_rejects_unsupported_input() -> None:
    with pytest.raises(TypeError):
        StringDecoder(42)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        StringDecoder(b"abc", -1)


def test_validate_reports_first_invalid_unit() -> None:
    assert validate("café") == 4

    with pytest.raises(Utf8DecodeError) as info:
        validate(b"ab\xe2\x82")

    assert info.value.offset == 2
    assert info.value.consumed == 2


def test_validate_strict_mode() -> None:
    assert validate(b"\xc1\x81") == 1
    with pytest.raises(Utf8DecodeError):
        validate(b"\xc1\x81", strict=True)


def capture_events(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, dict]]:
    events: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        telemetry,
        "record_event",
        lambda name, **kwargs: events.append((name, kwargs)),
    )
    return events


def test_decode_reports_invalid_units(monkeypatch: pytest.MonkeyPatch) -> None:
    events = capture_events(monkeypatch)

    decode(b"a\x80\xff")

    assert events == [
        (
            "codec::decode_invalid",
            {"level": "debug", "data": {"invalid_units": 2, "characters": 3}},
        )
    ]


def test_decode_is_silent_on_clean_input(monkeypatch: pytest.MonkeyPatch) -> None:
    events = capture_events(monkeypatch)

    decode("café".encode("utf-8"))

    assert events == []
