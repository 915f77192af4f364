from __future__ import annotations

import random
import struct

import pytest

from signalgen.audio import (
    WAV_HEADER_SIZE,
    decode_wav,
    encode_wav,
    pcm16le_from_floats,
    wav_header,
)


def test_header_layout_is_byte_exact() -> None:
    header = wav_header(num_samples=10, sample_rate=44100)

    assert len(header) == WAV_HEADER_SIZE
    assert header[0:4] == b"RIFF"
    assert struct.unpack_from("<I", header, 4)[0] == 32 + 20
    assert header[8:12] == b"WAVE"
    assert header[12:16] == b"fmt "
    assert struct.unpack_from("<IHHIIHH", header, 16) == (16, 1, 1, 44100, 88200, 2, 16)
    assert header[36:40] == b"data"
    assert struct.unpack_from("<I", header, 40)[0] == 20


def test_quantization_is_asymmetric_and_clamped() -> None:
    pcm = pcm16le_from_floats([-1.0, 1.0, 0.0, 0.5, -0.5, 3.0, -7.5])
    values = struct.unpack("<7h", pcm)

    # 0.5 * 32767 = 16383.5 truncates toward zero; -0.5 * 32768 is exact.
    assert values == (-32768, 32767, 0, 16383, -16384, 32767, -32768)


def test_pcm_is_little_endian_for_long_generated_input() -> None:
    n = 100_000
    pcm = pcm16le_from_floats(0.25 if i % 2 else -0.25 for i in range(n))

    assert len(pcm) == 2 * n
    assert pcm[:4] == struct.pack("<hh", -8192, 8191)
    assert pcm[-2:] == struct.pack("<h", 8191)


def test_empty_input_produces_header_only() -> None:
    data = encode_wav([], 8000)

    assert len(data) == WAV_HEADER_SIZE
    assert struct.unpack_from("<I", data, 4)[0] == 32
    assert struct.unpack_from("<I", data, 40)[0] == 0
    assert decode_wav(data) == ([], 8000)


def test_encoding_is_idempotent() -> None:
    samples = [0.1 * i for i in range(-12, 13)]
    assert encode_wav(samples, 22050) == encode_wav(samples, 22050)


def test_round_trip_within_quantization_error() -> None:
    rng = random.Random(1234)
    original = [rng.uniform(-1.5, 1.5) for _ in range(2000)] + [-1.0, 0.0, 1.0]

    data = encode_wav(original, 44100)
    decoded, sample_rate = decode_wav(data)

    assert sample_rate == 44100
    assert len(data) == WAV_HEADER_SIZE + 2 * len(original)
    assert len(decoded) == len(original)
    for before, after in zip(original, decoded):
        clamped = max(-1.0, min(1.0, before))
        assert abs(after - clamped) <= 1 / 32767


@pytest.mark.parametrize(
    "data, message",
    [
        (b"RIFF", "too short"),
        (b"JUNK" + bytes(40), "Not a RIFF/WAVE"),
    ],
)
def test_decode_rejects_malformed_containers(data: bytes, message: str) -> None:
    with pytest.raises(ValueError) as exc_info:
        decode_wav(data)

    assert message in str(exc_info.value)


def test_decode_rejects_truncated_data_chunk() -> None:
    data = encode_wav([0.25] * 8, 8000)

    with pytest.raises(ValueError) as exc_info:
        decode_wav(data[:-4])

    assert "Invalid data chunk size" in str(exc_info.value)
