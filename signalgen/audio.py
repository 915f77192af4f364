from __future__ import annotations

import struct
import sys
from array import array
from typing import Iterable


WAV_HEADER_SIZE = 44
_HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"


def pcm16le_from_floats(samples: Iterable[float]) -> bytes:
    # Clamp to [-1.0, 1.0]; negatives scale by 32768, the rest by 32767.
    # int() truncates toward zero like a store into an Int16 view.
    pcm = array("h")
    for s in samples:
        v = max(-1.0, min(1.0, float(s)))
        pcm.append(int(v * 32768.0) if v < 0 else int(v * 32767.0))
    if sys.byteorder == "big":
        pcm.byteswap()
    return pcm.tobytes()


def wav_header(num_samples: int, sample_rate: int) -> bytes:
    """Build the 44-byte RIFF header for mono 16-bit PCM.

    The RIFF size field is ``32 + 2 * num_samples``; readers that rely on it
    will see a container four bytes shorter than the file.
    """
    data_size = num_samples * 2
    return struct.pack(
        _HEADER_FORMAT,
        b"RIFF",
        32 + data_size,
        b"WAVE",
        b"fmt ",
        16,  # Subchunk1Size for PCM
        1,   # AudioFormat PCM
        1,   # mono
        sample_rate,
        sample_rate * 2,
        2,
        16,
        b"data",
        data_size,
    )


def encode_wav(samples: Iterable[float], sample_rate: int) -> bytes:
    pcm = pcm16le_from_floats(samples)
    header = wav_header(num_samples=len(pcm) // 2, sample_rate=sample_rate)
    return header + pcm


def decode_wav(data: bytes) -> tuple[list[float], int]:
    """Decode a container produced by :func:`encode_wav`.

    Returns ``(samples, sample_rate)`` with samples mapped back into
    [-1.0, 1.0] using the same asymmetric scale as the encoder.
    """
    if len(data) < WAV_HEADER_SIZE:
        raise ValueError(f"WAV data too short ({len(data)} bytes)")

    (
        riff,
        _riff_size,
        wave,
        fmt,
        _fmt_size,
        audio_format,
        num_channels,
        sample_rate,
        _byte_rate,
        _block_align,
        bits_per_sample,
        data_tag,
        data_size,
    ) = struct.unpack_from(_HEADER_FORMAT, data, 0)

    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data_tag != b"data":
        raise ValueError("Not a RIFF/WAVE container")
    if audio_format != 1 or num_channels != 1 or bits_per_sample != 16:
        raise ValueError(
            "Unsupported WAV layout "
            f"(format={audio_format}, channels={num_channels}, bits={bits_per_sample})"
        )
    if data_size % 2 or WAV_HEADER_SIZE + data_size > len(data):
        raise ValueError(f"Invalid data chunk size {data_size}")

    count = data_size // 2
    ints = struct.unpack_from(f"<{count}h", data, WAV_HEADER_SIZE)
    samples = [i / 32768.0 if i < 0 else i / 32767.0 for i in ints]
    return samples, sample_rate
