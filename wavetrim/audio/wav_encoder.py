"""Serialize a SampleBuffer into a canonical 16-bit PCM WAV blob."""

from __future__ import annotations

import struct

import numpy as np

from .types import SampleBuffer, WavBlob

PCM_FORMAT = 1
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
FMT_CHUNK_SIZE = 16

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def encode(buffer: SampleBuffer) -> WavBlob:
    """Write the 44-byte RIFF header followed by interleaved int16 frames."""

    payload = _to_pcm16(buffer.channels)
    header = build_header(buffer.sample_rate, buffer.channel_count, len(payload))
    return WavBlob(data=header + payload)


def build_header(sample_rate: int, channel_count: int, data_bytes: int) -> bytes:
    block_align = channel_count * BYTES_PER_SAMPLE
    return _HEADER.pack(
        b"RIFF",
        36 + data_bytes,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        PCM_FORMAT,
        channel_count,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_bytes,
    )


def _to_pcm16(channels: np.ndarray) -> bytes:
    clipped = np.clip(channels.astype(np.float64), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    # astype truncates toward zero; transpose gives frame-major interleave.
    pcm = scaled.astype("<i2")
    return np.ascontiguousarray(pcm.T).tobytes()


__all__ = ["build_header", "encode"]
