"""Dataclasses shared across the audio core."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

WAV_HEADER_BYTES = 44


@dataclass(frozen=True, slots=True, eq=False)
class SampleBuffer:
    """Decoded multi-channel audio, shape ``(channel_count, frame_count)``.

    The sample array is copied to float32 and locked read-only on
    construction, so a buffer never changes once built. Editing produces a
    new buffer instead.
    """

    sample_rate: int
    channels: np.ndarray

    def __post_init__(self) -> None:
        if int(self.sample_rate) <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate!r}")
        data = np.array(self.channels, dtype=np.float32, copy=True)
        if data.ndim != 2 or data.shape[0] < 1:
            raise ValueError(f"Expected (channels, frames) array, got shape {data.shape}")
        data.flags.writeable = False
        object.__setattr__(self, "sample_rate", int(self.sample_rate))
        object.__setattr__(self, "channels", data)

    @classmethod
    def from_channels(cls, channels: Iterable[Sequence[float]], sample_rate: int) -> "SampleBuffer":
        rows = [np.asarray(channel, dtype=np.float32) for channel in channels]
        if not rows:
            raise ValueError("At least one channel is required")
        lengths = {len(row) for row in rows}
        if len(lengths) != 1:
            raise ValueError(f"Channels differ in length: {sorted(lengths)}")
        return cls(sample_rate=sample_rate, channels=np.stack(rows))

    @classmethod
    def silent(cls, frame_count: int, sample_rate: int, channel_count: int = 1) -> "SampleBuffer":
        return cls(sample_rate=sample_rate, channels=np.zeros((channel_count, frame_count), dtype=np.float32))

    @property
    def channel_count(self) -> int:
        return int(self.channels.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.channels.shape[1])

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate

    @property
    def is_empty(self) -> bool:
        return self.frame_count == 0

    def channel(self, index: int) -> np.ndarray:
        return self.channels[index]


@dataclass(frozen=True, slots=True)
class SilentInterval:
    """Half-open frame range ``[start_frame, end_frame)`` below the threshold."""

    start_frame: int
    end_frame: int

    @property
    def length(self) -> int:
        return self.end_frame - self.start_frame


@dataclass(frozen=True, slots=True)
class SoundSegment:
    """Audible window in seconds relative to the buffer start."""

    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True, slots=True)
class WavBlob:
    """Canonical 16-bit PCM RIFF/WAVE bytes."""

    data: bytes

    media_type = "audio/wav"

    def __len__(self) -> int:
        return len(self.data)

    @property
    def header(self) -> bytes:
        return self.data[:WAV_HEADER_BYTES]

    @property
    def payload(self) -> bytes:
        return self.data[WAV_HEADER_BYTES:]

    def save(self, path: Path | str) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.data)
        return target


__all__ = ["SampleBuffer", "SilentInterval", "SoundSegment", "WAV_HEADER_BYTES", "WavBlob"]
