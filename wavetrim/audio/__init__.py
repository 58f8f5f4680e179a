"""Audio core: buffers, silence detection, segmentation, trimming and WAV export."""

from .errors import (
    AudioEditError,
    CancelledError,
    DecodeError,
    EmptyBufferError,
    InvalidRangeError,
    UnsupportedFormatError,
)
from .types import SampleBuffer, SilentInterval, SoundSegment, WavBlob

__all__ = [
    "AudioEditError",
    "CancelledError",
    "DecodeError",
    "EmptyBufferError",
    "InvalidRangeError",
    "SampleBuffer",
    "SilentInterval",
    "SoundSegment",
    "UnsupportedFormatError",
    "WavBlob",
]
