"""Exceptions raised by the audio core."""

from __future__ import annotations


class AudioEditError(Exception):
    """Base class for editing failures that leave audio state untouched."""


class InvalidRangeError(AudioEditError):
    """A time range resolves to zero or fewer frames."""


class EmptyBufferError(AudioEditError):
    """The operation needs at least one frame of audio."""


class CancelledError(AudioEditError):
    """A long-running scan was aborted through its cancellation token."""


class DecodeError(AudioEditError):
    pass


class UnsupportedFormatError(DecodeError):
    pass


__all__ = [
    "AudioEditError",
    "CancelledError",
    "DecodeError",
    "EmptyBufferError",
    "InvalidRangeError",
    "UnsupportedFormatError",
]
