"""Amplitude-threshold silence detection on a single reference channel."""

from __future__ import annotations

import math

import numpy as np

from .cancellation import CancellationToken
from .errors import InvalidRangeError
from .types import SampleBuffer, SilentInterval

REFERENCE_CHANNEL = 0
SCAN_BLOCK_FRAMES = 1 << 16


def detect(
    buffer: SampleBuffer,
    amplitude_threshold: float,
    min_silence_seconds: float,
    *,
    cancel_token: CancellationToken | None = None,
    block_frames: int = SCAN_BLOCK_FRAMES,
) -> list[SilentInterval]:
    """Return runs where ``|sample| < amplitude_threshold`` for long enough.

    Channel 0 stands in for the whole buffer. A run is kept when it spans at
    least ``floor(min_silence_seconds * sample_rate)`` frames, including a
    run still open at the end of the buffer. The token, when given, is
    checked before every block of ``block_frames`` frames. An infinite
    minimum means no run qualifies; a NaN minimum is rejected.
    """

    if math.isnan(min_silence_seconds):
        raise InvalidRangeError("Minimum silence duration must be a number, got NaN")
    frame_count = buffer.frame_count
    if frame_count == 0 or not amplitude_threshold > 0:
        return []
    scaled = min_silence_seconds * buffer.sample_rate
    if scaled == math.inf:
        return []
    min_silence_samples = int(math.floor(scaled)) if scaled > 0 else 0
    reference = buffer.channel(REFERENCE_CHANNEL)
    block_frames = max(1, int(block_frames))

    intervals: list[SilentInterval] = []
    run_start: int | None = None
    for offset in range(0, frame_count, block_frames):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        quiet = np.abs(reference[offset : offset + block_frames]) < amplitude_threshold
        # Prepend the state carried over from the previous block so that a
        # change at the block boundary is seen as a transition.
        previous = np.array([run_start is not None])
        transitions = np.flatnonzero(np.diff(np.concatenate((previous, quiet)).astype(np.int8)))
        for idx in transitions:
            frame = offset + int(idx)
            if quiet[idx]:
                run_start = frame
            else:
                _close_run(intervals, run_start, frame, min_silence_samples)
                run_start = None
    _close_run(intervals, run_start, frame_count, min_silence_samples)
    return intervals


def _close_run(
    intervals: list[SilentInterval], start: int | None, end: int, min_silence_samples: int
) -> None:
    if start is None or end <= start:
        return
    if end - start >= min_silence_samples:
        intervals.append(SilentInterval(start_frame=start, end_frame=end))


__all__ = ["REFERENCE_CHANNEL", "SCAN_BLOCK_FRAMES", "detect"]
