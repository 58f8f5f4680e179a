"""Copy a time range of a buffer into a new, self-contained buffer."""

from __future__ import annotations

import logging
import math

from .errors import EmptyBufferError, InvalidRangeError
from .types import SampleBuffer

LOGGER = logging.getLogger("wavetrim.extractor")


def extract(buffer: SampleBuffer, start_time: float, end_time: float) -> SampleBuffer:
    """Return ``[start_time, end_time)`` of ``buffer`` as a new buffer.

    Both edges are rounded to the nearest frame and clamped to the buffer.
    Samples are copied verbatim; no resampling or fades are applied.
    """

    if buffer.is_empty:
        raise EmptyBufferError("Cannot extract from an empty buffer")
    if start_time >= end_time:
        raise InvalidRangeError(f"Start {start_time:.3f}s must precede end {end_time:.3f}s")
    start_frame = time_to_frame(start_time, buffer.sample_rate, buffer.frame_count)
    end_frame = time_to_frame(end_time, buffer.sample_rate, buffer.frame_count)
    if end_frame - start_frame <= 0:
        raise InvalidRangeError(
            f"Range {start_time:.3f}s-{end_time:.3f}s covers no frames of a "
            f"{buffer.duration:.3f}s buffer"
        )
    LOGGER.debug("Extracting frames %d-%d of %d", start_frame, end_frame, buffer.frame_count)
    return SampleBuffer(
        sample_rate=buffer.sample_rate,
        channels=buffer.channels[:, start_frame:end_frame],
    )


def time_to_frame(seconds: float, sample_rate: int, frame_count: int) -> int:
    # Round half up, then clamp into the buffer.
    scaled = seconds * sample_rate + 0.5
    if math.isnan(scaled):
        raise InvalidRangeError(f"Time {seconds!r} is not a number")
    if math.isinf(scaled):
        return frame_count if scaled > 0 else 0
    frame = int(math.floor(scaled))
    return max(0, min(frame, frame_count))


__all__ = ["extract", "time_to_frame"]
