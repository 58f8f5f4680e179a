"""Auto-split pipeline (detect -> derive -> merge) and trim/reset coupling."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..config import CONFIG, DEFAULT_REGION_PALETTE, SplitOptions
from ..store.region_store import Region, RegionStore
from . import segmenter, silence_detector
from .cancellation import CancellationToken
from .extractor import extract
from .types import SampleBuffer, SoundSegment

LOGGER = logging.getLogger("wavetrim.orchestrator")


def auto_split(
    buffer: SampleBuffer,
    options: SplitOptions | None = None,
    *,
    cancel_token: CancellationToken | None = None,
) -> list[SoundSegment]:
    """Return merged sound segments for ``buffer``; performs no I/O."""

    options = options or CONFIG.split
    if buffer.is_empty:
        return []
    silences = silence_detector.detect(
        buffer,
        options.amplitude_threshold,
        options.min_silence_seconds,
        cancel_token=cancel_token,
    )
    segments = segmenter.derive(
        buffer.frame_count,
        buffer.sample_rate,
        silences,
        options.min_segment_seconds,
    )
    merged = segmenter.merge(segments, options.merge_gap_seconds)
    LOGGER.info(
        "Auto-split %.2fs buffer: %d silence(s), %d segment(s), %d after merge",
        buffer.duration,
        len(silences),
        len(segments),
        len(merged),
    )
    return merged


async def auto_split_async(
    buffer: SampleBuffer,
    options: SplitOptions | None = None,
    *,
    cancel_token: CancellationToken | None = None,
) -> list[SoundSegment]:
    # Give the host loop one chance to repaint before the scan blocks it.
    await asyncio.sleep(0)
    return auto_split(buffer, options, cancel_token=cancel_token)


def split_into_regions(
    buffer: SampleBuffer,
    store: RegionStore,
    options: SplitOptions | None = None,
    *,
    palette: Sequence[str] = DEFAULT_REGION_PALETTE,
    cancel_token: CancellationToken | None = None,
) -> tuple[Region, ...]:
    segments = auto_split(buffer, options, cancel_token=cancel_token)
    return store.replace_with_automatic(segments, palette)


def trim_and_reset(
    buffer: SampleBuffer,
    store: RegionStore,
    start_time: float,
    end_time: float,
) -> SampleBuffer:
    """Extract ``[start_time, end_time]`` and drop regions tied to the old timeline.

    The store is only cleared once extraction succeeded; a failed
    extraction propagates and leaves both buffer and regions as they were.
    """

    trimmed = extract(buffer, start_time, end_time)
    store.clear()
    LOGGER.info(
        "Trimmed %.3fs-%.3fs: %d -> %d frame(s)",
        start_time,
        end_time,
        buffer.frame_count,
        trimmed.frame_count,
    )
    return trimmed


__all__ = ["auto_split", "auto_split_async", "split_into_regions", "trim_and_reset"]
