"""Turn silent intervals into sound segments and merge close neighbours."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .errors import InvalidRangeError
from .types import SilentInterval, SoundSegment


def derive(
    total_frames: int,
    sample_rate: int,
    silences: Iterable[SilentInterval],
    min_segment_seconds: float,
) -> list[SoundSegment]:
    """Return the gaps between silences that are longer than the minimum.

    Silences must be sorted and non-overlapping. Gaps before the first
    silence, between silences and after the last one are candidates; a gap
    whose frame length does not exceed
    ``floor(min_segment_seconds * sample_rate)`` is dropped as noise, so an
    infinite minimum drops every gap.
    """

    if math.isnan(min_segment_seconds):
        raise InvalidRangeError("Minimum segment duration must be a number, got NaN")
    scaled = min_segment_seconds * sample_rate
    if total_frames <= 0 or scaled == math.inf:
        return []
    min_segment_samples = int(math.floor(scaled)) if scaled > 0 else 0
    spans: list[tuple[int, int]] = []
    cursor = 0
    for silence in silences:
        gap_end = _clip(silence.start_frame, total_frames)
        spans.append((cursor, gap_end))
        cursor = max(cursor, _clip(silence.end_frame, total_frames))
    spans.append((cursor, total_frames))

    return [
        SoundSegment(start_time=start / sample_rate, end_time=end / sample_rate)
        for start, end in spans
        if end - start > min_segment_samples and end > start
    ]


def merge(segments: Sequence[SoundSegment], max_gap_seconds: float) -> list[SoundSegment]:
    """Coalesce segments separated by less than ``max_gap_seconds``."""

    if not segments:
        return []
    merged: list[SoundSegment] = []
    cur_start = segments[0].start_time
    cur_end = segments[0].end_time
    for segment in segments[1:]:
        if segment.start_time - cur_end < max_gap_seconds:
            cur_end = segment.end_time
        else:
            merged.append(SoundSegment(start_time=cur_start, end_time=cur_end))
            cur_start, cur_end = segment.start_time, segment.end_time
    merged.append(SoundSegment(start_time=cur_start, end_time=cur_end))
    return merged


def _clip(frame: int, total_frames: int) -> int:
    return max(0, min(int(frame), total_frames))


__all__ = ["derive", "merge"]
