"""Region selection state: one manual region or one automatic batch."""

from __future__ import annotations

import enum
import math
import uuid
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Sequence, Union

from ..audio.errors import AudioEditError, InvalidRangeError
from ..audio.types import SoundSegment
from ..config import DEFAULT_REGION_PALETTE


class RegionOrigin(str, enum.Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"


class RegionNotFoundError(AudioEditError, KeyError):
    pass


class RegionLockedError(AudioEditError):
    """Automatic regions cannot be dragged or resized."""


@dataclass(frozen=True, slots=True)
class Region:
    id: str
    start_time: float
    end_time: float
    origin: RegionOrigin
    label: str | None = None
    color: str | None = None
    mutable: bool = True

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class ManualSelected:
    region: Region


@dataclass(frozen=True, slots=True)
class AutomaticBatch:
    regions: tuple[Region, ...]


RegionState = Union[Empty, ManualSelected, AutomaticBatch]


class RegionStore:
    """Holds the current region state and swaps it wholesale on every change.

    Creating a manual region discards everything else, and an auto-split
    batch replaces the previous contents in one step, so observers never
    see a mix of manual and automatic regions.
    """

    def __init__(self) -> None:
        self._state: RegionState = Empty()

    @property
    def state(self) -> RegionState:
        return self._state

    @property
    def regions(self) -> tuple[Region, ...]:
        state = self._state
        if isinstance(state, ManualSelected):
            return (state.region,)
        if isinstance(state, AutomaticBatch):
            return state.regions
        return ()

    @property
    def manual_region(self) -> Region | None:
        state = self._state
        return state.region if isinstance(state, ManualSelected) else None

    @property
    def is_empty(self) -> bool:
        return isinstance(self._state, Empty)

    def __len__(self) -> int:
        return len(self.regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self.regions)

    def create_manual(
        self,
        start_time: float,
        end_time: float,
        *,
        label: str | None = None,
        color: str | None = None,
    ) -> Region:
        _check_bounds(start_time, end_time)
        region = Region(
            id=_new_id(),
            start_time=float(start_time),
            end_time=float(end_time),
            origin=RegionOrigin.MANUAL,
            label=label,
            color=color,
            mutable=True,
        )
        self._state = ManualSelected(region)
        return region

    def clear(self) -> None:
        self._state = Empty()

    def replace_with_automatic(
        self,
        segments: Iterable[SoundSegment],
        palette: Sequence[str] = DEFAULT_REGION_PALETTE,
    ) -> tuple[Region, ...]:
        if not palette:
            raise ValueError("Region palette must contain at least one color")
        regions = tuple(
            Region(
                id=_new_id(),
                start_time=segment.start_time,
                end_time=segment.end_time,
                origin=RegionOrigin.AUTOMATIC,
                label=f"segment {index + 1}",
                color=palette[index % len(palette)],
                mutable=False,
            )
            for index, segment in enumerate(segments)
        )
        self._state = AutomaticBatch(regions)
        return regions

    def get(self, region_id: str) -> Region:
        for region in self.regions:
            if region.id == region_id:
                return region
        raise RegionNotFoundError(region_id)

    def update_bounds(self, region_id: str, start_time: float, end_time: float) -> Region:
        """Apply a drag/resize event without changing what is selected.

        Only the manual region is mutable; automatic regions raise
        ``RegionLockedError`` and leave the batch as it was.
        """

        current = self.get(region_id)
        if not current.mutable:
            raise RegionLockedError(f"Region {current.label or region_id} is locked")
        _check_bounds(start_time, end_time)
        updated = replace(current, start_time=float(start_time), end_time=float(end_time))
        self._state = ManualSelected(updated)
        return updated


def _check_bounds(start_time: float, end_time: float) -> None:
    if math.isnan(start_time) or math.isnan(end_time) or start_time >= end_time:
        raise InvalidRangeError(f"Region start {start_time:.3f}s must precede end {end_time:.3f}s")


def _new_id() -> str:
    return uuid.uuid4().hex


__all__ = [
    "AutomaticBatch",
    "Empty",
    "ManualSelected",
    "Region",
    "RegionLockedError",
    "RegionNotFoundError",
    "RegionOrigin",
    "RegionState",
    "RegionStore",
]
