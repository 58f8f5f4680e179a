"""Editor-wide defaults shared by the audio core, stores and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Tuple

# Semi-transparent region fills, cycled by segment index.
DEFAULT_REGION_PALETTE: Tuple[str, ...] = (
    "rgba(99, 102, 241, 0.25)",
    "rgba(236, 72, 153, 0.25)",
    "rgba(16, 185, 129, 0.25)",
    "rgba(245, 158, 11, 0.25)",
    "rgba(59, 130, 246, 0.25)",
    "rgba(168, 85, 247, 0.25)",
)

SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".mp3", ".wav", ".ogg")


@dataclass(frozen=True, slots=True)
class SplitOptions:
    """Tuning knobs for auto-split; hand-tuned for speech recordings."""

    amplitude_threshold: float = 0.02
    min_silence_seconds: float = 0.4
    min_segment_seconds: float = 0.2
    merge_gap_seconds: float = 0.15

    def with_overrides(self, **overrides: float | None) -> "SplitOptions":
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


@dataclass(frozen=True, slots=True)
class EditorConfig:
    split: SplitOptions = field(default_factory=SplitOptions)
    region_palette: Tuple[str, ...] = DEFAULT_REGION_PALETTE
    supported_extensions: Tuple[str, ...] = SUPPORTED_EXTENSIONS
    home: Path = field(default_factory=lambda: Path(os.getenv("WAVETRIM_HOME", Path.home() / ".wavetrim")))

    @property
    def settings_path(self) -> Path:
        return self.home / "settings.json"


CONFIG = EditorConfig()


__all__ = ["CONFIG", "DEFAULT_REGION_PALETTE", "EditorConfig", "SUPPORTED_EXTENSIONS", "SplitOptions"]
