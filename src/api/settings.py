"""API settings resolved from the environment."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from wavetrim.config import SplitOptions

_DEFAULT_SPLIT = SplitOptions()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class APISettings(BaseModel):
    app_name: str = Field(default="WaveTrim API")
    version: str = Field(default="0.3.0")
    max_upload_mb: float = Field(default=float(os.getenv("MAX_UPLOAD_MB", "50")))
    openai_api_key: str | None = Field(default=os.getenv("OPENAI_API_KEY"))
    analysis_model: str = Field(default=os.getenv("ANALYSIS_MODEL", "gpt-4o-audio-preview"))
    analysis_use_mock: bool = Field(default=_flag("ANALYSIS_USE_MOCK"))
    analysis_timeout_sec: float = Field(default=float(os.getenv("ANALYSIS_TIMEOUT_SEC", "60")))
    split_amplitude_threshold: float = Field(
        default=float(os.getenv("SPLIT_AMPLITUDE_THRESHOLD", str(_DEFAULT_SPLIT.amplitude_threshold)))
    )
    split_min_silence_sec: float = Field(
        default=float(os.getenv("SPLIT_MIN_SILENCE_SEC", str(_DEFAULT_SPLIT.min_silence_seconds)))
    )
    split_min_segment_sec: float = Field(
        default=float(os.getenv("SPLIT_MIN_SEGMENT_SEC", str(_DEFAULT_SPLIT.min_segment_seconds)))
    )
    split_merge_gap_sec: float = Field(
        default=float(os.getenv("SPLIT_MERGE_GAP_SEC", str(_DEFAULT_SPLIT.merge_gap_seconds)))
    )

    def split_options(self) -> SplitOptions:
        return SplitOptions(
            amplitude_threshold=self.split_amplitude_threshold,
            min_silence_seconds=self.split_min_silence_sec,
            min_segment_seconds=self.split_min_segment_sec,
            merge_gap_seconds=self.split_merge_gap_sec,
        )


@lru_cache()
def get_settings() -> APISettings:
    return APISettings()
