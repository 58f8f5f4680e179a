"""Persistent editor settings: analysis server credentials and split tuning."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from ..config import SplitOptions

_DEFAULT_SPLIT = SplitOptions()


@dataclass(slots=True)
class AppSettings:
    server_url: str = ""
    api_key: str = ""
    amplitude_threshold: float = _DEFAULT_SPLIT.amplitude_threshold
    min_silence_seconds: float = _DEFAULT_SPLIT.min_silence_seconds
    min_segment_seconds: float = _DEFAULT_SPLIT.min_segment_seconds
    merge_gap_seconds: float = _DEFAULT_SPLIT.merge_gap_seconds

    def split_options(self) -> SplitOptions:
        return SplitOptions(
            amplitude_threshold=self.amplitude_threshold,
            min_silence_seconds=self.min_silence_seconds,
            min_segment_seconds=self.min_segment_seconds,
            merge_gap_seconds=self.merge_gap_seconds,
        )


class SettingsStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._settings = self._load()

    def _load(self) -> AppSettings:
        if not self.path.exists():
            return AppSettings()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            raw = {}
        if not isinstance(raw, dict):
            raw = {}
        settings = AppSettings()
        settings.server_url = str(raw.get("server_url", ""))
        settings.api_key = str(raw.get("api_key", ""))
        for key in ("amplitude_threshold", "min_silence_seconds", "min_segment_seconds", "merge_gap_seconds"):
            try:
                setattr(settings, key, float(raw.get(key, getattr(settings, key))))
            except (TypeError, ValueError):
                continue
        return settings

    def get(self) -> AppSettings:
        return self._settings

    def update(self, **kwargs) -> AppSettings:
        for key, value in kwargs.items():
            if not hasattr(self._settings, key):
                continue
            current = getattr(self._settings, key)
            if isinstance(current, float):
                setattr(self._settings, key, float(value))
            else:
                setattr(self._settings, key, value or "")
        self._persist()
        return self._settings

    def reset_split_defaults(self) -> AppSettings:
        return self.update(**asdict(_DEFAULT_SPLIT))

    def _persist(self) -> None:
        self.path.write_text(json.dumps(asdict(self._settings)), encoding="utf-8")
