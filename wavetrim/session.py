"""Editing session: the current buffer, its regions and the actions on them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .audio import wav_encoder
from .audio.cancellation import CancellationToken
from .audio.decoder import AudioSource, load_buffer
from .audio.errors import EmptyBufferError
from .audio.extractor import extract
from .audio.orchestrator import auto_split, auto_split_async, trim_and_reset
from .audio.types import SampleBuffer, WavBlob
from .config import CONFIG, SplitOptions
from .services.analysis import AnalysisResult, AudioAnalyzer
from .store.region_store import Region, RegionStore

LOGGER = logging.getLogger("wavetrim.session")


class EditorSession:
    """Entry point for UI events.

    The session owns exactly one current buffer. Loading or trimming
    replaces it and clears the region store, since regions are expressed on
    the old timeline.
    """

    def __init__(
        self,
        buffer: SampleBuffer | None = None,
        *,
        store: RegionStore | None = None,
        analyzer: AudioAnalyzer | None = None,
        options: SplitOptions | None = None,
        palette: Sequence[str] = CONFIG.region_palette,
    ) -> None:
        self._buffer = buffer
        self.store = store or RegionStore()
        self.analyzer = analyzer
        self.options = options or CONFIG.split
        self.palette = tuple(palette)

    @property
    def buffer(self) -> SampleBuffer:
        if self._buffer is None:
            raise EmptyBufferError("No audio loaded")
        return self._buffer

    @property
    def has_audio(self) -> bool:
        return self._buffer is not None

    def load(self, source: AudioSource) -> SampleBuffer:
        buffer = load_buffer(source)
        self.replace_buffer(buffer)
        return buffer

    def replace_buffer(self, buffer: SampleBuffer) -> None:
        self._buffer = buffer
        self.store.clear()

    def auto_split(
        self,
        options: SplitOptions | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> tuple[Region, ...]:
        segments = auto_split(self.buffer, options or self.options, cancel_token=cancel_token)
        return self.store.replace_with_automatic(segments, self.palette)

    async def auto_split_async(
        self,
        options: SplitOptions | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> tuple[Region, ...]:
        segments = await auto_split_async(self.buffer, options or self.options, cancel_token=cancel_token)
        return self.store.replace_with_automatic(segments, self.palette)

    def create_manual_region(self, start_time: float, end_time: float, *, label: str | None = None) -> Region:
        return self.store.create_manual(start_time, end_time, label=label)

    def update_region(self, region_id: str, start_time: float, end_time: float) -> Region:
        return self.store.update_bounds(region_id, start_time, end_time)

    def select_region(self, region_id: str) -> Region:
        """Look up a region for playback; selection never changes the store."""

        return self.store.get(region_id)

    def clear_regions(self) -> None:
        self.store.clear()

    def trim(self, start_time: float, end_time: float) -> SampleBuffer:
        self._buffer = trim_and_reset(self.buffer, self.store, start_time, end_time)
        return self._buffer

    def trim_to_region(self, region_id: str) -> SampleBuffer:
        region = self.store.get(region_id)
        return self.trim(region.start_time, region.end_time)

    def export_wav(self, path: Path | str | None = None) -> WavBlob:
        blob = wav_encoder.encode(self.buffer)
        if path is not None:
            target = blob.save(path)
            LOGGER.info("Exported %d byte(s) to %s", len(blob), target)
        return blob

    async def analyze_gender(self, region_id: str | None = None) -> AnalysisResult:
        analyzer = self._require_analyzer()
        return await analyzer.analyze_gender(self._blob_for(region_id))

    async def transcribe(self, region_id: str | None = None) -> AnalysisResult:
        analyzer = self._require_analyzer()
        return await analyzer.transcribe(self._blob_for(region_id))

    def _blob_for(self, region_id: str | None) -> WavBlob:
        if region_id is None:
            return wav_encoder.encode(self.buffer)
        region = self.store.get(region_id)
        return wav_encoder.encode(extract(self.buffer, region.start_time, region.end_time))

    def _require_analyzer(self) -> AudioAnalyzer:
        if self.analyzer is None:
            raise RuntimeError("No analysis backend configured for this session")
        return self.analyzer


__all__ = ["EditorSession"]
