"""Decode uploads and run split / trim / analysis on them."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Dict

from fastapi import UploadFile

from wavetrim.audio import wav_encoder
from wavetrim.audio.decoder import load_buffer
from wavetrim.audio.errors import AudioEditError, UnsupportedFormatError
from wavetrim.audio.orchestrator import auto_split, trim_and_reset
from wavetrim.audio.types import SampleBuffer, WavBlob
from wavetrim.config import CONFIG
from wavetrim.services.analysis import TASKS, AnalysisTask, AudioAnalyzer
from wavetrim.store.region_store import RegionStore

from ..metrics import ANALYSIS_DURATION, EDIT_OPERATIONS
from ..settings import APISettings
from .inference_engine import InferenceEngine

LOGGER = logging.getLogger("wavetrim.api.edit")


class UploadTooLargeError(Exception):
    pass


class EditService:
    """Stateless per request: every upload gets its own buffer and region store.

    Decoding and the silence scan run in a worker thread so a long upload
    does not hold up the event loop.
    """

    def __init__(self, settings: APISettings, engine: InferenceEngine | None = None) -> None:
        self.settings = settings
        self.engine = engine or InferenceEngine(settings)
        self.analyzer = AudioAnalyzer(self._timed_analyze)

    async def split_upload(self, file: UploadFile, overrides: Dict[str, float | None]) -> Dict[str, Any]:
        options = self.settings.split_options().with_overrides(**overrides)
        buffer = await self._decode(file)
        store = RegionStore()
        try:
            segments = await asyncio.to_thread(auto_split, buffer, options)
        except AudioEditError:
            EDIT_OPERATIONS.labels(operation="split", status="error").inc()
            raise
        regions = store.replace_with_automatic(segments, CONFIG.region_palette)
        EDIT_OPERATIONS.labels(operation="split", status="success").inc()
        return {
            "sample_rate": buffer.sample_rate,
            "channel_count": buffer.channel_count,
            "duration": buffer.duration,
            "regions": [
                {
                    "index": idx,
                    "id": region.id,
                    "label": region.label,
                    "color": region.color,
                    "start": region.start_time,
                    "end": region.end_time,
                }
                for idx, region in enumerate(regions)
            ],
        }

    async def trim_upload(self, file: UploadFile, start: float, end: float) -> WavBlob:
        buffer = await self._decode(file)
        try:
            trimmed = trim_and_reset(buffer, RegionStore(), start, end)
        except AudioEditError:
            EDIT_OPERATIONS.labels(operation="trim", status="error").inc()
            raise
        EDIT_OPERATIONS.labels(operation="trim", status="success").inc()
        return wav_encoder.encode(trimmed)

    async def analyze_upload(
        self, file: UploadFile, task_name: str | None = None, prompt: str | None = None
    ) -> Dict[str, Any]:
        task = self._resolve_task(task_name, prompt)
        buffer = await self._decode(file)
        # Re-encode so the model always receives canonical PCM WAV.
        result = await self.analyzer.run(task, wav_encoder.encode(buffer))
        EDIT_OPERATIONS.labels(operation="analyze", status="success" if result.ok else "error").inc()
        return {"task": result.task, "text": result.text, "ok": result.ok}

    def _resolve_task(self, task_name: str | None, prompt: str | None) -> AnalysisTask:
        if prompt:
            return AnalysisTask(name=task_name or "custom", prompt=prompt, fallback="Analysis failed.")
        name = (task_name or "transcribe").lower()
        if name not in TASKS:
            raise ValueError(f"Unknown analysis task '{name}' (expected one of {', '.join(sorted(TASKS))})")
        return TASKS[name]

    async def _timed_analyze(self, wav_bytes: bytes, prompt: str) -> str:
        start = time.perf_counter()
        try:
            return await self.engine.analyze(wav_bytes, prompt)
        finally:
            ANALYSIS_DURATION.observe(time.perf_counter() - start)

    async def _decode(self, file: UploadFile) -> SampleBuffer:
        payload = await file.read()
        limit = int(self.settings.max_upload_mb * 1024 * 1024)
        if len(payload) > limit:
            raise UploadTooLargeError(
                f"{file.filename or 'upload'} is {len(payload)} bytes; limit is {limit} bytes"
            )
        suffix = Path(file.filename or "").suffix.lower()
        if suffix and suffix not in CONFIG.supported_extensions:
            supported = ", ".join(CONFIG.supported_extensions)
            raise UnsupportedFormatError(f"{file.filename}: only {supported} files are supported")
        LOGGER.debug("Decoding upload %s (%d bytes)", file.filename, len(payload))
        return await asyncio.to_thread(load_buffer, payload)
