"""Voice analysis tasks on top of an external ``analyze(bytes, prompt)`` call."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from ..audio.types import WavBlob

LOGGER = logging.getLogger("wavetrim.analysis")

AnalyzeFn = Callable[[bytes, str], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class AnalysisTask:
    name: str
    prompt: str
    fallback: str


GENDER_TASK = AnalysisTask(
    name="gender",
    prompt=(
        "If this audio contains a human voice, decide whether the voice is male or female. "
        "Answer with exactly one of 'male', 'female' or 'undetermined'. Do not add any explanation."
    ),
    fallback="Analysis failed.",
)

TRANSCRIBE_TASK = AnalysisTask(
    name="transcribe",
    prompt=(
        "Transcribe the speech in this audio file to text. "
        "If it is a song, write it out in lyrics format."
    ),
    fallback="Transcription failed.",
)

TASKS = {task.name: task for task in (GENDER_TASK, TRANSCRIBE_TASK)}


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    task: str
    text: str
    ok: bool


class AudioAnalyzer:
    """Runs analysis tasks and turns collaborator failures into display text."""

    def __init__(self, analyze: AnalyzeFn) -> None:
        self._analyze = analyze

    async def run(self, task: AnalysisTask, blob: WavBlob) -> AnalysisResult:
        try:
            text = await self._analyze(blob.data, task.prompt)
        except Exception:
            LOGGER.exception("Voice analysis '%s' failed", task.name)
            return AnalysisResult(task=task.name, text=task.fallback, ok=False)
        return AnalysisResult(task=task.name, text=text.strip(), ok=True)

    async def analyze_gender(self, blob: WavBlob) -> AnalysisResult:
        return await self.run(GENDER_TASK, blob)

    async def transcribe(self, blob: WavBlob) -> AnalysisResult:
        return await self.run(TRANSCRIBE_TASK, blob)


__all__ = [
    "AnalysisResult",
    "AnalysisTask",
    "AnalyzeFn",
    "AudioAnalyzer",
    "GENDER_TASK",
    "TASKS",
    "TRANSCRIBE_TASK",
]
