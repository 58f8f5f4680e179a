"""Voice analysis through an audio-capable OpenAI chat model, with mock fallback."""

from __future__ import annotations

import base64
import logging
from typing import Optional

from openai import AsyncOpenAI

from ..settings import APISettings

LOGGER = logging.getLogger("wavetrim.inference")


class InferenceEngine:
    """Implements ``analyze(wav_bytes, prompt) -> text`` for the analysis routes."""

    def __init__(self, settings: APISettings, client: Optional[AsyncOpenAI] = None) -> None:
        self.settings = settings
        self._client = client
        self._mock = client is None and self.mode_for(settings) == "mock"
        if self._mock:
            LOGGER.warning(
                "Analysis mock mode enabled (set OPENAI_API_KEY and ANALYSIS_USE_MOCK=0 "
                "to enable real voice analysis)."
            )

    @staticmethod
    def mode_for(settings: APISettings) -> str:
        return "mock" if settings.analysis_use_mock or not settings.openai_api_key else "openai"

    @property
    def mode(self) -> str:
        return "mock" if self._mock else "openai"

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.analysis_timeout_sec,
            )
        return self._client

    async def analyze(self, wav_bytes: bytes, prompt: str) -> str:
        if self._mock:
            return f"[mock analysis of {len(wav_bytes)} bytes]"
        client = self._get_client()
        encoded = base64.b64encode(wav_bytes).decode("ascii")
        response = await client.chat.completions.create(
            model=self.settings.analysis_model,
            modalities=["text"],
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_audio", "input_audio": {"data": encoded, "format": "wav"}},
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        )
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
