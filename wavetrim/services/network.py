"""HTTP client for the WaveTrim analysis service."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..store.settings_store import SettingsStore


class ApiError(Exception):
    pass


class ApiClient:
    def __init__(
        self,
        settings: SettingsStore,
        *,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings_store = settings
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict:
        api_key = self.settings_store.get().api_key
        return {"X-API-Key": api_key} if api_key else {}

    def _url(self, path: str) -> str:
        base = self.settings_store.get().server_url.rstrip("/")
        if not base:
            raise ApiError("Server URL missing")
        return f"{base}{path}"

    async def test_connection(self) -> bool:
        try:
            resp = await self._client.get(self._url("/healthz"), headers=self._headers())
            return resp.status_code == 200
        except httpx.HTTPError as exc:
            raise ApiError(str(exc)) from exc

    async def analyze(self, wav_bytes: bytes, prompt: str) -> str:
        """Send a WAV payload plus a free-form instruction; return the model text."""

        try:
            resp = await self._client.post(
                self._url("/v1/analyze"),
                headers=self._headers(),
                files={"file": ("audio.wav", wav_bytes, "audio/wav")},
                data={"prompt": prompt},
            )
            if resp.status_code == 401:
                raise ApiError("Unauthorized: check API key")
            resp.raise_for_status()
            body: Dict[str, Any] = resp.json()
        except httpx.HTTPStatusError as exc:
            raise ApiError(f"Analysis failed: {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ApiError(str(exc)) from exc
        if not body.get("ok", True):
            raise ApiError("Analysis service reported a failure")
        return str(body.get("text", ""))

    async def aclose(self) -> None:
        await self._client.aclose()
