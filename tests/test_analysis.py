import asyncio

import httpx
import pytest

from wavetrim.audio.types import SampleBuffer
from wavetrim.audio.wav_encoder import encode
from wavetrim.services.analysis import GENDER_TASK, TRANSCRIBE_TASK, AudioAnalyzer
from wavetrim.services.network import ApiClient, ApiError
from wavetrim.store.settings_store import SettingsStore


def _blob():
    return encode(SampleBuffer.silent(160, 16_000))


def make_client(tmp_path, transport):
    settings = SettingsStore(tmp_path / "settings.json")
    settings.update(server_url="https://api.example.com", api_key="k")
    return ApiClient(settings, client=httpx.AsyncClient(transport=transport))


def test_analyzer_passes_prompt_and_audio():
    seen = {}

    async def analyze(data: bytes, prompt: str) -> str:
        seen["data"] = data
        seen["prompt"] = prompt
        return "  female \n"

    blob = _blob()
    result = asyncio.run(AudioAnalyzer(analyze).analyze_gender(blob))
    assert result.ok
    assert result.task == "gender"
    assert result.text == "female"
    assert seen["data"] == blob.data
    assert seen["prompt"] == GENDER_TASK.prompt


def test_analyzer_failure_becomes_fallback_text():
    async def analyze(data: bytes, prompt: str) -> str:
        raise ConnectionError("offline")

    result = asyncio.run(AudioAnalyzer(analyze).transcribe(_blob()))
    assert not result.ok
    assert result.text == TRANSCRIBE_TASK.fallback


def test_api_client_analyze_posts_wav(tmp_path):
    def handler(request):
        if request.url.path == "/v1/analyze":
            body = request.content
            assert request.headers["X-API-Key"] == "k"
            assert b"RIFF" in body
            assert b"lyrics" in body
            return httpx.Response(200, json={"task": "custom", "text": "la la", "ok": True})
        if request.url.path == "/healthz":
            return httpx.Response(200, json={"ok": True})
        raise AssertionError("Unexpected request")

    client = make_client(tmp_path, httpx.MockTransport(handler))

    async def scenario():
        text = await client.analyze(_blob().data, TRANSCRIBE_TASK.prompt)
        alive = await client.test_connection()
        await client.aclose()
        return text, alive

    assert asyncio.run(scenario()) == ("la la", True)


def test_api_client_errors(tmp_path):
    def handler(request):
        return httpx.Response(503)

    client = make_client(tmp_path, httpx.MockTransport(handler))
    with pytest.raises(ApiError) as excinfo:
        asyncio.run(client.analyze(b"RIFF", "prompt"))
    assert "503" in str(excinfo.value)


def test_api_client_reports_service_failure(tmp_path):
    def handler(request):
        return httpx.Response(200, json={"task": "gender", "text": "Analysis failed.", "ok": False})

    client = make_client(tmp_path, httpx.MockTransport(handler))
    with pytest.raises(ApiError):
        asyncio.run(client.analyze(b"RIFF", "prompt"))


def test_api_client_requires_server_url(tmp_path):
    settings = SettingsStore(tmp_path / "settings.json")
    client = ApiClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))))
    with pytest.raises(ApiError):
        asyncio.run(client.analyze(b"RIFF", "prompt"))


def test_analyzer_with_api_client_falls_back(tmp_path):
    client = make_client(tmp_path, httpx.MockTransport(lambda request: httpx.Response(500)))
    result = asyncio.run(AudioAnalyzer(client.analyze).analyze_gender(_blob()))
    assert result.text == GENDER_TASK.fallback
    assert result.ok is False
