import asyncio
import io
import threading

import numpy as np
import pytest
import soundfile as sf
from fastapi import UploadFile
from fastapi.testclient import TestClient

from wavetrim.audio.types import SampleBuffer
from wavetrim.audio.wav_encoder import encode


def _wav_bytes(sample_rate: int = 8000) -> bytes:
    samples = np.full(sample_rate * 3, 0.5, dtype=np.float32)
    samples[sample_rate : 2 * sample_rate] = 0.0
    return encode(SampleBuffer.from_channels([samples, samples], sample_rate)).data


@pytest.fixture()
def api_client():
    from src.api.app import create_app
    from src.api.settings import APISettings, get_settings

    get_settings.cache_clear()  # type: ignore
    settings = APISettings(
        openai_api_key=None,
        analysis_use_mock=True,
        max_upload_mb=1,
    )
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


def test_health_reports_mock_analysis(api_client):
    resp = api_client.get("/healthz")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["analysis"] == "mock"


def test_split_endpoint_returns_regions(api_client):
    resp = api_client.post("/v1/split", files={"file": ("clip.wav", _wav_bytes(), "audio/wav")})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["sample_rate"] == 8000
    assert body["channel_count"] == 2
    assert body["duration"] == pytest.approx(3.0)
    assert [(r["start"], r["end"]) for r in body["regions"]] == [(0.0, 1.0), (2.0, 3.0)]
    assert [r["label"] for r in body["regions"]] == ["segment 1", "segment 2"]
    assert all(r["color"] for r in body["regions"])


def test_split_endpoint_accepts_overrides(api_client):
    resp = api_client.post(
        "/v1/split",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"merge_gap_seconds": "1.5"},
    )
    assert resp.status_code == 200
    assert len(resp.json()["regions"]) == 1


def test_trim_endpoint_returns_wav(api_client):
    resp = api_client.post(
        "/v1/trim",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"start": "0.5", "end": "2.5"},
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "audio/wav"
    assert len(resp.content) == 44 + 2 * 8000 * 2 * 2
    data, rate = sf.read(io.BytesIO(resp.content), dtype="int16", always_2d=True)
    assert rate == 8000
    assert data.shape == (16_000, 2)


def test_trim_rejects_empty_range(api_client):
    resp = api_client.post(
        "/v1/trim",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"start": "1.0", "end": "1.0"},
    )
    assert resp.status_code == 422


def test_unsupported_upload(api_client):
    resp = api_client.post("/v1/split", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 415
    resp = api_client.post("/v1/split", files={"file": ("clip.wav", b"not audio", "audio/wav")})
    assert resp.status_code == 415


def test_upload_size_limit(api_client):
    big = _wav_bytes(sample_rate=96_000)
    resp = api_client.post("/v1/split", files={"file": ("big.wav", big, "audio/wav")})
    assert resp.status_code == 413


def test_analyze_endpoint_mock(api_client):
    resp = api_client.post(
        "/v1/analyze",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"task": "gender"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["task"] == "gender"
    assert body["ok"] is True
    assert body["text"].startswith("[mock analysis")


def test_analyze_unknown_task(api_client):
    resp = api_client.post(
        "/v1/analyze",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"task": "sentiment"},
    )
    assert resp.status_code == 422


def test_metrics_exposed(api_client):
    api_client.get("/healthz")
    resp = api_client.get("/metrics")
    assert resp.status_code == 200
    assert "api_requests_total" in resp.text


def test_trim_with_infinite_end_keeps_the_tail(api_client):
    resp = api_client.post(
        "/v1/trim",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"start": "2.0", "end": "inf"},
    )
    assert resp.status_code == 200, resp.text
    assert len(resp.content) == 44 + 8000 * 2 * 2


def test_trim_with_nan_is_rejected(api_client):
    resp = api_client.post(
        "/v1/trim",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"start": "nan", "end": "1.0"},
    )
    assert resp.status_code == 422


def test_split_with_degenerate_durations(api_client):
    resp = api_client.post(
        "/v1/split",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"min_silence_seconds": "inf"},
    )
    assert resp.status_code == 200, resp.text
    assert [(r["start"], r["end"]) for r in resp.json()["regions"]] == [(0.0, 3.0)]
    resp = api_client.post(
        "/v1/split",
        files={"file": ("clip.wav", _wav_bytes(), "audio/wav")},
        data={"min_silence_seconds": "nan"},
    )
    assert resp.status_code == 422


def test_split_scan_runs_off_the_event_loop(monkeypatch):
    from src.api.services import edit_service
    from src.api.settings import APISettings

    threads = {}
    real_auto_split = edit_service.auto_split

    def _recording(buffer, options):
        threads["scan"] = threading.get_ident()
        return real_auto_split(buffer, options)

    monkeypatch.setattr(edit_service, "auto_split", _recording)
    service = edit_service.EditService(APISettings(openai_api_key=None, analysis_use_mock=True))

    async def _run():
        threads["loop"] = threading.get_ident()
        upload = UploadFile(io.BytesIO(_wav_bytes()), filename="clip.wav")
        return await service.split_upload(upload, {})

    result = asyncio.run(_run())
    assert threads["scan"] != threads["loop"]
    assert len(result["regions"]) == 2
