"""Split, trim and voice analysis endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile

from wavetrim.audio.errors import DecodeError, EmptyBufferError, InvalidRangeError

from ..schemas import AnalyzeResponse, SplitResponse
from ..services.edit_service import EditService, UploadTooLargeError
from ..settings import APISettings, get_settings

router = APIRouter(prefix="/v1", tags=["edit"])


def get_service(settings: APISettings = Depends(get_settings)) -> EditService:
    return EditService(settings)


@router.post("/split", response_model=SplitResponse)
async def split_audio(
    file: UploadFile = File(...),
    amplitude_threshold: float | None = Form(None),
    min_silence_seconds: float | None = Form(None),
    min_segment_seconds: float | None = Form(None),
    merge_gap_seconds: float | None = Form(None),
    service: EditService = Depends(get_service),
):
    overrides = {
        "amplitude_threshold": amplitude_threshold,
        "min_silence_seconds": min_silence_seconds,
        "min_segment_seconds": min_segment_seconds,
        "merge_gap_seconds": merge_gap_seconds,
    }
    try:
        result = await service.split_upload(file, overrides)
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except (InvalidRangeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return SplitResponse(**result)


@router.post("/trim")
async def trim_audio(
    file: UploadFile = File(...),
    start: float = Form(...),
    end: float = Form(...),
    service: EditService = Depends(get_service),
):
    try:
        blob = await service.trim_upload(file, start, end)
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except (InvalidRangeError, EmptyBufferError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return Response(
        content=blob.data,
        media_type=blob.media_type,
        headers={"Content-Disposition": 'attachment; filename="trimmed.wav"'},
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_audio(
    file: UploadFile = File(...),
    task: str | None = Form(None),
    prompt: str | None = Form(None),
    service: EditService = Depends(get_service),
):
    try:
        result = await service.analyze_upload(file, task, prompt)
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return AnalyzeResponse(**result)
