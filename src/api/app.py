"""FastAPI application factory."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Depends, FastAPI

from .metrics import instrument_app
from .metrics import router as metrics_router
from .routers import edit
from .schemas import HealthResponse
from .services.inference_engine import InferenceEngine
from .settings import APISettings, get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.version)
    instrument_app(app)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz(current: APISettings = Depends(get_settings)) -> HealthResponse:
        return HealthResponse(
            ok=True,
            analysis=InferenceEngine.mode_for(current),
            timestamp=datetime.now(timezone.utc),
        )

    app.include_router(edit.router)
    app.include_router(metrics_router)
    return app
