"""Vexora — FastAPI application factory."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vexora.api.v1.analyze import router as analyze_router
from vexora.config import Settings, get_settings
from vexora.core.orchestrator import ScanOrchestrator
from vexora.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, orchestrator: ScanOrchestrator | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(title="Vexora", version=settings.version, debug=settings.debug)
    app.state.settings = settings
    app.state.orchestrator = orchestrator or ScanOrchestrator(settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(analyze_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "version": settings.version, **app.state.orchestrator.health()}

    logger.info("Vexora %s ready (env=%s)", settings.version, settings.env)
    return app
