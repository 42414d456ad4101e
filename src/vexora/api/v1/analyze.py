"""Vexora — Analysis API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from vexora.core.orchestrator import ScanOrchestrator
from vexora.models.media import MediaFile
from vexora.models.schemas import AnalysisResult, TextRequest, UrlRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["Analysis"])


def get_orchestrator(request: Request) -> ScanOrchestrator:
    return request.app.state.orchestrator


async def _read_upload(file: UploadFile, limit: int) -> MediaFile:
    """Read at most ``limit`` bytes; larger uploads are rejected with 413."""
    if file.size is not None and file.size > limit:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {limit} bytes")
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {limit} bytes")
    return MediaFile.from_bytes(content, file.filename or "upload", file.content_type or "")


@router.post("/url", response_model=AnalysisResult)
async def analyze_url(body: UrlRequest, orch: ScanOrchestrator = Depends(get_orchestrator)) -> AnalysisResult:
    return await orch.analyze_url(body.url)


@router.post("/text", response_model=AnalysisResult)
async def analyze_text(body: TextRequest, orch: ScanOrchestrator = Depends(get_orchestrator)) -> AnalysisResult:
    return await orch.analyze_text(body.text)


@router.post("/image", response_model=AnalysisResult)
async def analyze_image(
    request: Request, file: UploadFile = File(...), orch: ScanOrchestrator = Depends(get_orchestrator)
) -> AnalysisResult:
    return await orch.analyze_image(await _read_upload(file, request.app.state.settings.max_upload_size))


@router.post("/video", response_model=AnalysisResult)
async def analyze_video(
    request: Request, file: UploadFile = File(...), orch: ScanOrchestrator = Depends(get_orchestrator)
) -> AnalysisResult:
    return await orch.analyze_video(await _read_upload(file, request.app.state.settings.max_upload_size))
