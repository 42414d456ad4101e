"""Vexora — Scan orchestrator.

Single entry point for callers:
  analyze_url / analyze_text / analyze_image / analyze_video
and ``scan`` which routes a raw upload to the image or video pipeline.

Every call builds its own accumulator and generator; nothing is shared
between calls, so any number of scans may run concurrently.
"""

from __future__ import annotations

import logging
import mimetypes
import time
import uuid
from typing import Any

from vexora.config import Settings, get_settings
from vexora.core.base_analyzer import AnalysisInput
from vexora.core.policy import DetectionPolicy, default_policy
from vexora.core.simulation.base_model import ImageSignalModel, VideoSignalModel
from vexora.core.text.scam_text_analyzer import ScamTextAnalyzer
from vexora.core.url.reachability import DisabledProbe, ReachabilityProbe
from vexora.core.url.url_analyzer import Probe, URLAnalyzer
from vexora.core.visual.image_analyzer import ImageAnalyzer
from vexora.core.visual.video_analyzer import VideoAnalyzer
from vexora.models.enums import MediaType
from vexora.models.media import MediaFile
from vexora.models.schemas import AnalysisResult

logger = logging.getLogger(__name__)

EXTENSION_MEDIA_TYPES = {
    "mp4": MediaType.VIDEO,
    "avi": MediaType.VIDEO,
    "mov": MediaType.VIDEO,
    "mkv": MediaType.VIDEO,
    "webm": MediaType.VIDEO,
    "jpg": MediaType.IMAGE,
    "jpeg": MediaType.IMAGE,
    "png": MediaType.IMAGE,
    "gif": MediaType.IMAGE,
    "webp": MediaType.IMAGE,
    "bmp": MediaType.IMAGE,
}


class ScanOrchestrator:
    """Owns one analyzer per modality."""

    def __init__(
        self,
        settings: Settings | None = None,
        policy: DetectionPolicy | None = None,
        probe: Probe | None = None,
        image_model: ImageSignalModel | None = None,
        video_model: VideoSignalModel | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.policy = policy or default_policy()
        if probe is None:
            probe = ReachabilityProbe(self.settings.probe_timeout) if self.settings.probe_enabled else DisabledProbe()
        self.url = URLAnalyzer(probe=probe, policy=self.policy)
        self.text = ScamTextAnalyzer(policy=self.policy)
        self.image = ImageAnalyzer(model=image_model, policy=self.policy)
        self.video = VideoAnalyzer(model=video_model)

    async def analyze_url(self, url: str) -> AnalysisResult:
        return await self._run(self.url.analyze, AnalysisInput(text=url), MediaType.URL)

    async def analyze_text(self, text: str) -> AnalysisResult:
        return await self._run(self.text.analyze, AnalysisInput(text=text), MediaType.TEXT)

    async def analyze_image(self, media: MediaFile) -> AnalysisResult:
        return await self._run(self.image.analyze, AnalysisInput(media=media), MediaType.IMAGE)

    async def analyze_video(self, media: MediaFile) -> AnalysisResult:
        return await self._run(self.video.analyze, AnalysisInput(media=media), MediaType.VIDEO)

    async def scan(self, content: bytes, filename: str, mime_type: str = "") -> AnalysisResult:
        """Route an uploaded file by MIME type, then extension."""
        media = MediaFile.from_bytes(content, filename, mime_type)
        if self.detect_media_type(filename, mime_type) == MediaType.VIDEO:
            return await self.analyze_video(media)
        return await self.analyze_image(media)

    async def _run(self, fn: Any, inp: AnalysisInput, media_type: MediaType) -> AnalysisResult:
        scan_id = f"scn_{uuid.uuid4().hex[:12]}"
        start = time.perf_counter()
        logger.info("[%s] %s scan started", scan_id, media_type.value)
        result: AnalysisResult = await fn(inp)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s scan complete — status=%s confidence=%.1f (%.0fms)",
            scan_id,
            media_type.value,
            result.status.value,
            result.confidence,
            elapsed,
        )
        return result

    def health(self) -> dict[str, Any]:
        return {
            "analyzers": [a.health_check() for a in (self.url, self.text, self.image, self.video)],
            "models": [self.image.model.health_check(), self.video.model.health_check()],
        }

    @staticmethod
    def detect_media_type(filename: str, mime_type: str | None) -> MediaType:
        """Image or video, from the declared MIME type or the file name."""
        mime = mime_type or mimetypes.guess_type(filename)[0]
        if mime:
            if mime.startswith("video/"):
                return MediaType.VIDEO
            if mime.startswith("image/"):
                return MediaType.IMAGE
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        return EXTENSION_MEDIA_TYPES.get(ext, MediaType.IMAGE)
