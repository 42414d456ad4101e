"""Vexora — Abstract BaseAnalyzer.

Every pipeline (URL, text, image, video) inherits from BaseAnalyzer.
Provides timing, logging and containment of unexpected faults so callers
always receive an AnalysisResult.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from vexora.models.enums import MediaType, Severity, Status
from vexora.models.media import MediaFile
from vexora.models.schemas import AnalysisResult, RiskFactor

logger = logging.getLogger(__name__)


class AnalysisInput:
    """Unified input payload. Each analyzer reads the field it needs."""

    __slots__ = ("text", "media")

    def __init__(self, *, text: str | None = None, media: MediaFile | None = None) -> None:
        self.text = text
        self.media = media


class BaseAnalyzer(ABC):
    """Abstract base class for every analysis pipeline.

    Subclasses MUST implement:
      - name, media_type (properties)
      - _run_analysis()  — async scoring logic
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def media_type(self) -> MediaType: ...

    @abstractmethod
    async def _run_analysis(self, inp: AnalysisInput) -> AnalysisResult:
        """Core scoring logic. Subclasses implement this."""
        ...

    async def analyze(self, inp: AnalysisInput) -> AnalysisResult:
        """Public entry-point: wraps with timing and error handling."""
        start = time.perf_counter()
        try:
            result = await self._run_analysis(inp)
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000
            logger.error("Analyzer %s failed after %.0fms: %s", self.name, elapsed, exc, exc_info=True)
            return self._failure_result(exc)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Analyzer %s — status=%s confidence=%.1f factors=%d (%.0fms)",
            self.name,
            result.status.value,
            result.confidence,
            len(result.risk_factors),
            elapsed,
        )
        return result

    def _failure_result(self, exc: Exception) -> AnalysisResult:
        return AnalysisResult(
            status=Status.WARNING,
            confidence=50.0,
            title="Analysis Failed",
            description="The input could not be fully analyzed. Treat it with caution.",
            metadata=[],
            risk_factors=[RiskFactor(level=Severity.MEDIUM, description=f"Analysis error: {type(exc).__name__}")],
        )

    def health_check(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.media_type.value}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} type={self.media_type.value}>"
