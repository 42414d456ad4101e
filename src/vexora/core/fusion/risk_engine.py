"""Vexora — Risk accumulation and status thresholds.

Rule contributions are summed without a ceiling; the score is clamped to 1.0
only when status and confidence are derived from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vexora.models.enums import Severity, Status
from vexora.models.schemas import AnalysisResult, DetailedFinding, MetadataItem, RiskFactor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Thresholds:
    """``score < warning`` is safe, ``score >= danger`` is danger."""

    warning: float = 0.3
    danger: float = 0.6


URL_THRESHOLDS = Thresholds(warning=0.3, danger=0.6)
MEDIA_THRESHOLDS = Thresholds(warning=0.3, danger=0.55)


@dataclass(frozen=True)
class Verdict:
    """Title/description pair shown for one status."""

    title: str
    description: str


@dataclass
class RiskAccumulator:
    """Per-call score, factors and metadata in insertion order."""

    score: float = 0.0
    factors: list[RiskFactor] = field(default_factory=list)
    metadata: list[MetadataItem] = field(default_factory=list)

    def add(self, delta: float, level: Severity | None = None, description: str | None = None) -> None:
        self.score += delta
        if level is not None and description is not None:
            self.factors.append(RiskFactor(level=level, description=description))

    def flag(self, level: Severity, description: str) -> None:
        """Record a factor without a score contribution."""
        self.factors.append(RiskFactor(level=level, description=description))

    def meta(self, label: str, value: str) -> None:
        self.metadata.append(MetadataItem(label=label, value=value))

    @property
    def clamped(self) -> float:
        return min(self.score, 1.0)


def classify(score: float, thresholds: Thresholds = URL_THRESHOLDS) -> tuple[Status, float]:
    """Map a raw score to (status, confidence percentage)."""
    s = max(0.0, min(score, 1.0))
    if s < thresholds.warning:
        return Status.SAFE, 100.0 - s * 100.0
    if s < thresholds.danger:
        return Status.WARNING, 50.0 + s * 50.0
    return Status.DANGER, min(100.0, 70.0 + s * 33.3)


def build_result(
    acc: RiskAccumulator,
    verdicts: dict[Status, Verdict],
    *,
    thresholds: Thresholds = URL_THRESHOLDS,
    safe_fallback: str,
    detailed: list[DetailedFinding] | None = None,
) -> AnalysisResult:
    """Classify the accumulated score and assemble the result.

    A safe result with no fired factor gets one low-severity ``safe_fallback``
    factor so the explanation is never empty.
    """
    status, confidence = classify(acc.score, thresholds)
    if status is Status.SAFE and not acc.factors:
        acc.flag(Severity.LOW, safe_fallback)
    verdict = verdicts[status]
    logger.debug("score=%.4f clamped=%.4f status=%s confidence=%.2f", acc.score, acc.clamped, status.value, confidence)
    return AnalysisResult(
        status=status,
        confidence=confidence,
        title=verdict.title,
        description=verdict.description,
        metadata=acc.metadata,
        risk_factors=acc.factors,
        detailed_analysis=detailed,
    )


@dataclass(frozen=True)
class RuleHit:
    """One fired rule: score delta, factor and an optional metadata pair."""

    delta: float
    level: Severity
    description: str
    metadata: tuple[str, str] | None = None


def apply_hits(acc: RiskAccumulator, hits: list[RuleHit]) -> None:
    for hit in hits:
        acc.add(hit.delta, hit.level, hit.description)
        if hit.metadata is not None:
            acc.meta(*hit.metadata)
