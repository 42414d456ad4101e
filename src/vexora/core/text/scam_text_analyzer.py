"""Vexora — Scam message classifier.

Embedded links and four tone/content pattern families feed one score. The
SCAM/REAL decision also has a compound arm: an untrusted link alone is not
enough, but an untrusted link plus urgency or reward bait is.
"""

from __future__ import annotations

import logging

from vexora.core.base_analyzer import AnalysisInput, BaseAnalyzer
from vexora.core.fusion.risk_engine import RiskAccumulator
from vexora.core.policy import DetectionPolicy, default_policy
from vexora.models.enums import Classification, ConfidenceLevel, MediaType, Severity, Status
from vexora.models.schemas import AnalysisResult
from vexora.preprocessing.text_processor import TextProcessor
from vexora.preprocessing.url_parser import InvalidURLError, parse_url

logger = logging.getLogger(__name__)

SCAM_SCORE = 0.3
HIGH_CONFIDENCE_SCORE = 0.6

# Low is never produced by the current rules.
CONFIDENCE_PERCENT = {
    ConfidenceLevel.HIGH: 95.0,
    ConfidenceLevel.MEDIUM: 75.0,
    ConfidenceLevel.LOW: 50.0,
}

# family -> (delta, severity, reason, factor description)
PATTERN_RULES = {
    "urgency": (0.3, Severity.MEDIUM, "Uses urgent or threatening tone", "Creates artificial urgency"),
    "reward": (0.35, Severity.MEDIUM, "Promises unauthorized rewards or gifts", "Suspected reward bait"),
    "sensitive": (0.5, Severity.HIGH, "Requests sensitive information (OTP/Password)", "Asks for private credentials"),
    "suspension": (0.4, Severity.HIGH, "Threatens account suspension", "Fake account alert"),
}


class ScamTextAnalyzer(BaseAnalyzer):
    def __init__(self, policy: DetectionPolicy | None = None, processor: TextProcessor | None = None) -> None:
        self.policy = policy or default_policy()
        self.processor = processor or TextProcessor()

    @property
    def name(self) -> str:
        return "scam_text"

    @property
    def media_type(self) -> MediaType:
        return MediaType.TEXT

    async def _run_analysis(self, inp: AnalysisInput) -> AnalysisResult:
        features = await self.processor.process(inp.text or "")
        text = features.original
        acc = RiskAccumulator()
        reasons: list[str] = []

        untrusted_link = False
        for raw_url in features.urls:
            try:
                host = parse_url(raw_url).host
            except InvalidURLError:
                untrusted_link = True
                acc.add(0.3)
                reasons.append("Contains malformed URL")
                continue
            if self.policy.is_allow_listed(host) and not self.policy.is_shortener(host):
                acc.meta("Trusted Link", host)
            else:
                untrusted_link = True
                acc.add(0.4, Severity.HIGH, f"Unofficial link detected: {host}")
                reasons.append("Contains suspicious or unofficial link")

        matched = set()
        for family, (delta, level, reason, factor) in PATTERN_RULES.items():
            if self.policy.compiled_text_patterns[family].search(text):
                matched.add(family)
                acc.add(delta, level, factor)
                reasons.append(reason)

        is_scam = acc.score > SCAM_SCORE or (untrusted_link and bool(matched & {"urgency", "reward"}))
        if is_scam:
            classification = Classification.SCAM
            level = ConfidenceLevel.HIGH if acc.score > HIGH_CONFIDENCE_SCORE else ConfidenceLevel.MEDIUM
            description = ". ".join(reasons) if reasons else "Matches general scam patterns."
        else:
            # REAL is always reported at High confidence
            classification = Classification.REAL
            level = ConfidenceLevel.HIGH
            if features.urls and not untrusted_link:
                description = "Uses official trusted domain and normal tone."
            else:
                description = "Normal conversation pattern detected."
            if not acc.factors:
                acc.flag(Severity.LOW, "No scam indicators detected")

        acc.meta("classification", classification.value)
        acc.meta("confidence", level.value)
        logger.debug("text score=%.2f links=%d families=%s", acc.score, len(features.urls), sorted(matched))

        return AnalysisResult(
            status=Status.DANGER if is_scam else Status.SAFE,
            confidence=CONFIDENCE_PERCENT[level],
            title=f"Classification: {classification.value}",
            description=description,
            metadata=acc.metadata,
            risk_factors=acc.factors,
        )
