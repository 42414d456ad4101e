"""Vexora — Result data contract returned by every analysis pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from vexora.models.enums import Severity, Status


class MetadataItem(BaseModel):
    label: str
    value: str


class RiskFactor(BaseModel):
    level: Severity
    description: str


class DetailedFinding(BaseModel):
    """Fine-grained finding shown for image/video results."""

    timestamp: str | None = None
    label: str
    description: str
    confidence: float


class AnalysisResult(BaseModel):
    """Output of every pipeline.

    ``metadata`` and ``risk_factors`` keep insertion order; consumers render them
    in that order. Serialised with camelCase aliases (``riskFactors``,
    ``detailedAnalysis``).
    """

    model_config = ConfigDict(populate_by_name=True)

    status: Status
    confidence: float = Field(ge=0.0, le=100.0)
    title: str
    description: str
    metadata: list[MetadataItem] = Field(default_factory=list)
    risk_factors: list[RiskFactor] = Field(default_factory=list, alias="riskFactors")
    detailed_analysis: list[DetailedFinding] | None = Field(default=None, alias="detailedAnalysis")

    def metadata_value(self, label: str) -> str | None:
        """First metadata value with ``label``, or None."""
        for item in self.metadata:
            if item.label == label:
                return item.value
        return None


class UrlRequest(BaseModel):
    url: str = Field(min_length=1, max_length=8192)


class TextRequest(BaseModel):
    text: str = Field(min_length=1, max_length=100_000)
