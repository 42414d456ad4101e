"""Vexora — Image manipulation analyzer."""

from __future__ import annotations

import logging

from vexora.core.base_analyzer import AnalysisInput, BaseAnalyzer
from vexora.core.fusion.risk_engine import MEDIA_THRESHOLDS, RiskAccumulator, Verdict, build_result
from vexora.core.policy import DetectionPolicy, default_policy
from vexora.core.simulation.base_model import ImageSignalModel
from vexora.core.simulation.signals import ImageSignals
from vexora.core.simulation.simulated_models import SimulatedImageModel
from vexora.models.enums import MediaType, Severity, Status
from vexora.models.media import MediaFile
from vexora.models.schemas import AnalysisResult, DetailedFinding
from vexora.preprocessing.media_probe import format_file_size, probe_image_dimensions

logger = logging.getLogger(__name__)

IMAGE_VERDICTS = {
    Status.SAFE: Verdict("Image Appears Authentic", "Analysis indicates this is likely an unmanipulated image."),
    Status.WARNING: Verdict(
        "Potential Manipulation Detected",
        "Some indicators suggest this image may have been edited or generated.",
    ),
    Status.DANGER: Verdict(
        "DEEPFAKE DETECTED",
        "High probability of AI-generated or manipulated content. Exercise extreme caution!",
    ),
}

TEXTURE_FINDINGS = (
    DetailedFinding(
        label="Texture Inconsistency",
        description="Local variance in noise patterns detected in top-left quadrant.",
        confidence=84,
    ),
    DetailedFinding(
        label="Edge Sharpness",
        description="Unnatural sharpness on subject boundaries suggests layer masking.",
        confidence=76,
    ),
)
OCULAR_FINDING = DetailedFinding(
    label="Ocular Symmetry",
    description="Iris patterns show slight geometric misalignment between eyes.",
    confidence=91,
)


class ImageAnalyzer(BaseAnalyzer):
    def __init__(self, model: ImageSignalModel | None = None, policy: DetectionPolicy | None = None) -> None:
        self.model = model or SimulatedImageModel()
        self.policy = policy or default_policy()

    @property
    def name(self) -> str:
        return "image_forensics"

    @property
    def media_type(self) -> MediaType:
        return MediaType.IMAGE

    async def _run_analysis(self, inp: AnalysisInput) -> AnalysisResult:
        if inp.media is None:
            raise ValueError("image analysis requires a media file")
        media = inp.media
        acc = RiskAccumulator()
        acc.meta("fileName", media.name)
        acc.meta("fileSize", format_file_size(media.size))
        acc.meta("fileType", media.mime_type or "Unknown")
        if media.last_modified is not None:
            acc.meta("lastModified", media.last_modified.date().isoformat())
        acc.meta("Dimensions", str(await probe_image_dimensions(media)))

        if self._mime_mismatch(media):
            acc.add(0.2, Severity.MEDIUM, "File extension does not match actual file type")

        sig = await self.model.infer(media)
        acc.meta("faceDetection", f"{sig.face_count} face(s)" if sig.faces_detected else "N/A")
        acc.meta("aiGenerationScore", f"{sig.ai_score * 100:.1f}%")
        acc.meta("noiseAnalysis", "Irregular" if sig.noise_anomaly else "Natural")
        acc.meta("quantization", "Mismatch Detected" if sig.quantization_mismatch else "Consistent")

        self.score_signals(acc, sig)
        return build_result(
            acc,
            IMAGE_VERDICTS,
            thresholds=MEDIA_THRESHOLDS,
            safe_fallback="No signs of manipulation detected",
            detailed=self.detailed_findings(sig),
        )

    @staticmethod
    def score_signals(acc: RiskAccumulator, sig: ImageSignals) -> None:
        acc.add(sig.ai_score)
        if sig.ai_score > 0.3:
            acc.flag(
                Severity.HIGH if sig.ai_score > 0.6 else Severity.MEDIUM,
                "Image shows signs of AI generation or manipulation",
            )
        if sig.faces_detected and sig.face_consistency < 0.7:
            acc.add(0.2, Severity.MEDIUM, "Inconsistencies detected in facial features")
        if sig.artifacts_detected:
            acc.add(0.15, Severity.MEDIUM, "Digital artifacts consistent with AI generation")
        if sig.no_exif_data:
            acc.add(0.1, Severity.LOW, "Original EXIF metadata appears to be stripped")

    @staticmethod
    def detailed_findings(sig: ImageSignals) -> list[DetailedFinding]:
        """Canned illustrations, not derived from further computation."""
        findings: list[DetailedFinding] = []
        if sig.ai_score > 0.4:
            findings.extend(TEXTURE_FINDINGS)
        if sig.faces_detected and sig.face_consistency < 0.8:
            findings.append(OCULAR_FINDING)
        return findings

    def _mime_mismatch(self, media: MediaFile) -> bool:
        expected = self.policy.expected_image_mime.get(media.extension)
        return expected is not None and media.mime_type != expected
