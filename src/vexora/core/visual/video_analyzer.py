"""Vexora — Video deepfake analyzer."""

from __future__ import annotations

import logging

from vexora.core.base_analyzer import AnalysisInput, BaseAnalyzer
from vexora.core.fusion.risk_engine import MEDIA_THRESHOLDS, RiskAccumulator, Verdict, build_result
from vexora.core.simulation.base_model import VideoSignalModel
from vexora.core.simulation.signals import VideoSignals
from vexora.core.simulation.simulated_models import SimulatedVideoModel
from vexora.models.enums import MediaType, Severity, Status
from vexora.models.schemas import AnalysisResult, DetailedFinding
from vexora.preprocessing.media_probe import format_file_size, probe_video_duration

logger = logging.getLogger(__name__)

VIDEO_VERDICTS = {
    Status.SAFE: Verdict(
        "Video Appears Authentic",
        "Analysis indicates this is likely genuine, unmanipulated video content.",
    ),
    Status.WARNING: Verdict(
        "Potential Video Manipulation",
        "Some indicators suggest this video may contain synthetic or altered content.",
    ),
    Status.DANGER: Verdict(
        "DEEPFAKE VIDEO DETECTED",
        "High probability of AI-generated or manipulated video. Do not trust this content!",
    ),
}

# fixed list, not derived from the signal vector
FRAME_FINDINGS = (
    DetailedFinding(
        timestamp="00:03",
        label="Temporal Glitch",
        description="Background flickering detected during high-motion movement.",
        confidence=82,
    ),
    DetailedFinding(
        timestamp="00:08",
        label="Ocular Artifact",
        description='Subtle "shadow eye" effect during rapid head rotation.',
        confidence=78,
    ),
    DetailedFinding(
        timestamp="00:15",
        label="Lip-Sync Lag",
        description="Audio-visual desync exceeds natural threshold (115ms).",
        confidence=89,
    ),
    DetailedFinding(
        timestamp="00:22",
        label="Face Boundary Blend",
        description="Inconsistent masking observed around the jawline boundary.",
        confidence=94,
    ),
)


class VideoAnalyzer(BaseAnalyzer):
    def __init__(self, model: VideoSignalModel | None = None) -> None:
        self.model = model or SimulatedVideoModel()

    @property
    def name(self) -> str:
        return "video_forensics"

    @property
    def media_type(self) -> MediaType:
        return MediaType.VIDEO

    async def _run_analysis(self, inp: AnalysisInput) -> AnalysisResult:
        if inp.media is None:
            raise ValueError("video analysis requires a media file")
        media = inp.media
        acc = RiskAccumulator()
        acc.meta("fileName", media.name)
        acc.meta("fileSize", format_file_size(media.size))
        acc.meta("fileType", media.mime_type or "Unknown")

        sig = await self.model.infer(media, await probe_video_duration(media))
        acc.meta("Duration", sig.duration)
        acc.meta("Resolution", sig.resolution)
        acc.meta("Frame Rate", sig.frame_rate)
        acc.meta("Codec", sig.codec)
        acc.meta("Faces Detected", "Yes" if sig.faces_in_video else "No")

        self.score_signals(acc, sig)

        acc.meta("deepfakeScore", f"{sig.deepfake_score * 100:.1f}%")
        acc.meta("lipSyncMatch", f"{sig.lip_sync_score * 100:.1f}%")
        acc.meta("syncOffset", f"{sig.sync_offset_ms}ms")
        acc.meta("compressionArtifacts", "High (Lossy)" if sig.compression_artifacts else "Standard")

        return build_result(
            acc,
            VIDEO_VERDICTS,
            thresholds=MEDIA_THRESHOLDS,
            safe_fallback="No signs of video manipulation detected",
            detailed=list(FRAME_FINDINGS) if sig.deepfake_score > 0.4 else [],
        )

    @staticmethod
    def score_signals(acc: RiskAccumulator, sig: VideoSignals) -> None:
        acc.add(sig.deepfake_score)
        if sig.deepfake_score > 0.3:
            acc.flag(
                Severity.HIGH if sig.deepfake_score > 0.6 else Severity.MEDIUM,
                "Video shows characteristics of AI-generated content",
            )
        faces = sig.faces_in_video
        if faces and sig.lip_sync_score < 0.7:
            acc.add(0.2, Severity.HIGH, "Audio-visual synchronization anomalies detected")
        if faces and sig.face_consistency < 0.75:
            acc.add(0.2, Severity.MEDIUM, "Facial features show inconsistency across frames")
        if faces and sig.blink_pattern_anomalous:
            acc.add(0.15, Severity.MEDIUM, "Unnatural blinking patterns detected")
        if sig.voice_artifacts:
            acc.add(0.15, Severity.MEDIUM, "Voice synthesis artifacts detected in audio")
        if sig.temporal_artifacts:
            acc.add(0.1, Severity.LOW, "Temporal inconsistencies between frames")
