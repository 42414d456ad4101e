"""Tests for the image manipulation analyzer."""

import cv2
import numpy as np
import pytest

from vexora.core.base_analyzer import AnalysisInput
from vexora.core.simulation.base_model import ImageSignalModel
from vexora.core.simulation.signals import ImageSignals
from vexora.models.enums import Severity, Status
from vexora.models.media import MediaFile

CLEAN = ImageSignals(
    ai_score=0.1,
    faces_detected=False,
    face_count=0,
    face_consistency=0.95,
    artifacts_detected=False,
    no_exif_data=False,
    manipulation_probability=0.1,
    noise_anomaly=False,
    quantization_mismatch=False,
)
RISKY = ImageSignals(
    ai_score=0.7,
    faces_detected=True,
    face_count=2,
    face_consistency=0.5,
    artifacts_detected=True,
    no_exif_data=True,
    manipulation_probability=0.5,
    noise_anomaly=True,
    quantization_mismatch=True,
)


class FixedImageModel(ImageSignalModel):
    def __init__(self, signals: ImageSignals) -> None:
        super().__init__()
        self.signals = signals

    @property
    def name(self) -> str:
        return "fixed_image"

    async def load_model(self) -> None:
        self.model = "fixed"

    async def infer(self, media: MediaFile) -> ImageSignals:
        return self.signals

    def get_model_info(self) -> dict:
        return {"name": self.name}


async def _analyze(media, signals, policy):
    from vexora.core.visual.image_analyzer import ImageAnalyzer

    analyzer = ImageAnalyzer(model=FixedImageModel(signals), policy=policy)
    return await analyzer.analyze(AnalysisInput(media=media))


def _png(width: int, height: int) -> bytes:
    ok, buf = cv2.imencode(".png", np.zeros((height, width, 3), dtype=np.uint8))
    assert ok
    return buf.tobytes()


class TestImageAnalyzer:
    @pytest.mark.asyncio
    async def test_clean_image(self, policy):
        media = MediaFile(name="photo.jpg", size=2048, mime_type="image/jpeg")
        result = await _analyze(media, CLEAN, policy)
        assert result.status == Status.SAFE
        assert result.confidence == pytest.approx(90.0)
        assert result.title == "Image Appears Authentic"
        assert [f.description for f in result.risk_factors] == ["No signs of manipulation detected"]
        assert result.risk_factors[0].level == Severity.LOW
        assert result.detailed_analysis == []
        assert result.metadata_value("fileSize") == "2.0 KB"
        assert result.metadata_value("faceDetection") == "N/A"
        assert result.metadata_value("aiGenerationScore") == "10.0%"
        assert result.metadata_value("noiseAnalysis") == "Natural"
        assert result.metadata_value("quantization") == "Consistent"

    @pytest.mark.asyncio
    async def test_risky_image(self, policy):
        media = MediaFile(name="face.jpg", size=500_000, mime_type="image/jpeg")
        result = await _analyze(media, RISKY, policy)
        assert result.status == Status.DANGER
        assert result.confidence == 100.0
        assert result.title == "DEEPFAKE DETECTED"
        assert [f.description for f in result.risk_factors] == [
            "Image shows signs of AI generation or manipulation",
            "Inconsistencies detected in facial features",
            "Digital artifacts consistent with AI generation",
            "Original EXIF metadata appears to be stripped",
        ]
        assert result.risk_factors[0].level == Severity.HIGH
        labels = [f.label for f in result.detailed_analysis]
        assert labels == ["Texture Inconsistency", "Edge Sharpness", "Ocular Symmetry"]
        assert result.metadata_value("faceDetection") == "2 face(s)"
        assert result.metadata_value("noiseAnalysis") == "Irregular"
        assert result.metadata_value("quantization") == "Mismatch Detected"

    @pytest.mark.asyncio
    async def test_mime_mismatch(self, policy):
        media = MediaFile(name="photo.png", size=100, mime_type="image/jpeg")
        result = await _analyze(media, CLEAN, policy)
        assert result.status == Status.WARNING
        assert result.risk_factors[0].description == "File extension does not match actual file type"

    @pytest.mark.asyncio
    async def test_unknown_extension_not_checked(self, policy):
        media = MediaFile(name="photo", size=100, mime_type="image/jpeg")
        result = await _analyze(media, CLEAN, policy)
        assert result.status == Status.SAFE

    @pytest.mark.asyncio
    async def test_dimensions_from_content(self, policy):
        media = MediaFile.from_bytes(_png(20, 12), "tiny.png", "image/png")
        result = await _analyze(media, CLEAN, policy)
        assert result.metadata_value("Dimensions") == "20 x 12"

    @pytest.mark.asyncio
    async def test_missing_media_is_contained(self, policy):
        from vexora.core.visual.image_analyzer import ImageAnalyzer

        result = await ImageAnalyzer(model=FixedImageModel(CLEAN), policy=policy).analyze(AnalysisInput())
        assert result.status == Status.WARNING
        assert result.title == "Analysis Failed"
        assert result.risk_factors[0].description == "Analysis error: ValueError"

    @pytest.mark.asyncio
    async def test_simulated_model_is_deterministic(self, policy):
        from vexora.core.visual.image_analyzer import ImageAnalyzer

        analyzer = ImageAnalyzer(policy=policy)
        media = MediaFile(name="holiday.jpg", size=123_456, mime_type="image/jpeg")
        first = await analyzer.analyze(AnalysisInput(media=media))
        second = await analyzer.analyze(AnalysisInput(media=media))
        assert first.model_dump() == second.model_dump()


class TestMediaProbe:
    @pytest.mark.asyncio
    async def test_image_dimensions(self):
        from vexora.preprocessing.media_probe import probe_image_dimensions

        dims = await probe_image_dimensions(MediaFile.from_bytes(_png(7, 3), "a.png"))
        assert (dims.width, dims.height) == (7, 3)

    @pytest.mark.asyncio
    async def test_undecodable_or_missing_content(self):
        from vexora.preprocessing.media_probe import probe_image_dimensions

        assert str(await probe_image_dimensions(MediaFile.from_bytes(b"not an image", "a.png"))) == "0 x 0"
        assert str(await probe_image_dimensions(MediaFile(name="a.png", size=10))) == "0 x 0"

    def test_format_file_size(self):
        from vexora.preprocessing.media_probe import format_file_size

        assert format_file_size(512) == "512 B"
        assert format_file_size(2048) == "2.0 KB"
        assert format_file_size(3 * 1048576) == "3.0 MB"

    def test_format_duration(self):
        from vexora.preprocessing.media_probe import format_duration

        assert format_duration(42) == "42s"
        assert format_duration(65.7) == "1m 5s"
