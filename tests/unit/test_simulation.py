"""Tests for the seeded generator and simulated signal models."""

import pytest

from vexora.models.media import MediaFile


class TestStringHash:
    def test_known_values(self):
        from vexora.core.simulation.seeded_random import string_hash

        assert string_hash("") == 0
        assert string_hash("a") == 97
        assert string_hash("ab") == 97 * 31 + 98

    def test_wraps_to_int32(self):
        from vexora.core.simulation.seeded_random import string_hash

        h = string_hash("a-very-long-file-name-for-overflow.jpg-123456-image/jpeg" * 4)
        assert -(2**31) <= h < 2**31

    def test_utf16_code_units(self):
        from vexora.core.simulation.seeded_random import string_hash

        # U+1F600 is the surrogate pair D83D DE00
        assert string_hash("\U0001f600") == 0xD83D * 31 + 0xDE00


class TestSeededRandom:
    def test_first_draws(self):
        from vexora.core.simulation.seeded_random import SeededRandom

        rng = SeededRandom("")
        m = 2**32
        first = 1013904223
        second = (1664525 * first + 1013904223) % m
        assert rng() == first / m
        assert rng() == second / m
        assert rng.draws == 2

    def test_same_key_same_sequence(self):
        from vexora.core.simulation.seeded_random import SeededRandom

        a = SeededRandom("clip.mp4-1024-video/mp4").take(50)
        b = SeededRandom("clip.mp4-1024-video/mp4").take(50)
        assert a == b
        assert all(0.0 <= v < 1.0 for v in a)

    def test_different_keys_diverge(self):
        from vexora.core.simulation.seeded_random import SeededRandom

        assert SeededRandom("a.jpg-1-image/jpeg").take(5) != SeededRandom("a.jpg-2-image/jpeg").take(5)

    def test_reset(self):
        from vexora.core.simulation.seeded_random import SeededRandom

        rng = SeededRandom("key")
        first = rng.take(3)
        rng.reset()
        assert rng.take(3) == first

    def test_seed_non_negative(self):
        from vexora.core.simulation.seeded_random import SeededRandom, string_hash

        for key in ("x" * n for n in range(1, 40)):
            rng = SeededRandom(key)
            assert rng.seed == abs(string_hash(key))
            assert rng.seed >= 0

    def test_media_key(self):
        from vexora.core.simulation.seeded_random import media_key

        assert media_key("a.png", 10, "image/png") == "a.png-10-image/png"
        assert media_key("a.png", 10, "") == "a.png-10-"


class TestSimulatedImageModel:
    def test_draw_order_without_face_count(self, seq_rng):
        from vexora.core.simulation.simulated_models import SimulatedImageModel

        rng = seq_rng([0.8, 0.5, 0.1, 0.4, 0.7, 0.6, 0.5, 0.8, 0.9])
        sig = SimulatedImageModel.draw(rng)
        assert rng.calls == 9
        assert sig.ai_score == pytest.approx(0.8 * 0.4 + 0.3)
        assert sig.faces_detected is True
        assert sig.face_count == 0
        assert sig.face_consistency == pytest.approx(0.7)
        assert sig.artifacts_detected is True
        assert sig.no_exif_data is True
        assert sig.manipulation_probability == pytest.approx(0.3)
        assert sig.noise_anomaly is True
        assert sig.quantization_mismatch is True

    def test_face_count_takes_extra_draw(self, seq_rng):
        from vexora.core.simulation.simulated_models import SimulatedImageModel

        rng = seq_rng([0.1, 0.1, 0.5, 0.9, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        sig = SimulatedImageModel.draw(rng)
        assert rng.calls == 10
        assert sig.ai_score == pytest.approx(0.04)
        assert sig.faces_detected is False
        assert sig.face_count == 3
        assert sig.face_consistency == pytest.approx(0.5)
        assert not sig.artifacts_detected

    @pytest.mark.asyncio
    async def test_infer_is_deterministic(self):
        from vexora.core.simulation.simulated_models import SimulatedImageModel

        media = MediaFile(name="portrait.jpg", size=204_800, mime_type="image/jpeg")
        first = await SimulatedImageModel().infer(media)
        second = await SimulatedImageModel().infer(media)
        assert first == second

    @pytest.mark.asyncio
    async def test_health_check(self):
        from vexora.core.simulation.simulated_models import SimulatedImageModel

        model = SimulatedImageModel()
        assert model.health_check()["loaded"] is False
        await model.ensure_loaded()
        health = model.health_check()
        assert health["loaded"] is True
        assert health["simulated"] is True
        assert health["type"] == "image"
        assert health["info"]["type"] == "seeded_prng"


class TestSimulatedVideoModel:
    def test_probed_duration_skips_draw(self, seq_rng):
        from vexora.core.simulation.simulated_models import SimulatedVideoModel

        rng = seq_rng([0.6, 0.4, 0.9, 0.5, 0.8, 0.2, 0.4, 0.75, 0.5, 0.7, 0.425, 0.1])
        sig = SimulatedVideoModel.draw(rng, "12s")
        assert rng.calls == 12
        assert sig.duration == "12s"
        assert sig.resolution == "1920x1080"
        assert sig.frame_rate == "24 fps"
        assert sig.codec == "H.264"
        assert sig.faces_in_video is True
        assert sig.deepfake_score == pytest.approx(0.55)
        assert sig.lip_sync_score == pytest.approx(0.6)
        assert sig.face_consistency == pytest.approx(0.7)
        assert sig.blink_pattern_anomalous is True
        assert sig.voice_artifacts is False
        assert sig.temporal_artifacts is True
        assert sig.sync_offset_ms == 42
        assert sig.compression_artifacts is False

    def test_missing_duration_is_drawn_first(self, seq_rng):
        from vexora.core.simulation.simulated_models import SimulatedVideoModel

        rng = seq_rng([0.5] + [0.0] * 12)
        sig = SimulatedVideoModel.draw(rng, None)
        assert rng.calls == 13
        assert sig.duration == "70s"
        assert sig.resolution == "1280x720"
        assert sig.deepfake_score == 0.0

    @pytest.mark.asyncio
    async def test_infer_is_deterministic(self):
        from vexora.core.simulation.simulated_models import SimulatedVideoModel

        media = MediaFile(name="clip.mp4", size=5_000_000, mime_type="video/mp4")
        first = await SimulatedVideoModel().infer(media)
        second = await SimulatedVideoModel().infer(media)
        assert first == second
        assert first.duration.endswith("s")


# Reference values for "photo.jpg-123456-image/jpeg", identical to the browser
# generator (JS doubles) so results match across platforms.
GOLDEN_MEDIA = MediaFile(name="photo.jpg", size=123_456, mime_type="image/jpeg")
GOLDEN_HASH = -1557234530
GOLDEN_STATES = [
    1107143513,
    1682382052,
    2077377267,
    3598986166,
    257273757,
    1310092376,
    3075834839,
    2118995786,
    841840161,
    1862801676,
    2348744955,
    189334046,
    451543781,
]


class TestGoldenVectors:
    def test_hash_and_stream(self):
        from vexora.core.simulation.seeded_random import SeededRandom, media_key, string_hash

        key = media_key(GOLDEN_MEDIA.name, GOLDEN_MEDIA.size, GOLDEN_MEDIA.mime_type)
        assert key == "photo.jpg-123456-image/jpeg"
        assert string_hash(key) == GOLDEN_HASH
        rng = SeededRandom(key)
        assert rng.seed == 1557234530
        assert rng.take(len(GOLDEN_STATES)) == [s / 2**32 for s in GOLDEN_STATES]

    @pytest.mark.asyncio
    async def test_image_signals(self):
        from vexora.core.simulation.signals import ImageSignals
        from vexora.core.simulation.simulated_models import SimulatedImageModel

        assert await SimulatedImageModel().infer(GOLDEN_MEDIA) == ImageSignals(
            ai_score=0.10311077469959856,
            faces_detected=True,
            face_count=3,
            face_consistency=0.52995060721877962,
            artifacts_detected=False,
            no_exif_data=True,
            manipulation_probability=0.29602029165253041,
            noise_anomaly=False,
            quantization_mismatch=False,
        )

    @pytest.mark.asyncio
    async def test_video_signals(self):
        from vexora.core.simulation.signals import VideoSignals
        from vexora.core.simulation.simulated_models import SimulatedVideoModel

        assert await SimulatedVideoModel().infer(GOLDEN_MEDIA) == VideoSignals(
            duration="40s",
            resolution="1280x720",
            frame_rate="24 fps",
            codec="H.264",
            faces_in_video=True,
            deepfake_score=0.023960485775023702,
            lip_sync_score=0.85807430266868323,
            face_consistency=0.74668357637710869,
            blink_pattern_anomalous=False,
            voice_artifacts=False,
            temporal_artifacts=False,
            sync_offset_ms=4,
            compression_artifacts=False,
        )

    @pytest.mark.asyncio
    async def test_image_result(self, policy):
        from vexora.core.base_analyzer import AnalysisInput
        from vexora.core.visual.image_analyzer import ImageAnalyzer
        from vexora.models.enums import Status

        result = await ImageAnalyzer(policy=policy).analyze(AnalysisInput(media=GOLDEN_MEDIA))
        assert result.status == Status.WARNING
        assert [f.description for f in result.risk_factors] == [
            "Inconsistencies detected in facial features",
            "Original EXIF metadata appears to be stripped",
        ]
        assert [f.label for f in result.detailed_analysis] == ["Ocular Symmetry"]
        assert result.metadata_value("aiGenerationScore") == "10.3%"
        assert result.metadata_value("faceDetection") == "3 face(s)"
