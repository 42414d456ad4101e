"""Vexora — Deterministic stand-ins for image/video inference.

Both models seed a SeededRandom with ``name-size-mime`` and draw the signal
vector in a fixed order. The draw order is part of the contract: reordering
any field changes every downstream value for the same file.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from vexora.core.simulation.base_model import ImageSignalModel, VideoSignalModel
from vexora.core.simulation.seeded_random import SeededRandom, media_key
from vexora.core.simulation.signals import ImageSignals, VideoSignals
from vexora.models.media import MediaFile

logger = logging.getLogger(__name__)


class SimulatedImageModel(ImageSignalModel):
    @property
    def name(self) -> str:
        return "simulated_image"

    @property
    def simulated(self) -> bool:
        return True

    async def load_model(self) -> None:
        self.model = "seeded_simulation"

    async def infer(self, media: MediaFile) -> ImageSignals:
        await self.ensure_loaded()
        rng = SeededRandom(media_key(media.name, media.size, media.mime_type))
        return self.draw(rng)

    @staticmethod
    def draw(rng: SeededRandom) -> ImageSignals:
        base = rng()
        ai_score = base * 0.4 + (0.3 if base > 0.7 else 0.0)
        faces_detected = rng() > 0.2
        # second draw only happens when the first one passes
        face_count = math.floor(rng() * 3) + 1 if rng() > 0.2 else 0
        face_consistency = 0.5 + rng() * 0.5
        artifacts = rng() > 0.6
        no_exif = rng() > 0.5
        manipulation = rng() * 0.6
        noise = rng() > 0.7
        quantization = rng() > 0.8
        return ImageSignals(
            ai_score=ai_score,
            faces_detected=faces_detected,
            face_count=face_count,
            face_consistency=face_consistency,
            artifacts_detected=artifacts,
            no_exif_data=no_exif,
            manipulation_probability=manipulation,
            noise_anomaly=noise,
            quantization_mismatch=quantization,
        )

    def get_model_info(self) -> dict[str, Any]:
        return {"name": "Simulated Image Forensics", "type": "seeded_prng", "trained": False}


class SimulatedVideoModel(VideoSignalModel):
    @property
    def name(self) -> str:
        return "simulated_video"

    @property
    def simulated(self) -> bool:
        return True

    async def load_model(self) -> None:
        self.model = "seeded_simulation"

    async def infer(self, media: MediaFile, duration: str | None = None) -> VideoSignals:
        await self.ensure_loaded()
        rng = SeededRandom(media_key(media.name, media.size, media.mime_type))
        return self.draw(rng, duration)

    @staticmethod
    def draw(rng: SeededRandom, duration: str | None = None) -> VideoSignals:
        if not duration:
            duration = f"{math.floor(rng() * 120) + 10}s"
        resolution = "1920x1080" if rng() > 0.5 else "1280x720"
        frame_rate = "30 fps" if rng() > 0.5 else "24 fps"
        faces = rng() > 0.2
        base = rng() * 0.4
        deepfake_score = base + (0.35 if rng() > 0.7 else 0.0)
        lip_sync = 0.5 + rng() * 0.5
        face_consistency = 0.5 + rng() * 0.5
        blink = rng() > 0.7
        voice = rng() > 0.6
        temporal = rng() > 0.65
        sync_offset = math.floor(rng() * 100)
        compression = rng() > 0.6
        return VideoSignals(
            duration=duration,
            resolution=resolution,
            frame_rate=frame_rate,
            codec="H.264",
            faces_in_video=faces,
            deepfake_score=deepfake_score,
            lip_sync_score=lip_sync,
            face_consistency=face_consistency,
            blink_pattern_anomalous=blink,
            voice_artifacts=voice,
            temporal_artifacts=temporal,
            sync_offset_ms=sync_offset,
            compression_artifacts=compression,
        )

    def get_model_info(self) -> dict[str, Any]:
        return {"name": "Simulated Video Forensics", "type": "seeded_prng", "trained": False}
