"""Vexora — Signal vectors produced by image/video signal models.

The rule layer only reads these fields, so a real inference engine can replace
the simulated models as long as it fills the same vector.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageSignals:
    ai_score: float
    faces_detected: bool
    face_count: int
    face_consistency: float
    artifacts_detected: bool
    no_exif_data: bool
    manipulation_probability: float
    noise_anomaly: bool
    quantization_mismatch: bool


@dataclass(frozen=True)
class VideoSignals:
    duration: str
    resolution: str
    frame_rate: str
    codec: str
    faces_in_video: bool
    deepfake_score: float
    lip_sync_score: float
    face_consistency: float
    blink_pattern_anomalous: bool
    voice_artifacts: bool
    temporal_artifacts: bool
    sync_offset_ms: int
    compression_artifacts: bool
