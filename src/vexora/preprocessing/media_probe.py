"""Vexora — Media metadata probing.

Image dimensions and video duration via OpenCV. Both probes degrade to an
"absent" value instead of raising, so a file OpenCV cannot read still gets a
complete (simulated) analysis.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from vexora.models.media import MediaFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dimensions:
    width: int = 0
    height: int = 0

    def __str__(self) -> str:
        return f"{self.width} x {self.height}"


async def probe_image_dimensions(media: MediaFile) -> Dimensions:
    if not media.content:
        return Dimensions()
    arr = np.frombuffer(media.content, dtype=np.uint8)
    try:
        image = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
    except cv2.error as exc:
        logger.warning("Cannot decode image %s: %s", media.name, exc)
        return Dimensions()
    if image is None:
        logger.warning("Cannot decode image %s", media.name)
        return Dimensions()
    h, w = image.shape[:2]
    return Dimensions(width=int(w), height=int(h))


async def probe_video_duration(media: MediaFile) -> str | None:
    """Duration label (``"1m 5s"`` / ``"42s"``), or None when unknown."""
    if not media.content:
        return None
    seconds = _video_seconds(media)
    if seconds is None:
        return None
    return format_duration(seconds)


def _video_seconds(media: MediaFile) -> float | None:
    suffix = Path(media.name).suffix or ".mp4"
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(media.content or b"")
        tmp_path = tmp.name
    cap = cv2.VideoCapture(tmp_path)
    try:
        if not cap.isOpened():
            logger.warning("Cannot open video %s", media.name)
            return None
        fps = cap.get(cv2.CAP_PROP_FPS)
        frames = cap.get(cv2.CAP_PROP_FRAME_COUNT)
        if fps <= 0 or frames <= 0:
            return None
        return frames / fps
    finally:
        cap.release()
        os.unlink(tmp_path)


def format_duration(seconds: float) -> str:
    mins, secs = int(seconds // 60), int(seconds % 60)
    return f"{mins}m {secs}s" if mins > 0 else f"{secs}s"


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1048576:
        return f"{size / 1024:.1f} KB"
    return f"{size / 1048576:.1f} MB"
