"""Vexora — Abstract signal model.

Image and video pipelines obtain their perceptual signals from a SignalModel.
The bundled models are deterministic simulations; a real inference engine can
be dropped in by subclassing and returning the same signal vector.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from vexora.core.simulation.signals import ImageSignals, VideoSignals
from vexora.models.enums import MediaType
from vexora.models.media import MediaFile

logger = logging.getLogger(__name__)


class SignalModel(ABC):
    """Base class for every image/video signal source.

    Subclasses MUST implement:
      - name, media_type (properties)
      - load_model()  — async one-time setup
      - get_model_info()
    and expose an ``infer`` coroutine returning the modality's signal vector.
    """

    def __init__(self) -> None:
        self.model: Any = None
        self._loaded = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable model identifier."""
        ...

    @property
    @abstractmethod
    def media_type(self) -> MediaType: ...

    @property
    def version(self) -> str:
        return "1.0.0"

    @property
    def simulated(self) -> bool:
        return False

    async def ensure_loaded(self) -> None:
        """Lazy-load on first use."""
        if not self._loaded:
            logger.info("Loading signal model %s", self.name)
            await self.load_model()
            self._loaded = True

    @abstractmethod
    async def load_model(self) -> None: ...

    def health_check(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.media_type.value,
            "loaded": self._loaded,
            "simulated": self.simulated,
            "info": self.get_model_info(),
        }

    @abstractmethod
    def get_model_info(self) -> dict[str, Any]: ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} type={self.media_type.value}>"


class ImageSignalModel(SignalModel):
    @property
    def media_type(self) -> MediaType:
        return MediaType.IMAGE

    @abstractmethod
    async def infer(self, media: MediaFile) -> ImageSignals: ...


class VideoSignalModel(SignalModel):
    @property
    def media_type(self) -> MediaType:
        return MediaType.VIDEO

    @abstractmethod
    async def infer(self, media: MediaFile, duration: str | None = None) -> VideoSignals:
        """``duration`` is the probed duration label, or None when probing failed."""
        ...
