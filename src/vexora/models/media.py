"""Vexora — File handle passed to the image/video pipelines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MediaFile:
    name: str
    size: int
    mime_type: str = ""
    content: bytes | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_bytes(cls, content: bytes, name: str, mime_type: str = "", last_modified: datetime | None = None) -> MediaFile:
        return cls(name=name, size=len(content), mime_type=mime_type, content=content, last_modified=last_modified)

    @property
    def extension(self) -> str:
        return self.name.rsplit(".", 1)[-1].lower() if "." in self.name else ""
