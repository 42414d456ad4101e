"""Vexora — Shared enumerations."""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MediaType(str, Enum):
    URL = "url"
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class Classification(str, Enum):
    """Text pipeline verdict."""

    SCAM = "SCAM"
    REAL = "REAL"


class ConfidenceLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
