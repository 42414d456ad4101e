"""Vexora — Message text preprocessing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

URL_LITERAL = re.compile(r"https?://[^\s]+", re.IGNORECASE)


@dataclass
class TextFeatures:
    original: str = ""
    urls: list[str] = field(default_factory=list)


class TextProcessor:
    """Decodes message text and pulls out URL literals. No truncation."""

    async def process(self, content: bytes | str) -> TextFeatures:
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
        return TextFeatures(original=text, urls=URL_LITERAL.findall(text))
