"""Vexora — Detection policy (allow-lists, keyword lists, patterns).

The policy is data, not code: the bundled ``data/default_policy.json`` is used
unless ``VEXORA_POLICY_PATH`` points at a replacement file.
"""

from __future__ import annotations

import logging
import re
from functools import cached_property, lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

TEXT_PATTERN_FAMILIES = ("urgency", "reward", "sensitive", "suspension")


class DetectionPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    safe_domains: tuple[str, ...]
    trusted_suffixes: tuple[str, ...] = (".gov.in",)
    government_suffixes: tuple[str, ...] = (".gov", ".gov.in", ".nic.in")
    url_shorteners: tuple[str, ...] = ()
    brand_patterns: tuple[str, ...] = ()
    phishing_keywords: tuple[str, ...] = ()
    suspicious_tlds: tuple[str, ...] = ()
    typosquat_targets: tuple[str, ...] = ()
    text_patterns: dict[str, str] = Field(default_factory=dict)
    expected_image_mime: dict[str, str] = Field(default_factory=dict)

    @field_validator("safe_domains", "url_shorteners", "typosquat_targets")
    @classmethod
    def _lower_domains(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(d.strip().lower() for d in v if d.strip())

    @field_validator("brand_patterns")
    @classmethod
    def _check_regex(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for pattern in v:
            _compile_or_raise(pattern)
        return v

    @field_validator("text_patterns")
    @classmethod
    def _check_families(cls, v: dict[str, str]) -> dict[str, str]:
        missing = [f for f in TEXT_PATTERN_FAMILIES if f not in v]
        if missing:
            raise ValueError(f"text_patterns missing families: {', '.join(missing)}")
        for pattern in v.values():
            _compile_or_raise(pattern)
        return v

    # --- compiled views ---

    @cached_property
    def compiled_brand_patterns(self) -> list[re.Pattern[str]]:
        return [re.compile(p, re.IGNORECASE) for p in self.brand_patterns]

    @cached_property
    def compiled_text_patterns(self) -> dict[str, re.Pattern[str]]:
        return {name: re.compile(p, re.IGNORECASE) for name, p in self.text_patterns.items()}

    # --- domain predicates ---

    def is_allow_listed(self, host: str) -> bool:
        """Host equals or is a subdomain of a safe domain, or carries a trusted suffix."""
        host = host.lower()
        if any(host == d or host.endswith("." + d) for d in self.safe_domains):
            return True
        return any(host.endswith(s) for s in self.trusted_suffixes)

    def is_shortener(self, host: str) -> bool:
        host = host.lower()
        return any(host == s or host.endswith("." + s) for s in self.url_shorteners)

    def is_government(self, host: str) -> bool:
        return any(host.lower().endswith(s) for s in self.government_suffixes)


def _compile_or_raise(pattern: str) -> None:
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"invalid pattern {pattern!r}: {exc}") from exc


def load_policy(path: str | Path | None = None) -> DetectionPolicy:
    """Load a policy file, or the bundled default when ``path`` is None."""
    if path is None:
        raw = resources.files("vexora").joinpath("data/default_policy.json").read_text(encoding="utf-8")
        source = "bundled default"
    else:
        raw = Path(path).read_text(encoding="utf-8")
        source = str(path)
    policy = DetectionPolicy.model_validate_json(raw)
    logger.info("Detection policy loaded from %s (%d safe domains)", source, len(policy.safe_domains))
    return policy


@lru_cache(maxsize=1)
def default_policy() -> DetectionPolicy:
    """Policy named by settings, loaded once per process."""
    from vexora.config import get_settings

    return load_policy(get_settings().policy_path)
