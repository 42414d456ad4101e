"""Vexora — URL phishing analyzer.

Pipeline:
  1. Normalize + parse (malformed input ⇒ warning, nothing else runs)
  2. Allow-list short-circuit (⇒ safe/100, no network probe)
  3. Structural rules, all evaluated, each adding to an unbounded score
  4. Government-domain override (⇒ safe/99.9)
  5. Thresholds 0.3 / 0.6 on the clamped score
"""

from __future__ import annotations

import logging
import math
import re
from typing import Protocol

from vexora.core.base_analyzer import AnalysisInput, BaseAnalyzer
from vexora.core.fusion.risk_engine import (
    URL_THRESHOLDS,
    RiskAccumulator,
    RuleHit,
    Verdict,
    apply_hits,
    build_result,
)
from vexora.core.policy import DetectionPolicy, default_policy
from vexora.core.simulation.seeded_random import SeededRandom
from vexora.models.enums import MediaType, Severity, Status
from vexora.models.schemas import AnalysisResult, MetadataItem, RiskFactor
from vexora.preprocessing.url_parser import InvalidURLError, ParsedURL, normalize_url, parse_url

logger = logging.getLogger(__name__)

IPV4_HOST = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")
DIGIT_SUBSTITUTION = re.compile(r"^[a-z]+[0-9]+[a-z]*\.[a-z]{2,3}$", re.IGNORECASE)
BITLY_LOOKALIKE = re.compile(r"bit.*\.ly$", re.IGNORECASE)
LONG_URL_CHARS = 100

URL_VERDICTS = {
    Status.SAFE: Verdict("URL Appears Safe", "No significant threats detected. However, always exercise caution."),
    Status.WARNING: Verdict("Suspicious URL Detected", "Some concerning patterns were found. Proceed with caution."),
    Status.DANGER: Verdict("SCAM ALERT", "High probability of phishing or scam. Do not proceed!"),
}


class Probe(Protocol):
    async def check(self, url: str) -> bool: ...


class URLAnalyzer(BaseAnalyzer):
    def __init__(self, probe: Probe, policy: DetectionPolicy | None = None) -> None:
        self.probe = probe
        self.policy = policy or default_policy()

    @property
    def name(self) -> str:
        return "url_heuristics"

    @property
    def media_type(self) -> MediaType:
        return MediaType.URL

    async def _run_analysis(self, inp: AnalysisInput) -> AnalysisResult:
        raw = inp.text or ""
        try:
            url = parse_url(normalize_url(raw))
        except InvalidURLError as exc:
            logger.info("Unparsable URL input: %s", exc)
            return self._invalid_result(raw)

        acc = RiskAccumulator()
        acc.meta("domain", url.host)
        acc.meta("protocol", url.scheme)
        acc.meta("path", url.path)

        if self.policy.is_allow_listed(url.host):
            acc.meta("domainStatus", "Verified Safe")
            return AnalysisResult(
                status=Status.SAFE,
                confidence=100.0,
                title="Verified Safe Domain",
                description="This is a known trusted domain.",
                metadata=acc.metadata,
                risk_factors=[RiskFactor(level=Severity.LOW, description="Domain is on the trusted allow-list")],
            )

        reachable = await self.probe.check(url.href)
        apply_hits(acc, self.evaluate_rules(url, raw, reachable))

        is_gov = self.policy.is_government(url.host)
        acc.meta("domainAge", "10+ years" if is_gov else self._domain_age(url.host))
        acc.meta("sslCertificate", "Valid" if url.is_https else "Not Present")
        acc.meta("registrar", "National Informatics Centre (NIC)" if is_gov else "Unknown / Private")

        if is_gov:
            logger.info("Government override for %s (raw score %.2f)", url.host, acc.score)
            return AnalysisResult(
                status=Status.SAFE,
                confidence=99.9,
                title="Official Government Website",
                description=(
                    "This is a verified government domain belonging to the Government of India or related entities."
                ),
                metadata=acc.metadata,
                risk_factors=[RiskFactor(level=Severity.LOW, description="Verified government domain")],
            )

        return build_result(
            acc, URL_VERDICTS, thresholds=URL_THRESHOLDS, safe_fallback="No suspicious patterns detected"
        )

    # ── Rules ──

    def evaluate_rules(self, url: ParsedURL, raw: str, reachable: bool) -> list[RuleHit]:
        """Every rule runs; the returned hits are in evaluation order."""
        hits: list[RuleHit] = []
        if not reachable:
            hits.append(
                RuleHit(
                    0.8,
                    Severity.HIGH,
                    "Website appears unreachable or domain does not exist",
                    ("siteStatus", "Unreachable / Invalid"),
                )
            )
        if not url.is_https:
            hits.append(RuleHit(0.25, Severity.HIGH, "Website does not use secure HTTPS connection"))
        if any(p.search(url.href) for p in self.policy.compiled_brand_patterns):
            hits.append(RuleHit(0.45, Severity.HIGH, "URL mimics a known trusted brand (potential phishing)"))
        keyword = next((k for k in self.policy.phishing_keywords if k in url.href), None)
        if keyword is not None:
            hits.append(RuleHit(0.15, Severity.MEDIUM, f'Contains suspicious keyword: "{keyword}"'))
        if IPV4_HOST.match(url.host):
            hits.append(RuleHit(0.35, Severity.HIGH, "Uses IP address instead of domain name"))
        if len(url.host.split(".")) - 2 > 2:
            hits.append(RuleHit(0.15, Severity.MEDIUM, "Unusually many subdomains detected"))
        if any(url.host.endswith(tld) for tld in self.policy.suspicious_tlds):
            hits.append(RuleHit(0.2, Severity.MEDIUM, "Uses suspicious top-level domain"))
        hits.extend(self._typosquat_hits(url.host))
        if DIGIT_SUBSTITUTION.match(url.host):
            hits.append(RuleHit(0.15, Severity.MEDIUM, "Domain contains suspicious number substitution"))
        if len(raw) > LONG_URL_CHARS:
            hits.append(RuleHit(0.1, Severity.LOW, "URL is unusually long"))
        return hits

    def _typosquat_hits(self, host: str) -> list[RuleHit]:
        hits: list[RuleHit] = []
        for target in self.policy.typosquat_targets:
            if host == target:
                continue
            base = target.split(".")[0]
            if base in host:
                if target == "bit.ly":
                    if re.sub(r"[^a-z]", "", host) == "bitly" and BITLY_LOOKALIKE.search(host):
                        hits.append(
                            RuleHit(
                                0.4,
                                Severity.HIGH,
                                f"Suspicious lookalike of {target}",
                                ("Detected impersonation", target),
                            )
                        )
                elif re.sub(r"[-0-9]", "", host) == target.replace(".", "", 1):
                    hits.append(RuleHit(0.35, Severity.HIGH, f"Potential typosquatting of {target}"))
            if abs(len(host) - len(target)) <= 1 and _char_diffs(host, target) <= 2:
                hits.append(RuleHit(0.3, Severity.MEDIUM, f"Domain is visually similar to {target}"))
        return hits

    # ── Helpers ──

    @staticmethod
    def _domain_age(host: str) -> str:
        rng = SeededRandom(f"domain-age:{host}")
        return f"{math.floor(rng() * 12) + 1} months"

    @staticmethod
    def _invalid_result(raw: str) -> AnalysisResult:
        return AnalysisResult(
            status=Status.WARNING,
            confidence=60.0,
            title="Invalid URL Format",
            description="The provided URL could not be parsed. Please check the format.",
            metadata=[MetadataItem(label="Input", value=raw)],
            risk_factors=[RiskFactor(level=Severity.MEDIUM, description="URL format is invalid or malformed")],
        )


def _char_diffs(a: str, b: str) -> int:
    """Positional mismatches over the shorter string."""
    return sum(1 for x, y in zip(a, b) if x != y)
