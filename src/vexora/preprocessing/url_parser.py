"""Vexora — URL normalization and structural parsing."""

from __future__ import annotations

import ipaddress
import logging
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

import idna

logger = logging.getLogger(__name__)

_REPEATED_SCHEMES = re.compile(r"^(?:https?://){2,}", re.IGNORECASE)
# http:/host, http:host and backslash variants all mean http://host
_LOOSE_SCHEME = re.compile(r"^(https?):[/\\]*", re.IGNORECASE)
# forbidden in a hostname, plus whitespace and control characters
_FORBIDDEN_HOST = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")


class InvalidURLError(ValueError):
    """Raised when text cannot be parsed into scheme + host + path."""


@dataclass(frozen=True)
class ParsedURL:
    scheme: str
    host: str
    path: str
    href: str

    @property
    def is_https(self) -> bool:
        return self.scheme == "https"


def normalize_url(raw: str) -> str:
    """Collapse pasted-twice schemes to one ``https://``, repair ``http:/host``, add a scheme if missing."""
    value = _REPEATED_SCHEMES.sub("https://", raw.strip())
    if _LOOSE_SCHEME.match(value):
        return _LOOSE_SCHEME.sub(r"\1://", value, count=1)
    return "https://" + value


def parse_url(value: str) -> ParsedURL:
    try:
        parts = urlsplit(value)
        parts.port  # noqa: B018 - raises on a non-numeric or out-of-range port
    except ValueError as exc:
        raise InvalidURLError(str(exc)) from exc

    host = parts.hostname or ""
    if not host:
        raise InvalidURLError(f"missing host in {value!r}")
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError as exc:
            raise InvalidURLError(f"bad IPv6 host {host!r}") from exc
    elif _FORBIDDEN_HOST.search(host):
        raise InvalidURLError(f"forbidden character in host {host!r}")
    else:
        _check_punycode(host)

    scheme = parts.scheme.lower()
    path = parts.path or "/"
    href = f"{scheme}://{parts.netloc}{path}"
    if parts.query:
        href += f"?{parts.query}"
    if parts.fragment:
        href += f"#{parts.fragment}"
    return ParsedURL(scheme=scheme, host=host.lower(), path=path, href=href.lower())


def _check_punycode(host: str) -> None:
    """``xn--`` labels must decode to a valid IDNA label."""
    for label in host.split("."):
        if not label.startswith("xn--"):
            continue
        try:
            idna.encode(label, uts46=True)
        except UnicodeError as exc:
            raise InvalidURLError(f"bad punycode label {label!r} in {host!r}") from exc
