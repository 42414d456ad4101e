"""Vexora — Seeded deterministic generator.

A string key is hashed with a 31-multiplier rolling hash over its UTF-16 code
units (wrapped to signed 32 bits), and the absolute hash seeds a 32-bit linear
congruential generator. The same key yields the same sequence on every
machine, which is what makes simulated image/video signals reproducible.
"""

from __future__ import annotations

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value >= 0x8000_0000 else value


def string_hash(key: str) -> int:
    """Signed 32-bit rolling hash of ``key``."""
    encoded = key.encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return h


class SeededRandom:
    """Restartable LCG stream of floats in [0, 1)."""

    __slots__ = ("key", "seed", "_state", "draws")

    def __init__(self, key: str) -> None:
        self.key = key
        self.seed = abs(string_hash(key))
        self._state = self.seed
        self.draws = 0

    def next(self) -> float:
        self._state = (LCG_MULTIPLIER * self._state + LCG_INCREMENT) % LCG_MODULUS
        self.draws += 1
        return self._state / LCG_MODULUS

    __call__ = next

    def reset(self) -> None:
        self._state = self.seed
        self.draws = 0

    def take(self, n: int) -> list[float]:
        return [self.next() for _ in range(n)]

    def __repr__(self) -> str:
        return f"<SeededRandom key={self.key!r} seed={self.seed} draws={self.draws}>"


def media_key(name: str, size: int, mime_type: str) -> str:
    """Seed key for a media file: ``name-size-mime``."""
    return f"{name}-{size}-{mime_type}"
