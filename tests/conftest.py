"""Shared fixtures."""

import os

os.environ.setdefault("VEXORA_ENV", "test")
os.environ.setdefault("VEXORA_LOG_JSON", "false")

import pytest  # noqa: E402


class StubProbe:
    """Records probed URLs and answers with a fixed reachability."""

    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.calls: list[str] = []

    async def check(self, url: str) -> bool:
        self.calls.append(url)
        return self.reachable


class SequenceRng:
    """Callable yielding preset draws, counting how many were taken."""

    def __init__(self, values):
        self._it = iter(values)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return next(self._it)


@pytest.fixture
def policy():
    from vexora.core.policy import load_policy

    return load_policy()


@pytest.fixture
def probe():
    return StubProbe(reachable=True)


@pytest.fixture
def dead_probe():
    return StubProbe(reachable=False)


@pytest.fixture
def seq_rng():
    return SequenceRng
