"""Shared fixtures and helpers for QuantFlow tests."""

from collections import deque
from typing import Iterable, Optional

import pytest
from hypothesis import HealthCheck, settings

from quantflow.models import Candle

# isolated_environment runs once per test, shared by every @given example
settings.register_profile(
    "quantflow",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("quantflow")


class ScriptedRandomSource:
    """RandomSource replaying scripted draws.

    Each queue is consumed in order; once empty, the matching default is
    returned forever.
    """

    def __init__(
        self,
        uniforms: Iterable[float] = (),
        normals: Iterable[float] = (),
        uniform_default: float = 0.0,
        normal_default: float = 0.0,
    ):
        self.uniforms = deque(uniforms)
        self.normals = deque(normals)
        self.uniform_default = uniform_default
        self.normal_default = normal_default

    def uniform(self) -> float:
        return self.uniforms.popleft() if self.uniforms else self.uniform_default

    def normal(self) -> float:
        return self.normals.popleft() if self.normals else self.normal_default


def make_candles(
    closes: list[float],
    highs: Optional[list[float]] = None,
    lows: Optional[list[float]] = None,
) -> list[Candle]:
    """Build candles from closes; open equals close, wicks default to the close."""
    candles = []
    for i, close in enumerate(closes):
        high = highs[i] if highs else close
        low = lows[i] if lows else close
        candles.append(Candle(
            time=f"{i // 60:02d}:{i % 60:02d}",
            open=close,
            high=max(high, close),
            low=min(low, close),
            close=close,
            volume=100,
        ))
    return candles


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's config file and API key."""
    monkeypatch.setenv("QUANTFLOW_CONFIG", str(tmp_path / "config.toml"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("QUANTFLOW_MODEL", raising=False)
