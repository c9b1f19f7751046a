"""Pytest configuration and fixtures for skyscene tests."""

from __future__ import annotations

import os
import random
from collections import deque

import pytest

# pygame must never try to open a real window under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from skyscene.config import Config  # noqa: E402
from skyscene.engine import SkyEngine  # noqa: E402
from skyscene.state import VisualState, WeatherCode  # noqa: E402
from skyscene.systems.time_system import ManualClock  # noqa: E402
from skyscene.timer import Scheduler  # noqa: E402


class ScriptedRandom:
    """Random source that replays queued values.

    Args:
        uniforms: Values returned by successive uniform() calls.
        randoms: Values returned by successive random() calls.

    When a queue runs dry, uniform() returns the low bound and random()
    returns 0.99 (no flash).
    """

    def __init__(self, uniforms=(), randoms=()):
        self._uniforms = deque(uniforms)
        self._randoms = deque(randoms)

    def uniform(self, a: float, b: float) -> float:
        return self._uniforms.popleft() if self._uniforms else a

    def random(self) -> float:
        return self._randoms.popleft() if self._randoms else 0.99


def make_state(hour: float, weather: WeatherCode, is_override: bool = False) -> VisualState:
    return VisualState(hour, weather, is_override)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(12.0)


@pytest.fixture
def engine(clock: ManualClock, rng: random.Random):
    """An engine on a manual clock with no weather service."""
    eng = SkyEngine(Config(refresh_interval=30.0), clock=clock, rng=rng)
    yield eng
    eng.stop()
