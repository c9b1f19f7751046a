"""Tests for the rain/snow particle simulation."""

from __future__ import annotations

import math
import random

import pytest

from skyscene.config import RAIN_PARTICLE_COUNT, SNOW_PARTICLE_COUNT
from skyscene.lightning import LightningScheduler
from skyscene.precipitation import (
    RAIN,
    SNOW,
    PrecipitationSimulator,
    RainParticle,
    SnowParticle,
    precipitation_kind,
)
from skyscene.state import VisualState, WeatherCode
from skyscene.timer import Scheduler


@pytest.fixture
def sim(scheduler: Scheduler) -> PrecipitationSimulator:
    rng = random.Random(42)
    return PrecipitationSimulator(scheduler, LightningScheduler(scheduler, rng), (800, 600), rng)


def _apply(sim: PrecipitationSimulator, weather: WeatherCode) -> None:
    sim.apply(VisualState(12.5, weather))


class TestKind:
    """Tests for weather to particle kind mapping."""

    @pytest.mark.parametrize(
        "weather,kind",
        [
            (WeatherCode.RAIN, RAIN),
            (WeatherCode.THUNDERSTORM, RAIN),
            (WeatherCode.SNOW, SNOW),
            (WeatherCode.CLEAR, None),
            (WeatherCode.PARTLY_CLOUDY, None),
            (WeatherCode.OVERCAST, None),
            (WeatherCode.FOG, None),
        ],
    )
    def test_kind(self, weather: WeatherCode, kind) -> None:
        assert precipitation_kind(weather) == kind


class TestTransitions:
    """Tests for pool allocation on category change."""

    def test_rain_allocates_pool_and_starts_loop(self, sim, scheduler) -> None:
        _apply(sim, WeatherCode.RAIN)
        assert sim.kind == RAIN
        assert len(sim.particles) == RAIN_PARTICLE_COUNT
        assert all(isinstance(p, RainParticle) for p in sim.particles)
        assert sim.loop.running
        assert scheduler.pending_frames == 1

    def test_rain_to_snow_replaces_every_particle(self, sim, scheduler) -> None:
        _apply(sim, WeatherCode.RAIN)
        scheduler.run_frame()
        assert len(sim.canvas) == RAIN_PARTICLE_COUNT
        rain_pool = sim.particles

        _apply(sim, WeatherCode.SNOW)

        assert sim.canvas == []
        assert sim.particles is not rain_pool
        assert len(sim.particles) == SNOW_PARTICLE_COUNT
        assert all(isinstance(p, SnowParticle) for p in sim.particles)
        assert scheduler.pending_frames == 1

        scheduler.run_frame()
        assert len(sim.canvas) == SNOW_PARTICLE_COUNT
        assert not any(isinstance(p, RainParticle) for p in sim.canvas)

    def test_same_kind_keeps_pool(self, sim) -> None:
        _apply(sim, WeatherCode.RAIN)
        pool = sim.particles
        _apply(sim, WeatherCode.THUNDERSTORM)
        assert sim.particles is pool

    def test_to_none_stops_everything(self, sim, scheduler) -> None:
        _apply(sim, WeatherCode.THUNDERSTORM)
        scheduler.run_frame()
        assert sim.lightning.active

        _apply(sim, WeatherCode.CLEAR)

        assert sim.kind is None
        assert sim.particles == []
        assert sim.canvas == []
        assert not sim.loop.running
        assert not sim.lightning.active
        assert sim.lightning.opacity == 0.0
        assert scheduler.pending_frames == 0
        assert scheduler.pending_timers == 0

    def test_loop_steps_every_frame(self, sim, scheduler) -> None:
        _apply(sim, WeatherCode.SNOW)
        for _ in range(3):
            scheduler.run_frame()
        assert sim.frames == 3

    def test_rain_without_thunder_has_no_lightning(self, sim) -> None:
        _apply(sim, WeatherCode.THUNDERSTORM)
        _apply(sim, WeatherCode.RAIN)
        assert not sim.lightning.active


class TestRainStep:
    """Tests for rain kinematics."""

    def test_falls_and_drifts(self, sim) -> None:
        p = RainParticle(x=100.0, y=50.0, speed=10.0, length=20.0, opacity=0.3, wind=1.0)
        sim._step_rain(p)
        assert (p.x, p.y) == (101.0, 60.0)

    def test_wraps_to_top(self, sim) -> None:
        p = RainParticle(x=100.0, y=595.0, speed=10.0, length=20.0, opacity=0.3, wind=1.0)
        sim._step_rain(p)
        assert p.y == -20.0
        assert 0 <= p.x <= 800

    def test_wraps_right_edge_to_zero(self, sim) -> None:
        p = RainParticle(x=799.5, y=10.0, speed=10.0, length=20.0, opacity=0.3, wind=1.0)
        sim._step_rain(p)
        assert p.x == 0.0


class TestSnowStep:
    """Tests for snow kinematics."""

    def test_wobbles_and_falls(self, sim) -> None:
        p = SnowParticle(x=100.0, y=50.0, speed=1.0, radius=2.0, opacity=0.5,
                         wobble_phase=0.0, wobble_speed=0.5, wind=0.1)
        sim._step_snow(p)
        assert p.wobble_phase == 0.5
        assert p.x == pytest.approx(100.0 + math.sin(0.5) * 0.5 + 0.1)
        assert p.y == 51.0

    def test_wraps_to_above_top(self, sim) -> None:
        p = SnowParticle(x=100.0, y=599.5, speed=1.0, radius=3.0, opacity=0.5,
                         wobble_phase=0.0, wobble_speed=0.0, wind=0.0)
        sim._step_snow(p)
        assert p.y == -6.0

    def test_wraps_horizontally_modulo_width(self, sim) -> None:
        p = SnowParticle(x=799.0, y=10.0, speed=1.0, radius=2.0, opacity=0.5,
                         wobble_phase=0.0, wobble_speed=0.0, wind=2.0)
        sim._step_snow(p)
        assert p.x == pytest.approx(1.0)

    def test_negative_drift_wraps_to_right(self, sim) -> None:
        p = SnowParticle(x=0.5, y=10.0, speed=1.0, radius=2.0, opacity=0.5,
                         wobble_phase=0.0, wobble_speed=0.0, wind=-1.0)
        sim._step_snow(p)
        assert p.x == pytest.approx(799.5)


def test_stop_clears_pool(sim, scheduler) -> None:
    _apply(sim, WeatherCode.RAIN)
    sim.stop()
    assert sim.particles == []
    assert scheduler.pending_frames == 0
