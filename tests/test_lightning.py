"""Tests for the lightning scheduler."""

from __future__ import annotations

import pytest

from skyscene.lightning import LightningScheduler
from skyscene.timer import Scheduler

from .conftest import ScriptedRandom


class TestLifecycle:
    """Start/stop idempotency and the single-timer rule."""

    def test_start_creates_one_timer(self, scheduler: Scheduler) -> None:
        lightning = LightningScheduler(scheduler, ScriptedRandom())
        lightning.start()
        assert lightning.active
        assert scheduler.pending_timers == 1

    def test_second_start_is_noop(self, scheduler: Scheduler) -> None:
        lightning = LightningScheduler(scheduler, ScriptedRandom())
        lightning.start()
        lightning.start()
        assert scheduler.pending_timers == 1

    def test_stop_cancels_timer(self, scheduler: Scheduler) -> None:
        lightning = LightningScheduler(scheduler, ScriptedRandom())
        lightning.start()
        lightning.stop()
        assert not lightning.active
        assert scheduler.pending_timers == 0

    def test_restart_after_stop_has_one_timer(self, scheduler: Scheduler) -> None:
        lightning = LightningScheduler(scheduler, ScriptedRandom())
        for _ in range(3):
            lightning.start()
            lightning.stop()
        lightning.start()
        assert scheduler.pending_timers == 1

    def test_stop_when_idle_is_safe(self, scheduler: Scheduler) -> None:
        lightning = LightningScheduler(scheduler, ScriptedRandom())
        lightning.stop()
        assert lightning.opacity == 0.0


class TestFlashes:
    """Flash timing with a scripted random source."""

    def test_primary_and_secondary_flash(self, scheduler: Scheduler) -> None:
        # interval, primary opacity, next interval, secondary opacity
        rng = ScriptedRandom(uniforms=[3.0, 0.3, 3.0, 0.2], randoms=[0.1, 0.1])
        lightning = LightningScheduler(scheduler, rng)
        lightning.start()

        scheduler.advance(2.9)
        assert lightning.opacity == 0.0
        scheduler.advance(0.1)
        assert lightning.opacity == 0.3

        scheduler.advance(0.08)
        assert lightning.opacity == 0.0
        scheduler.advance(0.1)
        assert lightning.opacity == 0.2
        scheduler.advance(0.08)
        assert lightning.opacity == 0.0
        assert lightning.flashes == 2

    def test_no_flash_when_roll_fails(self, scheduler: Scheduler) -> None:
        rng = ScriptedRandom(uniforms=[2.0], randoms=[0.5])
        lightning = LightningScheduler(scheduler, rng)
        lightning.start()
        scheduler.advance(2.0)
        assert lightning.opacity == 0.0
        assert lightning.flashes == 0
        # the repeating timer re-armed itself
        assert scheduler.pending_timers == 1

    def test_primary_only(self, scheduler: Scheduler) -> None:
        rng = ScriptedRandom(uniforms=[2.0, 0.4], randoms=[0.2, 0.9])
        lightning = LightningScheduler(scheduler, rng)
        lightning.start()
        scheduler.advance(2.0)
        assert lightning.opacity == 0.4
        scheduler.advance(0.08)
        scheduler.advance(0.5)
        assert lightning.flashes == 1
        assert lightning.opacity == 0.0

    def test_stop_during_flash_forces_dark(self, scheduler: Scheduler) -> None:
        rng = ScriptedRandom(uniforms=[2.0, 0.45], randoms=[0.0, 0.0])
        lightning = LightningScheduler(scheduler, rng)
        lightning.start()
        scheduler.advance(2.0)
        assert lightning.opacity == 0.45

        lightning.stop()

        assert lightning.opacity == 0.0
        assert scheduler.pending_timers == 0
        scheduler.advance(1.0)
        assert lightning.opacity == 0.0
        assert lightning.flashes == 1

    def test_interval_stays_in_range(self, scheduler: Scheduler, rng) -> None:
        lightning = LightningScheduler(scheduler, rng)
        lightning.start()
        timer = lightning._timer
        assert timer is not None
        assert 2.0 <= timer.duration < 5.0


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_never_more_than_one_strike_timer(seed: int) -> None:
    import random

    scheduler = Scheduler()
    lightning = LightningScheduler(scheduler, random.Random(seed))
    lightning.start()
    for _ in range(400):
        scheduler.advance(0.05)
        strike_timers = [t for t in scheduler._timers if t.callback == lightning._strike]
        assert len(strike_timers) <= 1
