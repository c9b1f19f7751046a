"""Tests for the event bus and the clock providers."""

from __future__ import annotations

from datetime import datetime

import pytest

from skyscene.systems.event_bus import STATE_RESOLVED, EventBus
from skyscene.systems.time_system import ManualClock, SystemClock


class TestEventBus:
    def test_delivers_in_subscription_order(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("x", lambda e: seen.append(("a", e)))
        bus.subscribe("x", lambda e: seen.append(("b", e)))
        assert bus.post("x", 1) == 0
        assert seen == [("a", 1), ("b", 1)]

    def test_failing_subscriber_is_skipped(self) -> None:
        bus = EventBus()
        seen = []

        def boom(event):
            raise RuntimeError("broken listener")

        bus.subscribe(STATE_RESOLVED, boom)
        bus.subscribe(STATE_RESOLVED, seen.append)
        assert bus.post(STATE_RESOLVED, "state") == 1
        assert seen == ["state"]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("x", seen.append)
        bus.unsubscribe("x", seen.append)
        bus.unsubscribe("missing", seen.append)
        bus.post("x", 1)
        assert seen == []
        assert bus.subscribers("x") == 0


class TestClocks:
    def test_system_clock_reads_fractional_hour(self) -> None:
        clock = SystemClock(now=lambda: datetime(2024, 6, 1, 14, 30, 36))
        assert clock.current_hour() == pytest.approx(14.51)

    def test_manual_clock_wraps(self) -> None:
        clock = ManualClock(25.5)
        assert clock.current_hour() == 1.5
        clock.set_hour(-1.0)
        assert clock.current_hour() == 23.0

    def test_manual_clock_advances(self) -> None:
        clock = ManualClock(23.0, hours_per_second=0.5)
        clock.update(4.0)
        assert clock.current_hour() == pytest.approx(1.0)

    def test_manual_clock_without_speed_is_frozen(self) -> None:
        clock = ManualClock(8.0)
        clock.update(100.0)
        assert clock.current_hour() == 8.0
