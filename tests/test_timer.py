"""Tests for Timer, Scheduler and AnimationLoop."""

from __future__ import annotations

from skyscene.timer import AnimationLoop, Scheduler, Timer


class TestTimer:
    def test_fires_once_when_due(self) -> None:
        fired = []
        t = Timer(1.0, lambda: fired.append(1))
        t.start()
        t.update(0.5)
        assert fired == []
        t.update(0.5)
        t.update(0.5)
        assert fired == [1]
        assert t.finished()

    def test_cancelled_timer_is_not_finished(self) -> None:
        t = Timer(1.0)
        t.start()
        t.cancel()
        t.update(2.0)
        assert not t.finished()

    def test_callback_error_is_contained(self) -> None:
        def boom():
            raise RuntimeError("boom")

        t = Timer(0.0, boom)
        t.start()
        t.update(0.0)
        assert not t.running


class TestScheduler:
    def test_call_later_and_advance(self, scheduler: Scheduler) -> None:
        fired = []
        scheduler.call_later(2.0, lambda: fired.append("a"))
        scheduler.advance(1.0)
        assert fired == []
        assert scheduler.pending_timers == 1
        scheduler.advance(1.0)
        assert fired == ["a"]
        assert scheduler.pending_timers == 0
        assert scheduler.now == 2.0

    def test_cancel(self, scheduler: Scheduler) -> None:
        fired = []
        timer = scheduler.call_later(1.0, lambda: fired.append(1))
        scheduler.cancel(timer)
        scheduler.advance(5.0)
        assert fired == []
        assert scheduler.pending_timers == 0

    def test_cancel_none_is_noop(self, scheduler: Scheduler) -> None:
        scheduler.cancel(None)

    def test_callback_can_cancel_a_later_timer(self, scheduler: Scheduler) -> None:
        fired = []
        second = None

        def first():
            fired.append("first")
            scheduler.cancel(second)

        scheduler.call_later(1.0, first)
        second = scheduler.call_later(1.0, lambda: fired.append("second"))
        scheduler.advance(1.0)
        assert fired == ["first"]

    def test_timer_created_in_callback_waits_for_next_advance(self, scheduler: Scheduler) -> None:
        fired = []
        scheduler.call_later(1.0, lambda: scheduler.call_later(0.0, lambda: fired.append("x")))
        scheduler.advance(1.0)
        assert fired == []
        scheduler.advance(0.0)
        assert fired == ["x"]

    def test_frame_callbacks_run_once(self, scheduler: Scheduler) -> None:
        seen = []
        scheduler.request_frame(seen.append)
        assert scheduler.pending_frames == 1
        scheduler.run_frame()
        scheduler.run_frame()
        assert seen == [0.0]
        assert scheduler.pending_frames == 0

    def test_cancel_frame(self, scheduler: Scheduler) -> None:
        seen = []
        handle = scheduler.request_frame(seen.append)
        scheduler.cancel_frame(handle)
        scheduler.run_frame()
        assert seen == []


class TestAnimationLoop:
    def test_runs_every_frame_until_stopped(self, scheduler: Scheduler) -> None:
        ticks = []
        loop = AnimationLoop(scheduler)
        loop.start(ticks.append)
        for _ in range(3):
            scheduler.run_frame()
        assert len(ticks) == 3
        loop.stop()
        scheduler.run_frame()
        assert len(ticks) == 3
        assert scheduler.pending_frames == 0

    def test_start_is_idempotent(self, scheduler: Scheduler) -> None:
        ticks = []
        loop = AnimationLoop(scheduler)
        loop.start(ticks.append)
        loop.start(ticks.append)
        assert scheduler.pending_frames == 1
        scheduler.run_frame()
        assert len(ticks) == 1
        assert scheduler.pending_frames == 1

    def test_tick_that_stops_loop_is_not_rescheduled(self, scheduler: Scheduler) -> None:
        loop = AnimationLoop(scheduler)
        loop.start(lambda now: loop.stop())
        scheduler.run_frame()
        assert not loop.running
        assert scheduler.pending_frames == 0

    def test_restart_after_stop(self, scheduler: Scheduler) -> None:
        loop = AnimationLoop(scheduler)
        loop.start(lambda now: None)
        loop.stop()
        loop.start(lambda now: None)
        assert loop.running
        assert scheduler.pending_frames == 1

    def test_failing_tick_keeps_loop_alive(self, scheduler: Scheduler) -> None:
        def tick(now):
            raise RuntimeError("bad frame")

        loop = AnimationLoop(scheduler)
        loop.start(tick)
        scheduler.run_frame()
        assert loop.running
        assert scheduler.pending_frames == 1
