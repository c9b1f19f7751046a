"""Cooperative timing primitives driven by the host loop.

Nothing in here reads a wall clock. The host calls `Scheduler.advance(dt)` and
`Scheduler.run_frame()` once per display frame; tests do the same by hand, so
timer and animation behaviour is fully deterministic.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional
import logging

_logger = logging.getLogger("skyscene.timer")


class Timer:
    """One-shot countdown that fires `callback` once `duration` has elapsed."""

    def __init__(self, duration: float, callback: Optional[Callable[[], None]] = None):
        self.duration = max(0.0, float(duration))
        self.callback = callback
        self.elapsed = 0.0
        self.running = False
        self.cancelled = False

    def start(self):
        self.running = True
        self.cancelled = False
        self.elapsed = 0.0

    def stop(self):
        self.running = False

    def cancel(self):
        self.running = False
        self.cancelled = True

    def update(self, dt: float):
        if not self.running:
            return
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self.running = False
            if self.callback:
                try:
                    self.callback()
                except Exception:
                    _logger.exception("Timer callback %s failed", self.callback)

    def finished(self) -> bool:
        return not self.running and not self.cancelled and self.elapsed >= self.duration


class Scheduler:
    """Owns pending timers and per-frame callbacks for one engine instance."""

    def __init__(self):
        self.now = 0.0
        self._timers: List[Timer] = []
        self._frame_callbacks: Dict[int, Callable[[float], None]] = {}
        self._next_frame_id = 1

    # ------------------------------------------------------------------ timers
    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(delay, callback)
        timer.start()
        self._timers.append(timer)
        return timer

    def cancel(self, timer: Optional[Timer]) -> None:
        if timer is None:
            return
        timer.cancel()
        if timer in self._timers:
            self._timers.remove(timer)

    @property
    def pending_timers(self) -> int:
        return sum(1 for t in self._timers if t.running)

    def advance(self, dt: float) -> None:
        """Move the clock forward and fire every timer that came due."""
        self.now += dt
        for timer in list(self._timers):
            # a callback earlier in this pass may have cancelled it
            if timer in self._timers:
                timer.update(dt)
        self._timers = [t for t in self._timers if t.running]

    # ------------------------------------------------------------------ frames
    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = self._next_frame_id
        self._next_frame_id += 1
        self._frame_callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._frame_callbacks.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._frame_callbacks)

    def run_frame(self) -> None:
        """Run callbacks requested before this frame; new requests wait for the next one."""
        callbacks = self._frame_callbacks
        self._frame_callbacks = {}
        for cb in callbacks.values():
            try:
                cb(self.now)
            except Exception:
                _logger.exception("Frame callback %s failed", cb)


class AnimationLoop:
    """Self-rescheduling per-frame loop with a single source of truth for `running`."""

    def __init__(self, scheduler: Scheduler, name: str = "loop"):
        self.scheduler = scheduler
        self.name = name
        self._tick: Optional[Callable[[float], None]] = None
        self._handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._tick is not None

    def start(self, tick: Callable[[float], None]) -> None:
        if self.running:
            return
        self._tick = tick
        self._handle = self.scheduler.request_frame(self._step)
        _logger.debug("Animation loop %s started", self.name)

    def stop(self) -> None:
        if not self.running:
            return
        self.scheduler.cancel_frame(self._handle)
        self._handle = None
        self._tick = None
        _logger.debug("Animation loop %s stopped", self.name)

    def _step(self, now: float) -> None:
        self._handle = None
        tick = self._tick
        if tick is None:
            return
        try:
            tick(now)
        finally:
            # tick may have stopped (or restarted) the loop
            if self._tick is not None and self._handle is None:
                self._handle = self.scheduler.request_frame(self._step)
