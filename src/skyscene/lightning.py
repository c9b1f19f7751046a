"""Randomized lightning flashes for thunderstorms."""
from __future__ import annotations

import logging
import random
from typing import List, Optional

from skyscene.timer import Scheduler, Timer

_logger = logging.getLogger("skyscene.lightning")

INTERVAL_RANGE = (2.0, 5.0)
FLASH_CHANCE = 0.4
PRIMARY_OPACITY = (0.15, 0.45)
SECONDARY_CHANCE = 0.5
SECONDARY_OPACITY = (0.1, 0.3)
SECONDARY_GAP = 0.1
FLASH_HOLD = 0.08


class LightningScheduler:
    """Owns the single repeating strike timer and the short flash holds.

    `opacity` is the value the host applies to the full-screen flash layer.
    """

    def __init__(self, scheduler: Scheduler, rng: Optional[random.Random] = None):
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.opacity = 0.0
        self.flashes = 0
        self._timer: Optional[Timer] = None
        self._holds: List[Timer] = []

    @property
    def active(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        if self.active:
            return
        _logger.debug("Lightning started")
        self._schedule_next()

    def stop(self) -> None:
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None
            _logger.debug("Lightning stopped")
        for hold in self._holds:
            self.scheduler.cancel(hold)
        self._holds = []
        self.opacity = 0.0

    def _schedule_next(self) -> None:
        delay = self.rng.uniform(*INTERVAL_RANGE)
        if delay >= INTERVAL_RANGE[1]:
            delay = INTERVAL_RANGE[0]
        self._timer = self.scheduler.call_later(delay, self._strike)

    def _strike(self) -> None:
        if self._timer is None:
            return
        if self.rng.random() < FLASH_CHANCE:
            secondary = self.rng.random() < SECONDARY_CHANCE
            self._flash(self.rng.uniform(*PRIMARY_OPACITY), secondary)
        self._schedule_next()

    def _flash(self, opacity: float, secondary: bool) -> None:
        self.opacity = opacity
        self.flashes += 1
        _logger.debug("Lightning flash %.2f", opacity)

        def _end():
            self.opacity = 0.0
            if secondary and self.active:
                self._hold(SECONDARY_GAP, lambda: self._flash(self.rng.uniform(*SECONDARY_OPACITY), False))

        self._hold(FLASH_HOLD, _end)

    def _hold(self, delay: float, callback) -> None:
        self._holds = [h for h in self._holds if h.running]
        self._holds.append(self.scheduler.call_later(delay, callback))
