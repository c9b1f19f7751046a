"""Clock providers: where the engine gets the current local hour.

`SystemClock` reads the wall clock. `ManualClock` is set and advanced by hand
for tests and for the accelerated demo mode of the launcher.
"""
from datetime import datetime
from typing import Callable, Optional
import logging

_logger = logging.getLogger("skyscene.time")


class SystemClock:
    def __init__(self, now: Optional[Callable[[], datetime]] = None):
        self._now = now or datetime.now

    def current_hour(self) -> float:
        t = self._now()
        return t.hour + t.minute / 60.0 + t.second / 3600.0


class ManualClock:
    def __init__(self, hour: float = 12.0, hours_per_second: float = 0.0):
        self.hour = 0.0
        self.hours_per_second = float(hours_per_second)
        self.set_hour(hour)

    def set_hour(self, hour: float) -> None:
        self.hour = float(hour) % 24.0

    def update(self, dt_seconds: float) -> None:
        if not self.hours_per_second:
            return
        hour = self.hour + dt_seconds * self.hours_per_second
        if hour >= 24.0:
            _logger.debug("Manual clock wrapped past midnight")
        self.set_hour(hour)

    def current_hour(self) -> float:
        return self.hour
