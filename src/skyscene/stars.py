"""Twinkling star field.

The field is always animated; its canvas opacity decides whether anything is
visible. Opacity follows a night envelope over the hour and is then
suppressed by cloud cover.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import random
from typing import Dict, List, Optional, Tuple

from skyscene.config import STAR_COUNT
from skyscene.state import VisualState, WeatherCode
from skyscene.timer import AnimationLoop, Scheduler

_logger = logging.getLogger("skyscene.stars")

STAR_SUPPRESSION: Dict[WeatherCode, float] = {
    WeatherCode.THUNDERSTORM: 0.15,
    WeatherCode.RAIN: 0.15,
    WeatherCode.OVERCAST: 0.15,
    WeatherCode.FOG: 0.15,
    WeatherCode.SNOW: 0.3,
    WeatherCode.PARTLY_CLOUDY: 0.6,
    WeatherCode.CLEAR: 1.0,
}


@dataclass
class Star:
    x: float
    y: float
    radius: float
    twinkle_speed: float
    twinkle_phase: float
    brightness: float
    drift_x: float
    drift_y: float
    alpha: float = 0.0
    rendered_radius: float = 0.0


def night_envelope(hour: float) -> float:
    if hour < 5:
        return 1.0
    if hour < 7:
        return 1.0 - (hour - 5) / 2
    if hour < 18.5:
        return 0.0
    if hour < 20.5:
        return (hour - 18.5) / 2
    return 1.0


class StarField:
    def __init__(self, scheduler: Scheduler, size: Tuple[int, int] = (960, 640),
                 rng: Optional[random.Random] = None, count: int = STAR_COUNT):
        self.width, self.height = size
        self.rng = rng or random.Random()
        self.count = count
        self.loop = AnimationLoop(scheduler, "stars")
        self.opacity = 0.0
        self.stars: List[Star] = []
        self.generate()

    def generate(self) -> None:
        rng = self.rng
        self.stars = [
            Star(
                x=rng.uniform(0, self.width),
                y=rng.uniform(0, self.height),
                radius=rng.uniform(0.3, 1.8),
                twinkle_speed=rng.uniform(0.005, 0.025),
                twinkle_phase=rng.uniform(0, math.pi * 2),
                brightness=rng.uniform(0.5, 1.0),
                drift_x=rng.uniform(-0.05, 0.05),
                drift_y=rng.uniform(-0.05, 0.05),
            )
            for _ in range(self.count)
        ]

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = max(1, width), max(1, height)
        self.generate()

    def opacity_for(self, state: VisualState) -> float:
        return night_envelope(state.hour) * STAR_SUPPRESSION[state.weather]

    def apply(self, state: VisualState) -> float:
        self.opacity = self.opacity_for(state)
        return self.opacity

    def start(self) -> None:
        self.loop.start(self.step)

    def stop(self) -> None:
        self.loop.stop()

    def step(self, now: float) -> None:
        for s in self.stars:
            s.x = (s.x + s.drift_x) % self.width
            s.y = (s.y + s.drift_y) % self.height
            wave = math.sin(now * s.twinkle_speed * 10 + s.twinkle_phase)
            twinkle = 0.7 + 0.3 * wave
            pulse = 0.85 + 0.15 * math.sin(now * 0.3 + s.twinkle_phase * 0.5)
            s.alpha = s.brightness * twinkle * pulse
            s.rendered_radius = s.radius * (1 + 0.15 * wave)
