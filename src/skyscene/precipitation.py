"""Rain and snow particle simulation.

Only one particle kind is ever live. Switching kind throws the old pool away
and allocates a new one; stepping mutates particles in the current pool only.
Kinematics are per frame, matching a display-refresh-paced loop.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import random
from typing import List, Optional, Union

from skyscene.config import RAIN_PARTICLE_COUNT, SNOW_PARTICLE_COUNT
from skyscene.lightning import LightningScheduler
from skyscene.state import VisualState, WeatherCode
from skyscene.timer import AnimationLoop, Scheduler

_logger = logging.getLogger("skyscene.precipitation")

RAIN = "rain"
SNOW = "snow"

SNOW_WOBBLE_AMPLITUDE = 0.5


@dataclass
class RainParticle:
    x: float
    y: float
    speed: float
    length: float
    opacity: float
    wind: float


@dataclass
class SnowParticle:
    x: float
    y: float
    speed: float
    radius: float
    opacity: float
    wobble_phase: float
    wobble_speed: float
    wind: float


Particle = Union[RainParticle, SnowParticle]


def precipitation_kind(weather: WeatherCode) -> Optional[str]:
    if weather in (WeatherCode.RAIN, WeatherCode.THUNDERSTORM):
        return RAIN
    if weather is WeatherCode.SNOW:
        return SNOW
    return None


class PrecipitationSimulator:
    def __init__(self, scheduler: Scheduler, lightning: LightningScheduler,
                 size=(960, 640), rng: Optional[random.Random] = None):
        self.width, self.height = size
        self.rng = rng or random.Random()
        self.lightning = lightning
        self.loop = AnimationLoop(scheduler, "precipitation")
        self.kind: Optional[str] = None
        self.particles: List[Particle] = []
        # what the canvas currently shows; cleared on every kind change
        self.canvas: List[Particle] = []
        self.frames = 0

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = max(1, width), max(1, height)

    # --------------------------------------------------------------- lifecycle
    def apply(self, state: VisualState) -> Optional[str]:
        kind = precipitation_kind(state.weather)
        if state.weather is WeatherCode.THUNDERSTORM:
            self.lightning.start()
        else:
            self.lightning.stop()
        if kind == self.kind:
            return kind
        self.loop.stop()
        self.canvas = []
        self.particles = []
        self.kind = kind
        if kind is None:
            _logger.debug("Precipitation off")
            self.lightning.stop()
            return None
        self.particles = self._allocate(kind)
        _logger.debug("Allocated %d %s particles", len(self.particles), kind)
        self.loop.start(self.step)
        return kind

    def stop(self) -> None:
        self.loop.stop()
        self.lightning.stop()
        self.particles = []
        self.canvas = []
        self.kind = None

    def _allocate(self, kind: str) -> List[Particle]:
        if kind == RAIN:
            return [self._rain() for _ in range(RAIN_PARTICLE_COUNT)]
        return [self._snow() for _ in range(SNOW_PARTICLE_COUNT)]

    def _rain(self) -> RainParticle:
        rng = self.rng
        return RainParticle(
            x=rng.uniform(0, self.width),
            y=rng.uniform(0, self.height),
            speed=rng.uniform(8.0, 16.0),
            length=rng.uniform(10.0, 25.0),
            opacity=rng.uniform(0.15, 0.45),
            wind=rng.uniform(0.5, 1.5),
        )

    def _snow(self) -> SnowParticle:
        rng = self.rng
        return SnowParticle(
            x=rng.uniform(0, self.width),
            y=rng.uniform(0, self.height),
            speed=rng.uniform(0.5, 2.0),
            radius=rng.uniform(1.0, 4.0),
            opacity=rng.uniform(0.4, 0.9),
            wobble_phase=rng.uniform(0, math.pi * 2),
            wobble_speed=rng.uniform(0.01, 0.04),
            wind=rng.uniform(-0.3, 0.3),
        )

    # -------------------------------------------------------------- simulation
    def step(self, now: float = 0.0) -> None:
        if self.kind == RAIN:
            for p in self.particles:
                self._step_rain(p)
        elif self.kind == SNOW:
            for p in self.particles:
                self._step_snow(p)
        self.canvas = list(self.particles)
        self.frames += 1

    def _step_rain(self, p: RainParticle) -> None:
        p.x += p.wind
        p.y += p.speed
        if p.y > self.height:
            p.y = -p.length
            p.x = self.rng.uniform(0, self.width)
        if p.x > self.width:
            p.x = 0.0

    def _step_snow(self, p: SnowParticle) -> None:
        p.wobble_phase += p.wobble_speed
        p.x += math.sin(p.wobble_phase) * SNOW_WOBBLE_AMPLITUDE + p.wind
        p.y += p.speed
        if p.y > self.height:
            p.y = -2 * p.radius
            p.x = self.rng.uniform(0, self.width)
        p.x %= self.width
