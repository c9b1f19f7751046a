"""Procedural cloud sprites.

Each weather category maps to a (count, variant) signature. The sprite pool is
only rebuilt when that signature changes between passes, so clouds already
drifting across the sky keep their place when the 30s refresh re-applies the
same weather.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Dict, Iterator, List, Optional, Tuple

from skyscene.state import VisualState, WeatherCode, is_daytime

_logger = logging.getLogger("skyscene.clouds")

SIZE_RANGE = (0.6, 1.6)
BAND_RANGE = (0.02, 0.45)
DURATION_RANGE = (60.0, 140.0)
DRIFT_MARGIN = 0.3

VARIANT_OPACITY: Dict[str, Tuple[float, float]] = {
    "day": (0.7, 0.95),
    "night": (0.35, 0.6),
    "overcast": (0.75, 0.95),
    "storm": (0.8, 1.0),
}

VARIANT_COLORS: Dict[str, Tuple[int, int, int]] = {
    "day": (250, 250, 255),
    "night": (70, 76, 100),
    "overcast": (170, 176, 186),
    "storm": (86, 90, 102),
}


@dataclass(frozen=True)
class CloudSprite:
    size: float
    vertical_band: float
    duration: float
    delay: float
    opacity: float
    variant: str

    def x_at(self, elapsed: float) -> float:
        """Normalized x; drifts left to right and re-enters from the left margin."""
        cycle = ((elapsed + self.delay) / self.duration) % 1.0
        return cycle * (1.0 + 2 * DRIFT_MARGIN) - DRIFT_MARGIN


def signature_for(state: VisualState) -> Tuple[int, Optional[str]]:
    weather = state.weather
    day = is_daytime(state.hour)
    if weather is WeatherCode.CLEAR:
        return 0, None
    if weather is WeatherCode.PARTLY_CLOUDY:
        return 4, "day" if day else "night"
    if weather is WeatherCode.OVERCAST:
        return 8, "overcast"
    if weather is WeatherCode.RAIN:
        return 7, "storm"
    if weather is WeatherCode.THUNDERSTORM:
        return 10, "storm"
    if weather is WeatherCode.SNOW:
        return 6, "overcast" if day else "night"
    if weather is WeatherCode.FOG:
        return 3, "day" if day else "night"
    raise ValueError(f"No cloud signature for {weather}")


class CloudGenerator:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.sprites: List[CloudSprite] = []
        self.signature: Tuple[int, Optional[str]] = (0, None)
        self.elapsed = 0.0
        self.rebuilds = 0

    @property
    def container_opacity(self) -> float:
        return 1.0 if self.signature[0] > 0 else 0.0

    def _make_sprite(self, variant: str) -> CloudSprite:
        rng = self.rng
        duration = rng.uniform(*DURATION_RANGE)
        return CloudSprite(
            size=rng.uniform(*SIZE_RANGE),
            vertical_band=rng.uniform(*BAND_RANGE),
            duration=duration,
            delay=rng.uniform(0.0, duration),
            opacity=rng.uniform(*VARIANT_OPACITY[variant]),
            variant=variant,
        )

    def apply(self, state: VisualState) -> List[CloudSprite]:
        signature = signature_for(state)
        if signature == self.signature and (self.sprites or signature[0] == 0):
            return self.sprites
        count, variant = signature
        self.sprites = [self._make_sprite(variant) for _ in range(count)] if variant else []
        self.signature = signature
        self.rebuilds += 1
        _logger.debug("Rebuilt cloud pool: %d x %s", count, variant)
        return self.sprites

    def advance(self, dt: float) -> None:
        self.elapsed += dt

    def positions(self) -> Iterator[Tuple[CloudSprite, float, float]]:
        for sprite in self.sprites:
            yield sprite, sprite.x_at(self.elapsed), sprite.vertical_band
