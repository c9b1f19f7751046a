"""Sun and moon placement.

Both bodies travel left to right across an inset span of the viewport along
an inverted parabola. Positions are normalized (0..1, y from the top) so the
compositor can scale them to any window. The two visibility windows overlap a
little around dawn and dusk, giving a soft crossfade.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from skyscene.state import VisualState, WeatherCode

SUN_RISE = 6.0
SUN_SET = 18.5
SUN_FADE_HOURS = 0.5

MOON_RISE = 19.0
MOON_SET = 6.0
MOON_SPAN = 24.0 - MOON_RISE + MOON_SET  # 11h, wraps midnight
MOON_FADE_HOURS = 1.0
MOON_BASE_OPACITY = 0.85

HORIZONTAL_INSET = 0.1
HORIZON_Y = 0.85
ZENITH_Y = 0.15

SUN_VISIBILITY: Dict[WeatherCode, float] = {
    WeatherCode.THUNDERSTORM: 0.0,
    WeatherCode.RAIN: 0.08,
    WeatherCode.OVERCAST: 0.12,
    WeatherCode.FOG: 0.12,
    WeatherCode.SNOW: 0.4,
    WeatherCode.PARTLY_CLOUDY: 0.7,
    WeatherCode.CLEAR: 1.0,
}

MOON_VISIBILITY: Dict[WeatherCode, float] = {
    WeatherCode.THUNDERSTORM: 0.0,
    WeatherCode.RAIN: 0.05,
    WeatherCode.OVERCAST: 0.1,
    WeatherCode.FOG: 0.3,
    WeatherCode.SNOW: 0.5,
    WeatherCode.PARTLY_CLOUDY: 0.75,
    WeatherCode.CLEAR: 1.0,
}


@dataclass(frozen=True)
class CelestialBody:
    x: float
    y: float
    opacity: float
    scale: float = 1.0


HIDDEN = CelestialBody(0.5, HORIZON_Y, 0.0, 1.0)


def arc_height(progress: float) -> float:
    return max(0.0, 1.0 - 4.0 * (progress - 0.5) ** 2)


def _place(progress: float, opacity: float) -> CelestialBody:
    arc = arc_height(progress)
    x = HORIZONTAL_INSET + progress * (1.0 - 2 * HORIZONTAL_INSET)
    y = HORIZON_Y - arc * (HORIZON_Y - ZENITH_Y)
    return CelestialBody(x, y, opacity, 1.0 + 0.25 * (1.0 - arc))


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class CelestialTracker:
    def __init__(self):
        self.sun: CelestialBody = HIDDEN
        self.moon: CelestialBody = HIDDEN

    def sun_for(self, hour: float, weather: WeatherCode) -> CelestialBody:
        if hour < SUN_RISE or hour > SUN_SET:
            return HIDDEN
        progress = (hour - SUN_RISE) / (SUN_SET - SUN_RISE)
        ramp = _clamp01(min((hour - SUN_RISE) / SUN_FADE_HOURS, (SUN_SET - hour) / SUN_FADE_HOURS, 1.0))
        return _place(progress, ramp * SUN_VISIBILITY[weather])

    def moon_progress(self, hour: float) -> Optional[float]:
        """Fraction of the night window elapsed, or None when the moon is down."""
        if hour >= MOON_RISE:
            return (hour - MOON_RISE) / MOON_SPAN
        if hour <= MOON_SET:
            return (hour + 24.0 - MOON_RISE) / MOON_SPAN
        return None

    def moon_for(self, hour: float, weather: WeatherCode) -> CelestialBody:
        progress = self.moon_progress(hour)
        if progress is None:
            return HIDDEN
        elapsed = progress * MOON_SPAN
        ramp = _clamp01(min(elapsed / MOON_FADE_HOURS, (MOON_SPAN - elapsed) / MOON_FADE_HOURS, 1.0))
        return _place(progress, MOON_BASE_OPACITY * ramp * MOON_VISIBILITY[weather])

    def apply(self, state: VisualState) -> Tuple[CelestialBody, CelestialBody]:
        self.sun = self.sun_for(state.hour, state.weather)
        self.moon = self.moon_for(state.hour, state.weather)
        return self.sun, self.moon
