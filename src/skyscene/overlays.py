"""Static gloom and fog washes keyed by weather and day/night."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from skyscene.sky import Gradient, parse_hex
from skyscene.state import VisualState, WeatherCode, is_daytime


def _wash(*stops):
    return Gradient("linear", tuple((pct / 100.0, parse_hex(c)) for c, pct in stops))


@dataclass(frozen=True)
class GloomStyle:
    opacity: float
    day: Optional[Gradient]
    night: Optional[Gradient]


GLOOM_STYLES: Dict[WeatherCode, GloomStyle] = {
    WeatherCode.THUNDERSTORM: GloomStyle(
        1.0,
        _wash(("#3a3f48", 0), ("#2c3038", 50), ("#1f2229", 100)),
        _wash(("#15171c", 0), ("#0e1014", 50), ("#08090c", 100)),
    ),
    WeatherCode.RAIN: GloomStyle(
        0.85,
        _wash(("#5a616c", 0), ("#4a505a", 50), ("#3a3f48", 100)),
        _wash(("#1c1f25", 0), ("#14161b", 50), ("#0c0d11", 100)),
    ),
    WeatherCode.OVERCAST: GloomStyle(
        0.7,
        _wash(("#8a9099", 0), ("#767c86", 50), ("#626872", 100)),
        _wash(("#23262c", 0), ("#1a1c21", 50), ("#111317", 100)),
    ),
    WeatherCode.FOG: GloomStyle(
        0.5,
        _wash(("#b4b8be", 0), ("#a2a6ad", 50), ("#8e939a", 100)),
        _wash(("#2e3136", 0), ("#24272b", 50), ("#1a1c20", 100)),
    ),
    WeatherCode.SNOW: GloomStyle(
        0.35,
        _wash(("#d6dbe2", 0), ("#c3c9d1", 50), ("#aeb5bf", 100)),
        _wash(("#2a2f38", 0), ("#20242b", 50), ("#161a20", 100)),
    ),
    WeatherCode.PARTLY_CLOUDY: GloomStyle(0.0, None, None),
    WeatherCode.CLEAR: GloomStyle(0.0, None, None),
}

FOG_OPACITY: Dict[WeatherCode, float] = {
    WeatherCode.FOG: 1.0,
    WeatherCode.SNOW: 0.25,
    WeatherCode.THUNDERSTORM: 0.0,
    WeatherCode.RAIN: 0.0,
    WeatherCode.OVERCAST: 0.0,
    WeatherCode.PARTLY_CLOUDY: 0.0,
    WeatherCode.CLEAR: 0.0,
}


class GloomOverlay:
    def __init__(self):
        self.opacity = 0.0
        self.gradient: Optional[Gradient] = None

    def apply(self, state: VisualState) -> Tuple[Optional[Gradient], float]:
        style = GLOOM_STYLES[state.weather]
        self.gradient = style.day if is_daytime(state.hour) else style.night
        self.opacity = style.opacity
        return self.gradient, self.opacity


class FogOverlay:
    def __init__(self):
        self.opacity = 0.0

    def apply(self, state: VisualState) -> float:
        self.opacity = FOG_OPACITY[state.weather]
        return self.opacity
