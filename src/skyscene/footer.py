"""Footer text colour that stays legible over the current sky."""
from __future__ import annotations

from typing import Dict, Optional

from skyscene.sky import RGB, parse_hex
from skyscene.state import VisualState, WeatherCode

# None means the colour follows the time of day
WEATHER_FOOTER_COLORS: Dict[WeatherCode, Optional[str]] = {
    WeatherCode.THUNDERSTORM: "#e2e8f0",
    WeatherCode.RAIN: "#dbeafe",
    WeatherCode.OVERCAST: "#f1f5f9",
    WeatherCode.FOG: "#1e293b",
    WeatherCode.SNOW: "#1e3a5f",
    WeatherCode.PARTLY_CLOUDY: None,
    WeatherCode.CLEAR: None,
}

NIGHT_COLOR = "#cbd5e1"
DAWN_COLOR = "#fde68a"
DAY_COLOR = "#0f172a"
DUSK_COLOR = "#fed7aa"


def time_of_day_color(hour: float) -> str:
    if hour < 5 or hour >= 20:
        return NIGHT_COLOR
    if hour < 8:
        return DAWN_COLOR
    if hour < 17:
        return DAY_COLOR
    return DUSK_COLOR


class FooterColorizer:
    def __init__(self):
        self.color: str = NIGHT_COLOR

    def color_for(self, state: VisualState) -> str:
        return WEATHER_FOOTER_COLORS[state.weather] or time_of_day_color(state.hour)

    def apply(self, state: VisualState) -> str:
        self.color = self.color_for(state)
        return self.color

    @property
    def rgb(self) -> RGB:
        return parse_hex(self.color)
