"""Weather codes, the resolved visual state and the resolver that owns it.

A state code is the compact `<hour><letter>` form used by the override
console, e.g. ``14a`` (2 PM, clear) or ``6e`` (6 AM, thunderstorm).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
import re
from typing import Callable, Optional, Tuple

_logger = logging.getLogger("skyscene.state")

STATE_CODE_PATTERN = re.compile(r"([0-9]{1,2})([a-g])", re.IGNORECASE)


class WeatherCode(Enum):
    """The seven weather categories, listed from least to most severe."""

    CLEAR = ("a", "Clear", 0)
    PARTLY_CLOUDY = ("b", "Partly cloudy", 1)
    OVERCAST = ("c", "Overcast", 4)
    RAIN = ("d", "Rain", 5)
    THUNDERSTORM = ("e", "Thunderstorm", 6)
    SNOW = ("f", "Snow", 2)
    FOG = ("g", "Fog", 3)

    def __init__(self, letter: str, label: str, severity: int):
        self.letter = letter
        self.label = label
        self.severity = severity

    @classmethod
    def from_letter(cls, letter: str) -> "WeatherCode":
        key = letter.lower()
        for member in cls:
            if member.letter == key:
                return member
        raise KeyError(letter)

    @classmethod
    def from_wmo(cls, code: int) -> "WeatherCode":
        """Map a WMO weather interpretation code; unknown codes fall back to CLEAR."""
        weather = WMO_WEATHER_CODES.get(code)
        if weather is None:
            _logger.debug("Unmapped weather code %s, using Clear", code)
            return cls.CLEAR
        return weather

    @classmethod
    def by_severity(cls) -> Tuple["WeatherCode", ...]:
        """Most severe first: Thunderstorm, Rain, Overcast, Fog, Snow, PartlyCloudy, Clear."""
        return tuple(sorted(cls, key=lambda w: w.severity, reverse=True))


def _wmo_table():
    table = {0: WeatherCode.CLEAR, 1: WeatherCode.PARTLY_CLOUDY, 2: WeatherCode.PARTLY_CLOUDY,
             3: WeatherCode.OVERCAST, 45: WeatherCode.FOG, 48: WeatherCode.FOG}
    for code in list(range(51, 58)) + list(range(61, 68)) + [80, 81, 82]:
        table[code] = WeatherCode.RAIN
    for code in list(range(71, 78)) + [85, 86]:
        table[code] = WeatherCode.SNOW
    for code in (95, 96, 99):
        table[code] = WeatherCode.THUNDERSTORM
    return table


WMO_WEATHER_CODES = _wmo_table()


class InvalidStateCode(ValueError):
    """Raised for a malformed or out-of-range override code."""

    GUIDANCE = (
        "Use <hour><letter>: hour 0-23 followed by a weather letter "
        "a=clear b=partly cloudy c=overcast d=rain e=thunderstorm f=snow g=fog "
        "(e.g. 14a, 6e)."
    )

    def __init__(self, code: str, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"Invalid state code {code!r}: {reason}. {self.GUIDANCE}")


@dataclass(frozen=True)
class VisualState:
    hour: float
    weather: WeatherCode
    is_override: bool = False

    @property
    def code(self) -> str:
        return f"{int(self.hour)}{self.weather.letter}"


def is_daytime(hour: float) -> bool:
    return 6.0 <= hour < 19.0


def parse_state_code(code: str) -> Tuple[int, WeatherCode]:
    """Validate a state code and return (hour, weather) or raise InvalidStateCode."""
    if not isinstance(code, str):
        raise InvalidStateCode(str(code), "expected a string")
    m = STATE_CODE_PATTERN.fullmatch(code.strip())
    if m is None:
        raise InvalidStateCode(code, "does not match <hour><letter>")
    hour = int(m.group(1))
    if hour > 23:
        raise InvalidStateCode(code, f"hour {hour} is outside 0-23")
    return hour, WeatherCode.from_letter(m.group(2))


class StateResolver:
    """Computes the effective (hour, weather) pair from override or auto inputs.

    `on_change` is called once after every successful override mutation so the
    owner can run a resolution+render pass.
    """

    def __init__(self, clock, on_change: Optional[Callable[[], None]] = None):
        self.clock = clock
        self.on_change = on_change
        self.detected_weather = WeatherCode.CLEAR
        self._override: Optional[Tuple[int, WeatherCode]] = None
        self._state: Optional[VisualState] = None

    @property
    def is_override(self) -> bool:
        return self._override is not None

    def set_override(self, code: str) -> VisualState:
        hour, weather = parse_state_code(code)
        self._override = (hour, weather)
        _logger.info("Override set to %d%s (%s)", hour, weather.letter, weather.label)
        self._changed()
        return self.get_state()

    def clear_override(self) -> VisualState:
        self._override = None
        _logger.info("Override cleared; using detected weather %s", self.detected_weather.label)
        self._changed()
        return self.get_state()

    def resolve(self) -> VisualState:
        if self._override is not None:
            hour, weather = self._override
            # mid-hour keeps an override off exact keyframe boundaries
            state = VisualState(hour + 0.5, weather, True)
        else:
            hour = math.floor(self.clock.current_hour()) % 24
            state = VisualState(float(hour), self.detected_weather, False)
        self._state = state
        return state

    def get_state(self) -> VisualState:
        if self._state is None:
            return self.resolve()
        return self._state

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
        else:
            self.resolve()
