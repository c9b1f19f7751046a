"""Sky colour keyframes and weather tinting.

The 24-hour cycle is a list of `SkyPhase` keyframes. The background colour is
interpolated channel by channel between the surrounding keyframes; the
gradient and accent overlays are picked discretely from whichever keyframe is
nearer. Bad weather then desaturates the background and fades the overlays
out so the colourful keyframe art does not show through a storm.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, Sequence, Tuple

from skyscene.state import VisualState, WeatherCode

_logger = logging.getLogger("skyscene.sky")

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, float]


def parse_hex(value: str) -> RGB:
    """Parse ``#rgb`` or ``#rrggbb`` into an RGB tuple."""
    h = value.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Not a hex colour: {value!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def to_hex(color: Sequence[int]) -> str:
    return "#" + "".join(f"{int(c):02x}" for c in color[:3])


def lerp_color(a: RGB, b: RGB, t: float) -> RGB:
    return tuple(round(ca + (cb - ca) * t) for ca, cb in zip(a, b))  # type: ignore[return-value]


def desaturate(color: RGB, amount: float) -> RGB:
    """Blend `color` toward a slightly cool near-grey of the same luminance."""
    if amount <= 0:
        return tuple(color)  # type: ignore[return-value]
    r, g, b = color
    lum = 0.299 * r + 0.587 * g + 0.114 * b
    target = (lum * 0.94, lum * 0.97, min(255.0, lum * 1.06 + 4))
    amount = min(1.0, amount)
    if amount == 1.0:
        return tuple(round(c) for c in target)  # type: ignore[return-value]
    return tuple(round(c + (tc - c) * amount) for c, tc in zip(color, target))  # type: ignore[return-value]


@dataclass(frozen=True)
class Gradient:
    """Vertical gradient; offsets run 0 (bottom of the viewport) to 1 (top).

    Radial gradients are elliptical around `center` (normalized viewport
    coordinates, y measured from the top) with offsets as fractions of the
    farthest corner.
    """

    kind: str
    stops: Tuple[Tuple[float, RGB], ...]
    center: Tuple[float, float] = (0.5, 1.0)


@dataclass(frozen=True)
class Accent:
    """Soft radial glow: `color` at `center`, transparent at `extent`."""

    center: Tuple[float, float]
    color: RGBA
    extent: float


@dataclass(frozen=True)
class SkyPhase:
    hour: float
    base_color: RGB
    gradient: Gradient
    accent: Accent


@dataclass(frozen=True)
class SkyColor:
    background: RGB
    gradient: Gradient
    accent: Accent


@dataclass(frozen=True)
class SkyLayer:
    background: RGB
    gradient: Gradient
    gradient_opacity: float
    accent: Accent
    accent_opacity: float


def _linear(*stops):
    return Gradient("linear", tuple((pct / 100.0, parse_hex(c)) for c, pct in stops))


def _radial(*stops):
    return Gradient("radial", tuple((pct / 100.0, parse_hex(c)) for c, pct in stops))


def _accent(x, y, rgba, extent):
    return Accent((x / 100.0, y / 100.0), rgba, extent / 100.0)


def _phase(hour, bg, gradient, accent) -> SkyPhase:
    return SkyPhase(float(hour), parse_hex(bg), gradient, accent)


SKY_PHASES: Tuple[SkyPhase, ...] = (
    _phase(0, "#05050f", _radial(("#0a0a2e", 0), ("#050510", 50), ("#020208", 100)),
           _accent(30, 70, (40, 20, 80, 0.3), 60)),
    _phase(3, "#06061a", _radial(("#0d0d35", 0), ("#060618", 50), ("#030310", 100)),
           _accent(70, 80, (30, 15, 60, 0.3), 60)),
    _phase(4.5, "#0f0a1e", _linear(("#1a0a2e", 0), ("#150824", 30), ("#0d0618", 60), ("#08040f", 100)),
           _accent(50, 95, (80, 20, 60, 0.25), 50)),
    _phase(5.5, "#1a0e28", _linear(("#4a1942", 0), ("#2d1040", 20), ("#1a0830", 50), ("#0d0520", 100)),
           _accent(50, 90, (180, 60, 100, 0.3), 45)),
    _phase(6, "#2a1535", _linear(("#c2485b", 0), ("#8b2a5e", 15), ("#4a1848", 35), ("#1e0d30", 65),
                                 ("#0d0820", 100)),
           _accent(50, 95, (255, 120, 80, 0.35), 40)),
    _phase(6.5, "#3a1a3a", _linear(("#e8825a", 0), ("#d4587a", 12), ("#a23a6a", 28), ("#5a2050", 50),
                                   ("#1e1040", 80), ("#0f0a28", 100)),
           _accent(40, 90, (255, 160, 80, 0.4), 45)),
    _phase(7, "#4a2040", _linear(("#f0a848", 0), ("#e87858", 10), ("#c85070", 22), ("#8a3468", 40),
                                 ("#4a2555", 60), ("#1e1545", 85), ("#101035", 100)),
           _accent(55, 85, (255, 200, 100, 0.35), 50)),
    _phase(7.5, "#3a3050", _linear(("#fcc870", 0), ("#f0a050", 8), ("#d87860", 18), ("#a05878", 32),
                                   ("#604070", 52), ("#303868", 75), ("#182050", 100)),
           _accent(50, 80, (255, 220, 140, 0.3), 50)),
    _phase(8.5, "#2a4070", _linear(("#f8e8a0", 0), ("#88c8e8", 20), ("#5090c0", 40), ("#3868a0", 60),
                                   ("#284880", 80), ("#1e3060", 100)),
           _accent(50, 70, (255, 240, 200, 0.2), 50)),
    _phase(10, "#1a5a90", _linear(("#a8ddf0", 0), ("#60b8e0", 25), ("#3898d0", 50), ("#2070b0", 75),
                                  ("#185090", 100)),
           _accent(60, 30, (255, 255, 255, 0.1), 50)),
    _phase(12, "#1868a8", _linear(("#b8e8f8", 0), ("#68c8e8", 20), ("#38a8d8", 45), ("#2080c0", 70),
                                  ("#1868a8", 100)),
           _accent(50, 20, (255, 255, 240, 0.15), 45)),
    _phase(14, "#1860a0", _linear(("#b0e0f0", 0), ("#60b8e0", 25), ("#3898c8", 50), ("#2078b0", 75),
                                  ("#185898", 100)),
           _accent(40, 25, (255, 255, 230, 0.12), 50)),
    _phase(16, "#2a5088", _linear(("#e8d8a0", 0), ("#90b8d0", 20), ("#5898c0", 40), ("#3878a8", 60),
                                  ("#285888", 80), ("#1e4068", 100)),
           _accent(60, 70, (255, 200, 120, 0.2), 50)),
    _phase(17, "#3a4878", _linear(("#f0b868", 0), ("#d89060", 12), ("#b07068", 25), ("#785878", 42),
                                  ("#4a4878", 62), ("#2a3868", 82), ("#1a2858", 100)),
           _accent(45, 85, (255, 180, 80, 0.35), 45)),
    _phase(17.75, "#3a3058", _linear(("#e89048", 0), ("#d06858", 10), ("#a84870", 24), ("#7a3878", 40),
                                     ("#4a2868", 58), ("#2a2058", 78), ("#151840", 100)),
           _accent(50, 90, (255, 140, 60, 0.4), 42)),
    _phase(18.5, "#2a1e48", _linear(("#c05060", 0), ("#903868", 15), ("#5a2868", 35), ("#2e1850", 58),
                                    ("#181238", 80), ("#0d0a25", 100)),
           _accent(55, 92, (220, 80, 80, 0.3), 40)),
    _phase(19.25, "#18122e", _linear(("#6a2858", 0), ("#3a1848", 20), ("#201038", 45), ("#120a28", 70),
                                     ("#08061a", 100)),
           _accent(50, 95, (120, 40, 80, 0.25), 45)),
    _phase(20, "#0d0a1e", _radial(("#1a1035", 0), ("#0d0820", 40), ("#080515", 70), ("#04030a", 100)),
           _accent(40, 80, (60, 20, 80, 0.2), 55)),
    _phase(21.5, "#080814", _radial(("#0f0a28", 0), ("#080618", 50), ("#040310", 100)),
           _accent(60, 70, (40, 15, 60, 0.2), 60)),
    _phase(24, "#05050f", _radial(("#0a0a2e", 0), ("#050510", 50), ("#020208", 100)),
           _accent(30, 70, (40, 20, 80, 0.3), 60)),
)

# Desaturation amount per weather; Clear and PartlyCloudy keep full colour.
WEATHER_DESATURATION: Dict[WeatherCode, float] = {
    WeatherCode.THUNDERSTORM: 0.85,
    WeatherCode.RAIN: 0.75,
    WeatherCode.OVERCAST: 0.7,
    WeatherCode.FOG: 0.65,
    WeatherCode.SNOW: 0.2,
    WeatherCode.PARTLY_CLOUDY: 0.0,
    WeatherCode.CLEAR: 0.0,
}

# (gradient opacity, accent opacity)
OVERLAY_OPACITIES: Dict[WeatherCode, Tuple[float, float]] = {
    WeatherCode.THUNDERSTORM: (0.05, 0.0),
    WeatherCode.RAIN: (0.1, 0.05),
    WeatherCode.OVERCAST: (0.15, 0.1),
    WeatherCode.FOG: (0.2, 0.1),
    WeatherCode.SNOW: (0.45, 0.3),
    WeatherCode.PARTLY_CLOUDY: (0.8, 0.7),
    WeatherCode.CLEAR: (1.0, 1.0),
}


class SkyRenderer:
    def __init__(self, phases: Sequence[SkyPhase] = SKY_PHASES):
        if not phases:
            raise ValueError("SkyRenderer needs at least one keyframe")
        self.phases = tuple(phases)
        self.layer = None

    def phase_index_for(self, hour: float) -> int:
        for i in range(len(self.phases) - 1, -1, -1):
            if hour >= self.phases[i].hour:
                return i
        return 0

    def color_for(self, hour: float) -> SkyColor:
        idx = self.phase_index_for(hour)
        nxt = min(idx + 1, len(self.phases) - 1)
        phase, next_phase = self.phases[idx], self.phases[nxt]
        span = next_phase.hour - phase.hour
        t = 0.0 if span == 0 else max(0.0, min(1.0, (hour - phase.hour) / span))
        chosen = phase if t < 0.5 else next_phase
        return SkyColor(lerp_color(phase.base_color, next_phase.base_color, t),
                        chosen.gradient, chosen.accent)

    def apply_weather_tint(self, color: RGB, weather: WeatherCode) -> RGB:
        return desaturate(color, WEATHER_DESATURATION[weather])

    def overlay_opacities_for(self, weather: WeatherCode) -> Tuple[float, float]:
        return OVERLAY_OPACITIES[weather]

    def apply(self, state: VisualState) -> SkyLayer:
        color = self.color_for(state.hour)
        grad_opacity, accent_opacity = self.overlay_opacities_for(state.weather)
        self.layer = SkyLayer(
            background=self.apply_weather_tint(color.background, state.weather),
            gradient=color.gradient,
            gradient_opacity=grad_opacity,
            accent=color.accent,
            accent_opacity=accent_opacity,
        )
        _logger.debug("Sky at %.2fh %s -> %s", state.hour, state.weather.label, to_hex(self.layer.background))
        return self.layer
