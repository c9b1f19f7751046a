"""SkyEngine: the explicit context that owns every piece of visual state.

One engine instance holds the resolver, the scheduler and all rendering
subsystems. A resolution pass resolves one `VisualState` and posts it on the
event bus; every subsystem is subscribed and recomputes its own layer
synchronously, so nothing ever sees a half-applied state. `frame()` collects
the layer values into a `SceneFrame` for the host compositor.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import List, Optional, Tuple

from skyscene.celestial import CelestialBody, CelestialTracker
from skyscene.clouds import CloudGenerator, CloudSprite
from skyscene.config import Config
from skyscene.console import OverrideConsole
from skyscene.footer import FooterColorizer
from skyscene.lightning import LightningScheduler
from skyscene.overlays import FogOverlay, GloomOverlay
from skyscene.precipitation import Particle, PrecipitationSimulator
from skyscene.sky import RGB, Accent, Gradient, SkyRenderer
from skyscene.stars import Star, StarField
from skyscene.state import InvalidStateCode, StateResolver, VisualState, WeatherCode
from skyscene.systems.event_bus import STATE_RESOLVED, EventBus
from skyscene.systems.time_system import SystemClock
from skyscene.systems.weather_service import WeatherDetectionFailure, WeatherDetectionService
from skyscene.timer import Scheduler, Timer

_logger = logging.getLogger("skyscene.engine")


@dataclass(frozen=True)
class SceneFrame:
    state: VisualState
    background: RGB
    gradient: Gradient
    gradient_opacity: float
    accent: Accent
    accent_opacity: float
    gloom: Optional[Gradient]
    gloom_opacity: float
    fog_opacity: float
    sun: CelestialBody
    moon: CelestialBody
    clouds: Tuple[Tuple[CloudSprite, float, float], ...]
    cloud_opacity: float
    precipitation: Optional[str]
    particles: Tuple[Particle, ...]
    lightning_opacity: float
    stars: Tuple[Star, ...]
    star_opacity: float
    status: str
    footer_color: str


def status_text(state: VisualState, clock_hour: float) -> str:
    if state.is_override:
        return f"{state.weather.label} · {state.code} (override)"
    minutes = int(round((clock_hour % 24.0) * 60)) % (24 * 60)
    return f"{state.weather.label} · {minutes // 60:02d}:{minutes % 60:02d}"


class SkyEngine:
    def __init__(self, config: Optional[Config] = None, clock=None,
                 weather_service: Optional[WeatherDetectionService] = None,
                 rng: Optional[random.Random] = None, scheduler: Optional[Scheduler] = None):
        self.config = config or Config()
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random(self.config.seed)
        self.scheduler = scheduler or Scheduler()
        self.weather_service = weather_service
        self.bus = EventBus()

        size = self.config.window_size
        self.resolver = StateResolver(self.clock, on_change=self.refresh)
        self.console = OverrideConsole(self.resolver)
        self.sky = SkyRenderer()
        self.celestial = CelestialTracker()
        self.clouds = CloudGenerator(self.rng)
        self.lightning = LightningScheduler(self.scheduler, self.rng)
        self.precipitation = PrecipitationSimulator(self.scheduler, self.lightning, size, self.rng)
        self.gloom = GloomOverlay()
        self.fog = FogOverlay()
        self.stars = StarField(self.scheduler, size, self.rng)
        self.footer = FooterColorizer()

        for subsystem in (self.sky, self.celestial, self.clouds, self.precipitation,
                          self.gloom, self.fog, self.stars, self.footer):
            self.bus.subscribe(STATE_RESOLVED, subsystem.apply)

        self.state: Optional[VisualState] = None
        self.passes = 0
        self.running = False
        self._refresh_timer: Optional[Timer] = None

    # --------------------------------------------------------------- lifecycle
    def start(self) -> None:
        if self.running:
            return
        self.running = True
        if self.config.initial_state:
            try:
                # set_override runs the first pass itself
                self.resolver.set_override(self.config.initial_state)
            except InvalidStateCode as e:
                _logger.warning("Ignoring initial state: %s", e)
                self.refresh()
        else:
            self.refresh()
        self.stars.start()
        self._schedule_refresh()
        _logger.info("Engine started at %s", self.state.code if self.state else "?")

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self.scheduler.cancel(self._refresh_timer)
        self._refresh_timer = None
        self.stars.stop()
        self.precipitation.stop()
        _logger.info("Engine stopped")

    def _schedule_refresh(self) -> None:
        self._refresh_timer = self.scheduler.call_later(self.config.refresh_interval, self._on_refresh_tick)

    def _on_refresh_tick(self) -> None:
        if not self.running:
            return
        self.refresh()
        self._schedule_refresh()

    # ----------------------------------------------------------------- passes
    def refresh(self) -> VisualState:
        """Resolve one state and fan it out to every subsystem."""
        state = self.resolver.resolve()
        self.state = state
        self.passes += 1
        self.bus.post(STATE_RESOLVED, state)
        _logger.debug("Pass %d: %.2fh %s override=%s", self.passes, state.hour,
                      state.weather.label, state.is_override)
        return state

    async def detect_weather(self) -> WeatherCode:
        """One-shot auto-detection; failures fall back to Clear and never raise."""
        weather = WeatherCode.CLEAR
        if self.weather_service is not None:
            try:
                weather = await self.weather_service.detect()
            except WeatherDetectionFailure as e:
                _logger.warning("%s; falling back to Clear", e)
        self.resolver.detected_weather = weather
        self.refresh()
        return weather

    def update(self, dt: float) -> None:
        """Advance timers, run one animation frame and drift clouds."""
        self.scheduler.advance(dt)
        self.scheduler.run_frame()
        self.clouds.advance(dt)

    def resize(self, width: int, height: int) -> None:
        self.precipitation.resize(width, height)
        self.stars.resize(width, height)

    # ------------------------------------------------------------------ output
    def frame(self) -> SceneFrame:
        state = self.state or self.refresh()
        sky = self.sky.layer or self.sky.apply(state)
        particles: List[Particle] = list(self.precipitation.canvas)
        return SceneFrame(
            state=state,
            background=sky.background,
            gradient=sky.gradient,
            gradient_opacity=sky.gradient_opacity,
            accent=sky.accent,
            accent_opacity=sky.accent_opacity,
            gloom=self.gloom.gradient,
            gloom_opacity=self.gloom.opacity,
            fog_opacity=self.fog.opacity,
            sun=self.celestial.sun,
            moon=self.celestial.moon,
            clouds=tuple(self.clouds.positions()),
            cloud_opacity=self.clouds.container_opacity,
            precipitation=self.precipitation.kind,
            particles=tuple(particles),
            lightning_opacity=self.lightning.opacity,
            stars=tuple(self.stars.stars),
            star_opacity=self.stars.opacity,
            status=status_text(state, self.clock.current_hour()),
            footer_color=self.footer.color,
        )
