"""Configuration defaults and constants for the sky scene.

Keep this file light: module constants plus a small Config dataclass that the
launcher fills in from command line flags.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_WINDOW_SIZE: Tuple[int, int] = (960, 640)
DEFAULT_FPS: int = 60
DEFAULT_REFRESH_INTERVAL: float = 30.0  # seconds between resolution passes

RAIN_PARTICLE_COUNT: int = 200
SNOW_PARTICLE_COUNT: int = 150
STAR_COUNT: int = 120

OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"
GEOLOCATION_URL: str = "https://ipapi.co/json/"
DEFAULT_WEATHER_TIMEOUT: float = 10.0


@dataclass
class Config:
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    fps: int = DEFAULT_FPS
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    detect_weather: bool = True
    weather_timeout: float = DEFAULT_WEATHER_TIMEOUT
    seed: Optional[int] = None
    debug: bool = False
    initial_state: Optional[str] = None
