"""Time-and-weather sky scene.

The engine resolves an (hour, weather) state and computes every visual layer
for it; `skyscene.render` and `skyscene.app` draw those layers with pygame.
"""
from skyscene.config import Config
from skyscene.console import OverrideConsole
from skyscene.engine import SceneFrame, SkyEngine
from skyscene.state import InvalidStateCode, StateResolver, VisualState, WeatherCode
from skyscene.systems.weather_service import WeatherDetectionFailure, WeatherDetectionService

__all__ = [
    "Config",
    "InvalidStateCode",
    "OverrideConsole",
    "SceneFrame",
    "SkyEngine",
    "StateResolver",
    "VisualState",
    "WeatherCode",
    "WeatherDetectionFailure",
    "WeatherDetectionService",
]

__version__ = "0.1.0"
