"""Systems package for engine collaborators.

Clock providers, the weather detection service and the in-process event bus
used to fan resolved state out to the rendering subsystems.
"""

__all__ = [
    "event_bus",
    "time_system",
    "weather_service",
]
