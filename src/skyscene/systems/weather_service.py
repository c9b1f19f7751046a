"""Weather detection over HTTP.

Looks up the observer position (configured coordinates, or an IP geolocation
lookup when none are given) and asks Open-Meteo for the current WMO weather
code. Every transport, status or payload problem surfaces as
`WeatherDetectionFailure`; the engine decides what to fall back to.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import httpx

from skyscene.config import DEFAULT_WEATHER_TIMEOUT, GEOLOCATION_URL, OPEN_METEO_URL
from skyscene.state import WeatherCode

_logger = logging.getLogger("skyscene.weather_service")


class WeatherDetectionFailure(Exception):
    """Weather could not be detected (network, service or payload error)."""


class WeatherDetectionService:
    def __init__(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_WEATHER_TIMEOUT,
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.timeout = timeout
        self._client = client

    async def _get_json(self, client: httpx.AsyncClient, url: str, params=None) -> dict:
        resp = await client.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise WeatherDetectionFailure(f"Unexpected payload from {url}")
        return data

    async def locate(self, client: httpx.AsyncClient) -> Tuple[float, float]:
        if self.latitude is not None and self.longitude is not None:
            return self.latitude, self.longitude
        data = await self._get_json(client, GEOLOCATION_URL)
        lat, lon = float(data["latitude"]), float(data["longitude"])
        _logger.debug("Geolocated to %.3f,%.3f", lat, lon)
        return lat, lon

    async def fetch_code(self) -> int:
        """Return the current WMO weather code for the observer position."""
        client = self._client or httpx.AsyncClient(headers={"Accept": "application/json"})
        try:
            lat, lon = await self.locate(client)
            data = await self._get_json(client, OPEN_METEO_URL, params={
                "latitude": lat,
                "longitude": lon,
                "current": "weather_code",
                "timezone": "auto",
            })
            return int(data["current"]["weather_code"])
        except WeatherDetectionFailure:
            raise
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise WeatherDetectionFailure(f"Weather detection failed: {e}") from e
        finally:
            if self._client is None:
                await client.aclose()

    async def detect(self) -> WeatherCode:
        code = await self.fetch_code()
        weather = WeatherCode.from_wmo(code)
        _logger.info("Detected weather code %d -> %s", code, weather.label)
        return weather
