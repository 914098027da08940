"""Current conditions from OpenWeatherMap, with a mock when unavailable."""

from __future__ import annotations

import logging
import random

import httpx

from storymap.errors import ProviderError, json_object, status_error, transport_error
from storymap.models import Weather

logger = logging.getLogger(__name__)

PROVIDER = "OpenWeatherMap"
MOCK_CONDITIONS = ["sunny", "partly cloudy", "cloudy", "light rain"]


class WeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timeout: float = 10.0,
        rng: random.Random | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._rng = rng or random.Random()

    async def current(self, lat: float, lon: float) -> Weather:
        """Live conditions, or randomised mock conditions when the provider is unavailable."""
        if not self._api_key:
            logger.info("weather API key not configured, using mock data")
            return self.mock()
        try:
            return await self._fetch(lat, lon)
        except ProviderError as e:
            logger.warning("weather lookup failed (%s), using mock data: %s", e.kind, e)
            return self.mock()

    async def _fetch(self, lat: float, lon: float) -> Weather:
        params = {"lat": lat, "lon": lon, "appid": self._api_key, "units": "metric"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(f"{self._base_url}/weather", params=params)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise status_error(PROVIDER, e) from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e

        data = json_object(PROVIDER, resp)
        try:
            main = data["main"]
            rain_mm = (data.get("rain") or {}).get("1h", 0)
            return Weather(
                temperature=main["temp"],
                feels_like=main["feels_like"],
                humidity=main["humidity"],
                condition=data["weather"][0]["description"],
                rain_chance=round(rain_mm * 10),
                wind_speed=data["wind"]["speed"],
                pressure=main["pressure"],
                location=data.get("name") or "",
            )
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(PROVIDER, "bad_response", "Unexpected response format from OpenWeatherMap") from e

    def mock(self) -> Weather:
        r = self._rng
        return Weather(
            temperature=round(15 + r.random() * 20),
            feels_like=round(15 + r.random() * 20),
            humidity=round(40 + r.random() * 40),
            condition=r.choice(MOCK_CONDITIONS),
            rain_chance=round(r.random() * 60),
            wind_speed=round(r.random() * 25),
            pressure=round(1000 + r.random() * 50),
            location="Australia",
            mock=True,
        )
