"""Location Resolver: Nominatim forward and reverse geocoding."""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from storymap.errors import ProviderError, status_error, transport_error
from storymap.models import Location

logger = logging.getLogger(__name__)

PROVIDER = "Nominatim"
EARTH_RADIUS_KM = 6371.0


class NominatimGeocoder:
    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "StoryMap.ai/1.0",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(url, params=params, headers={"User-Agent": self._user_agent})
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise status_error(PROVIDER, e) from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e
        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(PROVIDER, "bad_response", "Nominatim returned a body that is not JSON") from e

    async def search(self, query: str, limit: int = 5) -> list[Location]:
        """Free-text search restricted to Australia."""
        data = await self._get("search", {
            "q": query,
            "format": "json",
            "limit": limit,
            "countrycodes": "au",
            "addressdetails": 1,
        })
        if not isinstance(data, list):
            raise ProviderError(PROVIDER, "bad_response", "Unexpected response format from Nominatim")
        locations = [loc for loc in (to_location(r) for r in data) if loc is not None]
        logger.debug("geocode query=%r candidates=%d", query, len(locations))
        return locations

    async def reverse(self, lat: float, lon: float) -> Location:
        data = await self._get("reverse", {
            "lat": lat,
            "lon": lon,
            "format": "json",
            "addressdetails": 1,
        })
        location = to_location(data) if isinstance(data, dict) else None
        if location is None:
            raise ProviderError(PROVIDER, "bad_response", f"No place found at {lat}, {lon}")
        return location


def to_location(raw: dict[str, Any]) -> Location | None:
    """Convert one Nominatim result; None when it lacks usable coordinates."""
    try:
        lat = float(raw["lat"])
        lon = float(raw["lon"])
    except (KeyError, TypeError, ValueError):
        return None
    bbox = raw.get("boundingbox")
    try:
        bounding_box = [float(v) for v in bbox] if bbox else None
    except (TypeError, ValueError):
        bounding_box = None
    return Location(
        display_name=raw.get("display_name") or raw.get("name") or "",
        latitude=lat,
        longitude=lon,
        address=raw.get("address") or {},
        type=raw.get("type") or "location",
        importance=float(raw.get("importance") or 0),
        bounding_box=bounding_box,
        raw=raw,
    )


def distance_km(lat_a: float, lon_a: float, lat_b: float, lon_b: float) -> float:
    """Great-circle distance between two points (haversine)."""
    lat1, lat2 = math.radians(lat_a), math.radians(lat_b)
    d_lat = lat2 - lat1
    d_lon = math.radians(lon_b - lon_a)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
