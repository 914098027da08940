"""Climate Aggregator: past and projected snapshots and their deltas.

Missing data is acceptable degradation here: a failed or unparseable lookup
is replaced with a fixed snapshot, never an error to the caller.
"""

from __future__ import annotations

import logging
import re

from storymap.errors import ProviderError
from storymap.gather import gather_settled
from storymap.geocoding import distance_km
from storymap.models import ClimateChanges, ClimateComparison, ClimateEvent, ClimateSnapshot, EventSite
from storymap.relevance import classify_event_type, extract_year, truncate
from storymap.search import SearchClient

logger = logging.getLogger(__name__)

PAST_FALLBACK = ClimateSnapshot(temperature=26, rainfall=450, wind=14, source="Historical climate records", fallback=True)
FUTURE_FALLBACK = ClimateSnapshot(temperature=30, rainfall=380, wind=17, source="Climate projection models", fallback=True)

_TEMP_RE = re.compile(r"(-?\d+(?:\.\d+)?)\s*°\s*C", re.IGNORECASE)
_RAIN_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:mm|millimet(?:er|re)s?)\b", re.IGNORECASE)
_WIND_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:km/h|kmh|kph)\b", re.IGNORECASE)


def percent_change(past: float | None, future: float | None) -> float:
    """(future - past) / past * 100, rounded to one decimal; 0 when undefined."""
    if not past or future is None:
        return 0
    return round((future - past) / past * 100, 1)


def extract_figures(text: str, fallback: ClimateSnapshot) -> ClimateSnapshot:
    """Pull the first temperature (°C), rainfall (mm) and wind (km/h) from text.

    Each figure missing from the text keeps its fallback value. The result is
    marked as fallback only when nothing at all was found.
    """
    found = {}
    for field, pattern in (("temperature", _TEMP_RE), ("rainfall", _RAIN_RE), ("wind", _WIND_RE)):
        match = pattern.search(text or "")
        if match:
            found[field] = float(match.group(1))
    if not found:
        return fallback.model_copy()
    return fallback.model_copy(update={**found, "fallback": False})


def compare(lat: float, lon: float, past: ClimateSnapshot, future: ClimateSnapshot) -> ClimateComparison:
    return ClimateComparison(
        latitude=lat,
        longitude=lon,
        past=past,
        future=future,
        changes=ClimateChanges(
            temperature=percent_change(past.temperature, future.temperature),
            rainfall=percent_change(past.rainfall, future.rainfall),
            wind=percent_change(past.wind, future.wind),
        ),
    )


# Places with a documented history of each event type, for the map layer.
_EVENT_SITES: dict[str, list[tuple[str, float, float, str]]] = {
    "bushfires": [
        ("Blue Mountains", -33.7, 150.3, "NSW"),
        ("Adelaide Hills", -34.9, 138.7, "SA"),
        ("Grampians", -37.2, 142.5, "VIC"),
        ("Perth Hills", -31.9, 116.1, "WA"),
        ("Kangaroo Island", -35.8, 137.2, "SA"),
        ("East Gippsland", -37.5, 148.2, "VIC"),
        ("Hawkesbury", -33.6, 150.8, "NSW"),
    ],
    "floods": [
        ("Brisbane", -27.5, 153.0, "QLD"),
        ("Lismore", -28.8, 153.3, "NSW"),
        ("Townsville", -19.3, 146.8, "QLD"),
        ("Katherine", -14.5, 132.3, "NT"),
        ("Rockhampton", -23.4, 150.5, "QLD"),
        ("Charleville", -26.4, 146.3, "QLD"),
    ],
    "droughts": [
        ("Murray-Darling Basin", -34.5, 142.0, "Multi"),
        ("Broken Hill", -31.9, 141.4, "NSW"),
        ("Charleville", -26.4, 146.3, "QLD"),
        ("Dubbo", -32.2, 148.6, "NSW"),
        ("Mildura", -34.2, 142.1, "VIC"),
        ("Longreach", -23.4, 144.3, "QLD"),
    ],
}


def event_sites(near: tuple[float, float] | None = None) -> list[EventSite]:
    """The event-site catalogue, nearest first when a reference point is given."""
    sites = [
        EventSite(id=f"{kind}_{i}", type=kind, location=name, state=state, latitude=lat, longitude=lon)
        for kind, entries in _EVENT_SITES.items()
        for i, (name, lat, lon, state) in enumerate(entries)
    ]
    if near is not None:
        sites.sort(key=lambda s: distance_km(near[0], near[1], s.latitude, s.longitude))
    return sites


class ClimateAggregator:
    def __init__(self, search: SearchClient) -> None:
        self._search = search

    async def _snapshot(self, query: str, fallback: ClimateSnapshot) -> ClimateSnapshot:
        try:
            answer = await self._search.climate_answer(query)
        except ProviderError as e:
            logger.warning("climate lookup fell back (%s): %s", e.kind, e)
            return fallback.model_copy()
        return extract_figures(answer, fallback)

    async def historical(self, lat: float, lon: float) -> ClimateSnapshot:
        return await self._snapshot(
            f"historical climate data 1990-2020 {lat} {lon} Australia average temperature rainfall wind",
            PAST_FALLBACK,
        )

    async def projection(self, lat: float, lon: float) -> ClimateSnapshot:
        return await self._snapshot(
            f"climate projections 2050-2080 {lat} {lon} Australia future temperature rainfall wind",
            FUTURE_FALLBACK,
        )

    async def snapshots(self, lat: float, lon: float) -> tuple[ClimateSnapshot, ClimateSnapshot]:
        past, future = await gather_settled(self.historical(lat, lon), self.projection(lat, lon))
        return (
            past.value_or(PAST_FALLBACK.model_copy()),
            future.value_or(FUTURE_FALLBACK.model_copy()),
        )

    async def comparison(self, lat: float, lon: float) -> ClimateComparison:
        past, future = await self.snapshots(lat, lon)
        return compare(lat, lon, past, future)

    async def events(self, location: str) -> list[ClimateEvent]:
        """Recorded bushfires, floods and droughts near a place. Raises on provider failure."""
        results = await self._search.climate_events(location)
        return [
            ClimateEvent(
                title=r.get("title") or "Climate event",
                description=truncate(r.get("content") or "", 200),
                date=extract_year(r.get("content") or "") or "Unknown",
                type=classify_event_type(f"{r.get('title') or ''} {r.get('content') or ''}"),
                url=r.get("url"),
            )
            for r in results
        ]
