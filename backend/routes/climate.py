"""Climate snapshot, comparison, narrative and event endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services
from storymap.climate import event_sites
from storymap.errors import ProviderError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/climate")


def _require_coords(lat: float | None, lon: float | None) -> tuple[float, float]:
    if lat is None or lon is None:
        raise HTTPException(400, "Latitude and longitude are required")
    return lat, lon


@router.get("/data")
async def climate_data(lat: float | None = None, lon: float | None = None,
                       services: Services = Depends(get_services)):
    """Past and projected climate snapshots for a point."""
    lat, lon = _require_coords(lat, lon)
    past, future = await services.climate.snapshots(lat, lon)
    return {"latitude": lat, "longitude": lon, "past": past, "future": future}


@router.get("/comparison")
async def climate_comparison(lat: float | None = None, lon: float | None = None,
                             services: Services = Depends(get_services)):
    """Past vs projected snapshots with percentage changes."""
    lat, lon = _require_coords(lat, lon)
    return await services.climate.comparison(lat, lon)


@router.get("/story")
async def climate_story(location: str = "", lat: float | None = None, lon: float | None = None,
                        services: Services = Depends(get_services)):
    """A short narrative about projected climate change at a place."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    lat, lon = _require_coords(lat, lon)
    comparison = await services.climate.comparison(lat, lon)
    narrative = await services.narrative.generate_climate_narrative(location, comparison)
    return {"narrative": narrative, "location": location, "type": "climate_story", "comparison": comparison}


@router.get("/events")
async def climate_events(location: str = "", services: Services = Depends(get_services)):
    """Bushfires, floods and droughts recorded near a place."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    try:
        events = await services.climate.events(location)
    except ProviderError as e:
        logger.error("climate events for %r failed (%s): %s", location, e.kind, e)
        raise HTTPException(502, "Failed to fetch climate events")
    return {
        "success": True,
        "events": events,
        "location": location,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/events/all")
async def all_event_sites(lat: float | None = None, lon: float | None = None):
    """Catalogue of event-prone places for the map layer, nearest first if a point is given."""
    near = (lat, lon) if lat is not None and lon is not None else None
    sites = event_sites(near)
    return {
        "success": True,
        "events": sites,
        "metadata": {
            "totalEvents": len(sites),
            "eventTypes": {
                kind: sum(1 for s in sites if s.type == kind)
                for kind in ("bushfires", "floods", "droughts")
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }
