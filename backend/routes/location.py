"""Location search and reverse-geocoding endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services
from storymap.errors import ProviderError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/location")


@router.get("/search")
async def search_locations(query: str = "", services: Services = Depends(get_services)):
    """Australian place candidates for a free-text query."""
    if not query.strip():
        raise HTTPException(400, "Query parameter is required")
    try:
        return await services.geocoder.search(query)
    except ProviderError as e:
        logger.error("location search failed (%s): %s", e.kind, e)
        raise HTTPException(502, "Failed to search locations")


@router.get("/details/{lat}/{lon}")
async def location_details(lat: float, lon: float, services: Services = Depends(get_services)):
    """Reverse-geocode a map click."""
    try:
        return await services.geocoder.reverse(lat, lon)
    except ProviderError as e:
        logger.error("reverse geocode failed (%s): %s", e.kind, e)
        raise HTTPException(502, "Failed to get location details")
