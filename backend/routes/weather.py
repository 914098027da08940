"""Current weather endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services

router = APIRouter()


@router.get("/weather")
async def current_weather(lat: float | None = None, lon: float | None = None,
                          services: Services = Depends(get_services)):
    """Current conditions; mock data when the provider is unavailable."""
    if lat is None or lon is None:
        raise HTTPException(400, "Latitude and longitude are required")
    return await services.weather.current(lat, lon)
