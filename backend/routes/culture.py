"""Cultural insights endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services

router = APIRouter(prefix="/culture")


@router.get("/insights")
async def cultural_insights(location: str = "", services: Services = Depends(get_services)):
    """Music, art, food and culture for a place, with per-source availability."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    return await services.culture.insights(location)
