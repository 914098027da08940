"""FastAPI API endpoints under /api.

Endpoint groups: health, location, narrative, culture, climate, indigenous,
weather. Every handler is stateless: it pulls clients from the Services
container, calls providers, and reshapes their JSON.

Missing required input → 400 before any provider is called.
ProviderError → 502. GenerationError / QuizError → 500.
"""

from fastapi import APIRouter

from .climate import router as climate_router
from .culture import router as culture_router
from .health import router as health_router
from .indigenous import router as indigenous_router
from .location import router as location_router
from .narrative import router as narrative_router
from .weather import router as weather_router

router = APIRouter()
router.include_router(health_router)
router.include_router(location_router)
router.include_router(narrative_router)
router.include_router(culture_router)
router.include_router(climate_router)
router.include_router(indigenous_router)
router.include_router(weather_router)
