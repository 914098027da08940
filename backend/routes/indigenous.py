"""Indigenous knowledge, learning modules and quiz endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services
from storymap.errors import ProviderError, QuizError
from storymap.quiz import GROUNDED_COUNT

from .models import QuizBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/indigenous")


@router.get("/knowledge")
async def indigenous_knowledge(location: str = "", topic: str = "general",
                               services: Services = Depends(get_services)):
    """Search-grounded summary of Indigenous culture for a place."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    try:
        return await services.search.indigenous_information(location, topic)
    except ProviderError as e:
        logger.error("indigenous knowledge for %r failed (%s): %s", location, e.kind, e)
        raise HTTPException(502, "Failed to get indigenous knowledge")


@router.get("/modules")
async def learning_modules(location: str = "", services: Services = Depends(get_services)):
    """Cultural learning resources for a place."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    try:
        return await services.search.learning_modules(location)
    except ProviderError as e:
        logger.error("learning modules for %r failed (%s): %s", location, e.kind, e)
        raise HTTPException(502, "Failed to get learning modules")


@router.get("/quiz")
async def location_quiz(location: str = "", count: int = GROUNDED_COUNT,
                        services: Services = Depends(get_services)):
    """Quiz grounded in facts looked up for the location."""
    if not location.strip():
        raise HTTPException(400, "Location parameter is required")
    try:
        facts = await services.search.indigenous_information(location, "culture history traditions")
        return await services.quiz.generate_location_quiz(location, facts, count)
    except (ProviderError, QuizError) as e:
        logger.error("location quiz for %r failed: %s", location, e)
        raise HTTPException(500, "Failed to generate location-specific quiz")


@router.post("/quiz")
async def generic_quiz(body: QuizBody, services: Services = Depends(get_services)):
    """Quiz from general knowledge, without a fact lookup."""
    if not body.location.strip():
        raise HTTPException(400, "Location is required")
    try:
        return await services.quiz.generate_quiz(body.location, body.difficulty, body.question_count)
    except (ProviderError, QuizError) as e:
        logger.error("quiz for %r failed: %s", body.location, e)
        raise HTTPException(500, "Failed to generate quiz")
