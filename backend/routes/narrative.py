"""Story, factual-stories and character endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from backend.services import Services, get_services
from storymap.errors import GenerationError, ProviderError

from .models import CharacterBody, StoriesBody, StoryBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/narrative")


@router.post("/story")
async def generate_story(body: StoryBody, services: Services = Depends(get_services)):
    """One creative story. Falls back to canned text rather than failing."""
    if not body.location.strip():
        raise HTTPException(400, "Location is required")
    narrative = await services.narrative.generate_narrative(body.location, body.theme)
    return {
        **narrative.model_dump(by_alias=True),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/stories")
async def generate_stories(body: StoriesBody, services: Services = Depends(get_services)):
    """Fact-grounded stories, one per available fact context."""
    if not body.location.strip():
        raise HTTPException(400, "Location is required")
    try:
        return await services.narrative.generate_stories(body.location)
    except GenerationError as e:
        logger.error("stories for %r failed: %s", body.location, e)
        raise HTTPException(500, "Failed to generate factual stories")


@router.post("/character")
async def generate_character(body: CharacterBody, services: Services = Depends(get_services)):
    """A character profile of a local resident."""
    if not body.location.strip():
        raise HTTPException(400, "Location is required")
    try:
        return await services.narrative.generate_character(body.location, body.character_type)
    except ProviderError as e:
        logger.error("character for %r failed (%s): %s", body.location, e.kind, e)
        raise HTTPException(502, "Failed to generate character")
    except GenerationError as e:
        logger.error("character for %r failed: %s", body.location, e)
        raise HTTPException(500, "Failed to generate character")
