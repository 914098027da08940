"""Narrative Generator: creative and fact-grounded stories about a place.

Error policy, per operation:

    generate_narrative            fallback: provider failures return canned text
    generate_contextual_narrative propagate: provider failures and degenerate
                                  completions raise
    generate_stories              best-effort per context; raises only when
                                  no story survives
    generate_character            propagate
    generate_climate_narrative    fallback
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from storymap.errors import GenerationError, ProviderError
from storymap.gather import gather_settled
from storymap.llm import LLM, chat
from storymap.models import (
    MIN_FACT_LENGTH,
    Character,
    ClimateComparison,
    DataContext,
    FactSheet,
    Narrative,
    StoriesResult,
    Story,
    StoryContext,
)
from storymap.prompts import (
    CHARACTER_SYSTEM,
    CHARACTER_TEMPLATE,
    CLIMATE_NARRATIVE_TEMPLATE,
    CLIMATE_SYSTEM,
    CONTEXTUAL_TEMPLATE,
    FACTUAL_SYSTEM,
    NARRATIVE_TEMPLATE,
    STORYTELLER_SYSTEM,
    render_prompt,
)
from storymap.search import SearchClient

logger = logging.getLogger(__name__)

DEFAULT_THEME = "outback adventure"
MIN_NARRATIVE_LENGTH = 50
MIN_STORY_LENGTH = 100
MAX_CREATIVE_TITLE = 50
MAX_FACTUAL_TITLE = 80

_FIRST_SENTENCE_RE = re.compile(r"^(.+?)(?:\n|\.)")
_TITLE_PREFIX_RE = re.compile(r"^(title|story)\s*:\s*", re.IGNORECASE)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ── Title extraction ─────────────────────────────────────────


def creative_title(content: str, location: str) -> str:
    """First sentence or line, unless it is too long to be a title."""
    match = _FIRST_SENTENCE_RE.match(content.strip())
    if not match:
        return f"Tales from {location}"
    title = match.group(1).replace('"', "").strip("'#* ").strip()
    if not title or len(title) > MAX_CREATIVE_TITLE:
        return f"Stories from {location}"
    return title


def split_factual(text: str, location: str) -> tuple[str, str]:
    """Split a grounded completion into (title, body).

    The first non-empty line is the title when it is short; the body is the
    rest, or the whole text when nothing follows the title.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    first = lines[0].strip() if lines else ""
    if len(first) < MAX_FACTUAL_TITLE:
        title = _TITLE_PREFIX_RE.sub("", first.strip("#* ")).strip("#* ").strip()
        body = "\n".join(lines[1:]).strip()
        return title or f"Facts about {location}", body or text.strip()
    return f"Facts about {location}", text.strip()


def fallback_narrative(location: str, theme: str) -> Narrative:
    return Narrative(
        title=f"Echoes from {location}",
        content=(
            f"In the heart of {location}, where the red earth meets endless sky, stories "
            "whisper through the wind. This is a land shaped by time, weather, and the "
            "dreams of those who call it home. Every sunrise brings new possibilities, "
            "every sunset carries the wisdom of generations who have walked this ancient ground."
        ),
        theme=theme,
        location=location,
        fallback=True,
    )


# ── Story contexts ───────────────────────────────────────────


def _usable(sheet: FactSheet | None) -> bool:
    return sheet is not None and len(sheet.summary.strip()) > MIN_FACT_LENGTH


def _with_sources(summary: str, sheet: FactSheet, default: str) -> str:
    titles = ", ".join(sheet.source_titles()) or default
    return f"{summary}. Sources: {titles}"


def build_story_contexts(
    location: str,
    historical: FactSheet | None,
    cultural: FactSheet | None,
    climate: FactSheet | None,
) -> list[StoryContext]:
    """One grounded context per usable fact sheet.

    A "general" context is only added when nothing grounded is available,
    so a request always has at least one story to attempt.
    """
    contexts: list[StoryContext] = []
    if _usable(historical):
        contexts.append(StoryContext(
            theme="historical",
            title="Historical Background",
            fact_text=_with_sources(
                f"Historical facts about {location}: {historical.summary}", historical, "Historical records"
            ),
        ))
    if _usable(cultural):
        contexts.append(StoryContext(
            theme="cultural",
            title="Cultural Heritage",
            fact_text=_with_sources(
                f"Cultural information about {location}: {cultural.summary}", cultural, "Cultural records"
            ),
        ))
    if _usable(climate):
        contexts.append(StoryContext(
            theme="environmental",
            title="Environmental Context",
            fact_text=f"Environmental and climate information about {location}: {climate.summary}",
        ))
    if not contexts:
        contexts.append(StoryContext(
            theme="general",
            title="Regional Overview",
            fact_text=(
                f"General verified information about {location}, Australia, including its "
                "geographic location, administrative details, and regional characteristics. "
                "Focus on documented facts about the area's significance and role in the region."
            ),
        ))
    return contexts


# ── Generator ────────────────────────────────────────────────


class NarrativeGenerator:
    def __init__(self, llm: LLM, search: SearchClient) -> None:
        self._llm = llm
        self._search = search

    async def generate_narrative(self, location: str, theme: str = DEFAULT_THEME) -> Narrative:
        """A creative story; canned text when the provider fails."""
        prompt = render_prompt(NARRATIVE_TEMPLATE, {"location": location, "theme": theme})
        try:
            content = await self._llm(
                "narrative", chat(STORYTELLER_SYSTEM, prompt), max_tokens=600, temperature=0.8,
            )
        except ProviderError as e:
            logger.warning("narrative for %r fell back (%s): %s", location, e.kind, e)
            return fallback_narrative(location, theme)

        content = content.strip()
        if not content:
            logger.warning("narrative for %r was empty, using fallback", location)
            return fallback_narrative(location, theme)
        return Narrative(
            title=creative_title(content, location),
            content=content,
            theme=theme,
            location=location,
        )

    async def generate_contextual_narrative(self, location: str, theme: str, fact_text: str) -> Narrative:
        """A factual narrative restricted to fact_text. Raises on any failure."""
        prompt = render_prompt(
            CONTEXTUAL_TEMPLATE, {"location": location, "theme": theme, "facts": fact_text},
        )
        text = await self._llm(
            f"contextual:{theme}", chat(FACTUAL_SYSTEM, prompt), max_tokens=300, temperature=0.3,
        )
        text = (text or "").strip()
        if len(text) < MIN_NARRATIVE_LENGTH:
            raise GenerationError(f"Generated {theme} narrative for {location} is too short or empty")

        title, content = split_factual(text, location)
        return Narrative(title=title, content=content, theme=theme, location=location)

    async def generate_stories(self, location: str) -> StoriesResult:
        """Gather facts, build contexts, and write one grounded story per context."""
        historical, cultural, climate = await gather_settled(
            self._search.historical_facts(location),
            self._search.cultural_facts(location),
            self._search.environmental_facts(location),
        )
        sheets = {
            "historical": historical.value_or(None),
            "cultural": cultural.value_or(None),
            "climate": climate.value_or(None),
        }
        contexts = build_story_contexts(location, sheets["historical"], sheets["cultural"], sheets["climate"])
        logger.info("stories for %r: %d contexts (%s)", location, len(contexts),
                    ", ".join(c.theme for c in contexts))

        outcomes = await gather_settled(*(
            self.generate_contextual_narrative(location, ctx.theme, ctx.fact_text) for ctx in contexts
        ))

        stories: list[Story] = []
        for index, (ctx, outcome) in enumerate(zip(contexts, outcomes), start=1):
            if not outcome.ok:
                logger.warning("%s story for %r failed: %s", ctx.theme, location, outcome.error)
                continue
            narrative: Narrative = outcome.value
            if len(narrative.content) < MIN_STORY_LENGTH:
                logger.warning("%s story for %r too short, skipped", ctx.theme, location)
                continue
            stories.append(Story(
                id=index,
                title=narrative.title or ctx.title,
                content=narrative.content,
                theme=ctx.theme,
                location=location,
                timestamp=_now(),
            ))

        if not stories:
            raise GenerationError(f"Failed to generate any factual stories for {location}")

        return StoriesResult(
            location=location,
            stories=stories,
            data_context=DataContext(**{
                key: "Available" if _usable(sheet) else "Limited" for key, sheet in sheets.items()
            }),
            timestamp=_now(),
        )

    async def generate_character(self, location: str, character_type: str = "local resident") -> Character:
        prompt = render_prompt(CHARACTER_TEMPLATE, {"location": location, "character_type": character_type})
        text = await self._llm("character", chat(CHARACTER_SYSTEM, prompt), max_tokens=400, temperature=0.7)
        if not text.strip():
            raise GenerationError(f"Empty character profile for {location}")
        return Character(character=text.strip(), location=location, type=character_type)

    async def generate_climate_narrative(self, location: str, comparison: ClimateComparison) -> str:
        ctx = {"location": location, **comparison.model_dump()}
        prompt = render_prompt(CLIMATE_NARRATIVE_TEMPLATE, ctx)
        try:
            text = await self._llm("climate", chat(CLIMATE_SYSTEM, prompt), max_tokens=400, temperature=0.6)
        except ProviderError as e:
            logger.warning("climate narrative for %r fell back (%s): %s", location, e.kind, e)
            text = ""
        return text.strip() or (
            f"The people of {location} have always been resilient, adapting to the rhythms "
            "of drought and plenty. As climate patterns shift, communities are finding new "
            "ways to thrive, from water conservation innovations to sustainable farming "
            "practices that honor both tradition and necessity."
        )
