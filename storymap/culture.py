"""Cultural Aggregator: music, art, food and culture for one place.

Five lookups run as a best-effort fan-out. Each category is always present
in the result; a category without usable data carries the "No local ..."
sentinel summary and has_results=False.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from storymap.gather import gather_settled
from storymap.models import (
    CultureItem,
    CultureMetadata,
    CultureReport,
    CulturalInsights,
    FactSheet,
    InsightCategory,
    ResultCounts,
)
from storymap.music import MusicClient
from storymap.relevance import (
    ART_CONTENT_KEYWORDS,
    ART_TITLE_KEYWORDS,
    art_type,
    extract_date,
    food_name,
    is_relevant,
    place_name,
    truncate,
)
from storymap.search import SearchClient

logger = logging.getLogger(__name__)

MAX_ART_ITEMS = 6


def no_results_summary(category: str, location: str) -> str:
    return f"No local {category} results found for {location}. Try exploring nearby regions instead."


def category(name: str, location: str, items: list[CultureItem], summary: str | None) -> InsightCategory:
    """Build one category, substituting the sentinel when there is nothing to show."""
    if not items and not summary:
        return InsightCategory(summary=no_results_summary(name, location), items=[], has_results=False)
    return InsightCategory(summary=summary or "", items=items, has_results=True)


class CultureAggregator:
    def __init__(self, search: SearchClient, music: MusicClient) -> None:
        self._search = search
        self._music = music

    async def art_by_location(self, location: str) -> list[CultureItem]:
        """Galleries, museums and artists from three searches, relevance-filtered."""
        name = place_name(location)
        outcomes = await gather_settled(
            self._search.search(f"art galleries museums {name} Australia", max_results=3),
            self._search.search(f"artists painters sculptors {name} Australia", max_results=3),
            self._search.search(f"cultural centers exhibitions {name} Australia", max_results=3),
        )
        results: list[dict[str, Any]] = []
        for outcome in outcomes:
            if outcome.ok:
                results.extend(outcome.value.get("results") or [])

        items: list[CultureItem] = []
        seen: set[str] = set()
        for r in results:
            if not is_relevant(r, name, ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS):
                continue
            key = r.get("url") or r.get("title") or ""
            if key in seen:
                continue
            seen.add(key)
            items.append(CultureItem(
                name=r.get("title") or "Art venue",
                type=art_type(r.get("title") or "", r.get("content") or ""),
                description=truncate(r.get("content") or "", 150) or "Cultural venue or artist",
                url=r.get("url"),
                location=name,
            ))
            if len(items) >= MAX_ART_ITEMS:
                break
        return items

    async def insights(self, location: str) -> CultureReport:
        music_o, art_o, events_o, landmarks_o, food_o = await gather_settled(
            self._music.artists_by_location(location),
            self.art_by_location(location),
            self._search.cultural_events(location),
            self._search.cultural_landmarks(location),
            self._search.food(location),
        )
        music: list[CultureItem] = music_o.value_or([])
        art: list[CultureItem] = art_o.value_or([])
        events: list[dict[str, Any]] = events_o.value_or([])
        landmarks: FactSheet | None = landmarks_o.value_or(None)
        food: FactSheet | None = food_o.value_or(None)

        event_items = [
            CultureItem(
                name=e.get("title") or "Cultural event",
                type="Event",
                description=e.get("content") or "Cultural event or festival",
                date=extract_date(e.get("content") or "") or "Ongoing",
                url=e.get("url"),
            )
            for e in events
        ]
        landmark_items = [
            CultureItem(
                name=s.title or "Cultural landmark",
                type="Landmark",
                description=s.content or "Cultural landmark or site",
                url=s.url or None,
            )
            for s in (landmarks.sources if landmarks else [])
        ]
        food_items = [
            CultureItem(
                name=food_name(s.title) or "Local cuisine",
                type="Local Cuisine",
                description=truncate(s.content, 100),
                url=s.url or None,
            )
            for s in (food.sources if food else [])
        ]
        culture_items = event_items + landmark_items

        insights = CulturalInsights(
            music=category("music", location, music, f"Local music scene from {location}" if music else None),
            art=category("art", location, art, f"Art and cultural venues in {location}" if art else None),
            food=category(
                "food", location, food_items,
                (food.summary or f"Local cuisine and food specialties from {location}") if food_items else None,
            ),
            culture=category(
                "culture", location, culture_items,
                ((landmarks.summary if landmarks else "") or f"Cultural heritage of {location}")
                if culture_items else None,
            ),
        )

        metadata = CultureMetadata(
            location=location,
            sources={
                "music": "Available" if music else "No Results",
                "art": "Available" if art else "No Results",
                "events": "Available" if event_items else "Limited",
                "landmarks": "Available" if landmark_items else "Limited",
                "food": "Available" if food_items else "Limited",
            },
            validation=ResultCounts(
                music_results=len(music),
                art_results=len(art),
                total_results=len(music) + len(art) + len(culture_items) + len(food_items),
            ),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info("culture for %r: %d results", location, metadata.validation.total_results)
        return CultureReport(insights=insights, metadata=metadata)
