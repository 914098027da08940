"""Web search/answer client (Tavily) and the fact lookups built on it.

Every lookup is one POST /search. Failures surface as ProviderError; each
caller decides whether to degrade or propagate.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storymap.errors import ProviderError, json_object, status_error, transport_error
from storymap.models import FactSheet, LearningModule, Source

logger = logging.getLogger(__name__)

PROVIDER = "Tavily"


class SearchClient:
    def __init__(self, api_key: str, base_url: str = "https://api.tavily.com", timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def search(
        self,
        query: str,
        *,
        depth: str = "basic",
        include_answer: bool = False,
        max_results: int = 5,
    ) -> dict[str, Any]:
        """Run one search and return the raw response body."""
        if not self._api_key:
            raise ProviderError(PROVIDER, "not_configured", "Tavily API key is not configured")

        url = f"{self._base_url}/search"
        body = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": depth,
            "include_answer": include_answer,
            "include_images": False,
            "include_raw_content": False,
            "max_results": max_results,
        }
        logger.debug("search query=%r depth=%s", query, depth)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers={"Content-Type": "application/json"})
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise status_error(PROVIDER, e) from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e

        return json_object(PROVIDER, resp)

    async def fact_sheet(self, query: str, *, depth: str = "advanced", max_results: int = 3) -> FactSheet:
        """Search with an answer and reduce the body to a FactSheet."""
        data = await self.search(query, depth=depth, include_answer=True, max_results=max_results)
        return FactSheet(
            summary=data.get("answer") or "",
            sources=[_source(r) for r in data.get("results") or []],
            query=query,
        )

    # ── Story grounding ──

    async def historical_facts(self, location: str) -> FactSheet:
        return await self.fact_sheet(
            f"{location} Australia history settlement founding historical events timeline"
        )

    async def cultural_facts(self, location: str) -> FactSheet:
        return await self.fact_sheet(
            f"{location} Australia Aboriginal indigenous culture traditions local customs community"
        )

    async def environmental_facts(self, location: str) -> FactSheet:
        return await self.fact_sheet(
            f"{location} Australia climate environment landscape rainfall temperature natural features"
        )

    # ── Culture ──

    async def cultural_events(self, location: str) -> list[dict[str, Any]]:
        data = await self.search(
            f"{location} Australia cultural events festivals concerts exhibitions",
            max_results=5,
        )
        return data.get("results") or []

    async def cultural_landmarks(self, location: str) -> FactSheet:
        return await self.fact_sheet(
            f"{location} Australia museums galleries cultural sites heritage landmarks attractions",
            depth="basic",
            max_results=5,
        )

    async def food(self, location: str) -> FactSheet:
        return await self.fact_sheet(
            f"{location} Australia local food restaurants cuisine specialties dishes",
            depth="basic",
            max_results=5,
        )

    # ── Indigenous knowledge ──

    async def indigenous_information(self, location: str, topic: str = "general") -> FactSheet:
        sheet = await self.fact_sheet(
            f"Aboriginal indigenous culture {location} Australia {topic} traditional knowledge",
            max_results=5,
        )
        if not sheet.summary:
            sheet.summary = (
                f"Indigenous knowledge about {location} includes traditional land management, "
                "cultural practices, and connection to country."
            )
        return sheet

    async def learning_modules(self, location: str) -> list[LearningModule]:
        data = await self.search(
            f"Aboriginal education resources {location} Australia cultural learning modules",
            max_results=5,
        )
        return [
            LearningModule(title=r.get("title") or "", description=r.get("content") or "", url=r.get("url"))
            for r in data.get("results") or []
        ]

    # ── Climate ──

    async def climate_answer(self, query: str) -> str:
        data = await self.search(query, depth="advanced", include_answer=True, max_results=3)
        return data.get("answer") or ""

    async def climate_events(self, location: str) -> list[dict[str, Any]]:
        data = await self.search(
            f"{location} Australia climate events bushfires floods droughts historical timeline",
            depth="advanced",
            max_results=10,
        )
        return data.get("results") or []


def _source(result: dict[str, Any]) -> Source:
    return Source(
        title=result.get("title") or "",
        content=result.get("content") or "",
        url=result.get("url") or "",
    )
