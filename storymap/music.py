"""MusicBrainz artist lookup by area."""

from __future__ import annotations

import logging

import httpx

from storymap.errors import json_object, status_error, transport_error
from storymap.models import CultureItem
from storymap.relevance import is_local_artist, place_name

logger = logging.getLogger(__name__)

PROVIDER = "MusicBrainz"
MAX_ARTISTS = 5


class MusicClient:
    def __init__(
        self,
        base_url: str = "https://musicbrainz.org/ws/2",
        user_agent: str = "StoryMap.ai/1.0",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout

    async def artists_by_location(self, location: str) -> list[CultureItem]:
        """Artists whose area or begin-area matches the place.

        Returns an empty list when nothing local survives the relevance filter.
        """
        name = place_name(location)
        params = {
            "query": f'area:"{name}" OR begin-area:"{name}"',
            "fmt": "json",
            "limit": 10,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(
                    f"{self._base_url}/artist",
                    params=params,
                    headers={"User-Agent": self._user_agent},
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise status_error(PROVIDER, e) from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e

        artists = json_object(PROVIDER, resp).get("artists") or []
        local = [a for a in artists if is_local_artist(a, location)]
        logger.debug("musicbrainz area=%r artists=%d local=%d", name, len(artists), len(local))
        return [_artist_item(a, name) for a in local[:MAX_ARTISTS]]


def _artist_item(artist: dict, fallback_area: str) -> CultureItem:
    kind = artist.get("type") or "Artist"
    area = (artist.get("area") or {}).get("name") or (artist.get("begin-area") or {}).get("name") or fallback_area
    return CultureItem(
        name=artist.get("name") or "Unknown artist",
        type=kind,
        description=f"{artist.get('type') or 'Musical artist'} from {area}",
        location=area,
        url=f"https://musicbrainz.org/artist/{artist['id']}" if artist.get("id") else None,
        genres=[t["name"] for t in artist.get("tags") or [] if t.get("name")][:3],
    )
