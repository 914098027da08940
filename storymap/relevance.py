"""Heuristic relevance filters and text helpers for search results.

These decide whether a search hit is really about the requested place and
topic. They prefer dropping a good result over keeping an off-topic one.
All functions are pure so thresholds can be tuned and tested offline.
"""

import re
from typing import Any

# Title keywords are matched against the title only, content keywords against the content only.
ART_TITLE_KEYWORDS = ("gallery", "galleries", "museum", "artist", "art")
ART_CONTENT_KEYWORDS = ("exhibition", "painting")
FOOD_KEYWORDS = ("restaurant", "cafe", "food", "cuisine", "dish", "recipe")

_DATE_RE = re.compile(r"(\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4})|(\d{4})|([A-Za-z]+ \d{1,2})")
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


def place_name(location: str) -> str:
    """First comma-separated part of a location string.

    "Broken Hill, New South Wales, Australia" → "Broken Hill"
    """
    return location.split(",")[0].strip()


def _mentions(text: str, keywords: tuple[str, ...] | list[str]) -> bool:
    """Whole-word match, allowing a plural "s" ("art" matches "arts", not "part")."""
    if not keywords or not text:
        return False
    pattern = r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")s?\b"
    return re.search(pattern, text) is not None


def is_relevant(
    item: dict[str, Any],
    location: str,
    title_keywords: tuple[str, ...] | list[str],
    content_keywords: tuple[str, ...] | list[str] = (),
) -> bool:
    """True when a search hit mentions the place and is on topic.

    The place must appear in the title, the content, or the URL (spaces
    removed). The topic must show as a whole word: a title keyword in the
    title, or a content keyword in the content.
    """
    name = place_name(location).lower()
    if not name:
        return False
    title = (item.get("title") or "").lower()
    content = (item.get("content") or "").lower()
    url = (item.get("url") or "").lower()

    on_topic = _mentions(title, title_keywords) or _mentions(content, content_keywords)
    in_place = name in title or name in content or name.replace(" ", "") in url
    return on_topic and in_place


def is_local_artist(artist: dict[str, Any], location: str) -> bool:
    """True when a MusicBrainz artist is Australian or from the named place."""
    name = place_name(location).lower()
    area = artist.get("area") or {}
    begin_area = artist.get("begin-area") or {}
    area_name = (area.get("name") or begin_area.get("name") or "").lower()
    codes = area.get("iso-3166-1-codes") or begin_area.get("iso-3166-1-codes") or []
    country = codes[0] if codes else None
    return country == "AU" or "australia" in area_name or (bool(name) and name in area_name)


def art_type(title: str, content: str) -> str:
    text = f"{title} {content}".lower()
    if "gallery" in text:
        return "Gallery"
    if "museum" in text:
        return "Museum"
    if "artist" in text or "painter" in text:
        return "Artist"
    if "sculpture" in text:
        return "Sculpture"
    if "exhibition" in text:
        return "Exhibition"
    if "cultural center" in text or "cultural centre" in text:
        return "Cultural Center"
    return "Art Venue"


def food_name(title: str) -> str:
    """Trim site suffixes (" - Site", " | Site") from food-related titles."""
    lowered = title.lower()
    if any(k in lowered for k in FOOD_KEYWORDS):
        for sep in (" - ", " | "):
            if sep in title:
                return title.split(sep)[0].strip()
    return title


def extract_date(content: str) -> str | None:
    match = _DATE_RE.search(content or "")
    return match.group(0) if match else None


def extract_year(content: str) -> str | None:
    """Latest-mentioned four-digit year (1900-2099), or None."""
    years = _YEAR_RE.findall(content or "")
    return years[-1] if years else None


def classify_event_type(text: str) -> str:
    lowered = text.lower()
    if "bushfire" in lowered or "fire" in lowered:
        return "bushfires"
    if "flood" in lowered:
        return "floods"
    if "drought" in lowered or "dry" in lowered:
        return "droughts"
    return "other"


def truncate(text: str, limit: int) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."
