"""Tests for the relevance heuristics and text helpers."""

from storymap.relevance import (
    ART_CONTENT_KEYWORDS,
    ART_TITLE_KEYWORDS,
    art_type,
    classify_event_type,
    extract_date,
    extract_year,
    food_name,
    is_local_artist,
    is_relevant,
    place_name,
    truncate,
)


# ── is_relevant ──────────────────────────────────────────────


def test_place_and_topic_in_title():
    item = {"title": "Broken Hill Regional Art Gallery", "content": "", "url": ""}
    assert is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_place_only_in_url_without_spaces():
    item = {"title": "Pro Hart Gallery", "content": "Paintings", "url": "https://visitbrokenhill.com.au/pro-hart"}
    assert is_relevant(item, "Broken Hill, NSW", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_off_topic_rejected():
    item = {"title": "Broken Hill weather forecast", "content": "Sunny all week", "url": ""}
    assert not is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_other_place_rejected():
    item = {"title": "Art Gallery of NSW", "content": "Sydney exhibition", "url": "https://artgallery.nsw.gov.au"}
    assert not is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_case_insensitive():
    item = {"title": "BROKEN HILL MUSEUM", "content": "", "url": ""}
    assert is_relevant(item, "broken hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_missing_fields_tolerated():
    assert not is_relevant({}, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_empty_location_never_relevant():
    assert not is_relevant({"title": "art gallery"}, "", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_art_substring_in_content_rejected():
    item = {
        "title": "Broken Hill weather forecast",
        "content": "Broken Hill is part of the Far West region; expect a hot start to the week.",
        "url": "",
    }
    assert not is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_title_keyword_only_counts_in_title():
    item = {"title": "Broken Hill visitor guide", "content": "Visit the gallery and museum.", "url": ""}
    assert not is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_content_keyword_counts_in_content():
    item = {"title": "Broken Hill this month", "content": "A new exhibition of outback paintings opens.", "url": ""}
    assert is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


def test_plural_title_keyword():
    item = {"title": "Broken Hill Arts Trail", "content": "", "url": ""}
    assert is_relevant(item, "Broken Hill", ART_TITLE_KEYWORDS, ART_CONTENT_KEYWORDS)


# ── is_local_artist ──────────────────────────────────────────


def test_artist_by_country_code():
    artist = {"area": {"name": "Somewhere", "iso-3166-1-codes": ["AU"]}}
    assert is_local_artist(artist, "Broken Hill")


def test_artist_by_begin_area_name():
    artist = {"begin-area": {"name": "Broken Hill"}}
    assert is_local_artist(artist, "Broken Hill, NSW")


def test_foreign_artist_rejected():
    artist = {"area": {"name": "Manchester", "iso-3166-1-codes": ["GB"]}}
    assert not is_local_artist(artist, "Broken Hill")


# ── helpers ──────────────────────────────────────────────────


def test_place_name():
    assert place_name("Broken Hill, New South Wales, Australia") == "Broken Hill"


def test_art_type():
    assert art_type("Regional Gallery", "") == "Gallery"
    assert art_type("Silver City", "a museum of mining") == "Museum"
    assert art_type("Pro Hart", "famous painter") == "Artist"
    assert art_type("Something", "else") == "Art Venue"


def test_food_name_trims_site_suffix():
    assert food_name("Silly Goat Cafe - TripAdvisor") == "Silly Goat Cafe"
    assert food_name("Town Hall | Council") == "Town Hall | Council"


def test_extract_date_and_year():
    assert extract_date("12/03/2024: festival in town") == "12/03/2024"
    assert extract_date("") is None
    assert extract_year("Floods in 1974 and again in 2022") == "2022"
    assert extract_year("no years here") is None


def test_classify_event_type():
    assert classify_event_type("Black Summer bushfire") == "bushfires"
    assert classify_event_type("Flooding in Lismore") == "floods"
    assert classify_event_type("Millennium drought") == "droughts"
    assert classify_event_type("Cyclone Tracy") == "other"


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a" * 20, 10) == "a" * 10 + "..."
