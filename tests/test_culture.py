"""Tests for the Cultural Aggregator."""

from unittest.mock import AsyncMock

from storymap.culture import CultureAggregator, category, no_results_summary
from storymap.errors import ProviderError
from storymap.models import CultureItem, FactSheet, Source
from storymap.music import MusicClient
from storymap.search import SearchClient

DOWN = ProviderError("Tavily", "transport", "Cannot connect to Tavily")

GALLERY = {
    "title": "Broken Hill Regional Art Gallery",
    "content": "The oldest regional gallery in New South Wales.",
    "url": "https://bhartgallery.test",
}
EVENT = {
    "title": "Broken Heel Festival",
    "content": "8/9/2023 drag festival in the desert",
    "url": "https://brokenheel.test",
}


def _aggregator(music=None, art=None, events=None, landmarks=None, food=None):
    search = AsyncMock(spec=SearchClient)
    search.search.return_value = art if art is not None else {"results": []}
    search.cultural_events.return_value = events if events is not None else []
    search.cultural_landmarks.return_value = landmarks or FactSheet()
    search.food.return_value = food or FactSheet()
    music_client = AsyncMock(spec=MusicClient)
    music_client.artists_by_location.return_value = music or []
    return CultureAggregator(search, music_client), search, music_client


def test_category_sentinel():
    cat = category("art", "Tibooburra", [], None)
    assert cat.has_results is False
    assert cat.summary == no_results_summary("art", "Tibooburra")
    assert cat.summary.startswith("No local art results found for Tibooburra")


def test_category_with_items():
    item = CultureItem(name="x", type="Gallery")
    cat = category("art", "Broken Hill", [item], "Art here")
    assert cat.has_results is True
    assert cat.items == [item]


async def test_art_filtered_and_deduplicated():
    off_topic = {"title": "Sydney Opera House", "content": "concerts", "url": "https://soh.test"}
    aggregator, search, _ = _aggregator(art={"results": [GALLERY, GALLERY, off_topic]})
    items = await aggregator.art_by_location("Broken Hill, NSW")
    assert [i.name for i in items] == ["Broken Hill Regional Art Gallery"]
    assert items[0].type == "Gallery"
    assert search.search.await_count == 3


async def test_art_survives_one_failed_search():
    aggregator, search, _ = _aggregator()
    search.search.side_effect = [DOWN, {"results": [GALLERY]}, {"results": []}]
    items = await aggregator.art_by_location("Broken Hill")
    assert len(items) == 1


async def test_insights_all_categories_present_when_everything_fails():
    aggregator, search, music = _aggregator()
    music.artists_by_location.side_effect = DOWN
    search.search.side_effect = DOWN
    search.cultural_events.side_effect = DOWN
    search.cultural_landmarks.side_effect = DOWN
    search.food.side_effect = DOWN

    report = await aggregator.insights("Tibooburra")
    for name in ("music", "art", "food", "culture"):
        cat = getattr(report.insights, name)
        assert cat.has_results is False
        assert cat.summary.startswith(f"No local {name} results found for Tibooburra")
    assert report.metadata.sources == {
        "music": "No Results",
        "art": "No Results",
        "events": "Limited",
        "landmarks": "Limited",
        "food": "Limited",
    }
    assert report.metadata.validation.total_results == 0


async def test_insights_with_data():
    artist = CultureItem(name="The Silver City Band", type="Group")
    landmarks = FactSheet(summary="Heritage streetscape.", sources=[Source(title="Trades Hall", content="Union hall")])
    food = FactSheet(summary="Outback fare.", sources=[Source(title="Silly Goat Cafe - Reviews", content="Coffee")])
    aggregator, _, _ = _aggregator(
        music=[artist],
        art={"results": [GALLERY]},
        events=[EVENT],
        landmarks=landmarks,
        food=food,
    )

    report = await aggregator.insights("Broken Hill")
    assert report.insights.music.items == [artist]
    assert report.insights.art.has_results is True
    assert report.insights.food.summary == "Outback fare."
    assert report.insights.food.items[0].name == "Silly Goat Cafe"
    culture = report.insights.culture
    assert culture.summary == "Heritage streetscape."
    assert [i.type for i in culture.items] == ["Event", "Landmark"]
    assert culture.items[0].date == "8/9/2023"
    assert report.metadata.sources["music"] == "Available"
    assert report.metadata.validation.total_results == 5


async def test_insights_dump_is_camel_case():
    aggregator, _, _ = _aggregator()
    dumped = (await aggregator.insights("Tibooburra")).model_dump(by_alias=True)
    assert set(dumped["insights"]) == {"music", "art", "food", "culture"}
    assert dumped["insights"]["music"]["hasResults"] is False
    assert set(dumped["metadata"]["validation"]) == {"musicResults", "artResults", "totalResults"}
