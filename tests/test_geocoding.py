"""Tests for the Nominatim geocoder."""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from storymap.errors import ProviderError
from storymap.geocoding import NominatimGeocoder, distance_km, to_location
from tests.stubs import html_response, mock_response

BROKEN_HILL = {
    "display_name": "Broken Hill, New South Wales, Australia",
    "lat": "-31.9539",
    "lon": "141.4539",
    "type": "city",
    "importance": 0.6,
    "boundingbox": ["-32.0", "-31.9", "141.4", "141.5"],
    "address": {"city": "Broken Hill", "state": "New South Wales"},
}


@pytest.fixture
def geocoder() -> NominatimGeocoder:
    return NominatimGeocoder(base_url="https://nominatim.test/", user_agent="StoryMapTest/1.0")


async def test_search_params_and_user_agent(geocoder: NominatimGeocoder) -> None:
    mock_get = AsyncMock(return_value=mock_response([BROKEN_HILL]))
    with patch("httpx.AsyncClient.get", mock_get):
        locations = await geocoder.search("Broken Hill")
    assert mock_get.call_args.args[0] == "https://nominatim.test/search"
    params = mock_get.call_args.kwargs["params"]
    assert params["q"] == "Broken Hill"
    assert params["countrycodes"] == "au"
    assert mock_get.call_args.kwargs["headers"]["User-Agent"] == "StoryMapTest/1.0"
    assert len(locations) == 1
    assert locations[0].latitude == pytest.approx(-31.9539)
    assert locations[0].bounding_box == [-32.0, -31.9, 141.4, 141.5]


async def test_search_skips_results_without_coordinates(geocoder: NominatimGeocoder) -> None:
    body = [{"display_name": "Nowhere"}, BROKEN_HILL]
    with patch("httpx.AsyncClient.get", AsyncMock(return_value=mock_response(body))):
        locations = await geocoder.search("x")
    assert [loc.display_name for loc in locations] == [BROKEN_HILL["display_name"]]


async def test_search_empty(geocoder: NominatimGeocoder) -> None:
    with patch("httpx.AsyncClient.get", AsyncMock(return_value=mock_response([]))):
        assert await geocoder.search("zzzz") == []


async def test_reverse(geocoder: NominatimGeocoder) -> None:
    mock_get = AsyncMock(return_value=mock_response(BROKEN_HILL))
    with patch("httpx.AsyncClient.get", mock_get):
        location = await geocoder.reverse(-31.95, 141.45)
    assert mock_get.call_args.args[0] == "https://nominatim.test/reverse"
    assert location.address["city"] == "Broken Hill"


async def test_reverse_error_body(geocoder: NominatimGeocoder) -> None:
    with patch("httpx.AsyncClient.get", AsyncMock(return_value=mock_response({"error": "Unable to geocode"}))):
        with pytest.raises(ProviderError) as exc:
            await geocoder.reverse(0, 0)
    assert exc.value.kind == "bad_response"


async def test_connect_error(geocoder: NominatimGeocoder) -> None:
    with patch("httpx.AsyncClient.get", AsyncMock(side_effect=httpx.ConnectError("refused"))):
        with pytest.raises(ProviderError) as exc:
            await geocoder.search("x")
    assert exc.value.kind == "transport"
    assert exc.value.provider == "Nominatim"


def test_to_location_bad_coordinates():
    assert to_location({"lat": "north", "lon": "1"}) is None


def test_distance_km():
    assert distance_km(-33.8688, 151.2093, -33.8688, 151.2093) == 0
    # Sydney to Melbourne, roughly 714 km
    assert distance_km(-33.8688, 151.2093, -37.8136, 144.9631) == pytest.approx(714, abs=10)


async def test_non_json_body(geocoder: NominatimGeocoder) -> None:
    with patch("httpx.AsyncClient.get", AsyncMock(return_value=html_response())):
        with pytest.raises(ProviderError) as exc:
            await geocoder.search("Broken Hill")
    assert exc.value.kind == "bad_response"
