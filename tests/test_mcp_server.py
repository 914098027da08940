"""MCP tool tests using the FastMCP in-process client."""

import json

import pytest
from unittest.mock import AsyncMock

import backend.mcp_server as mcp_server
from backend.services import build_services
from mcp.shared.memory import create_connected_server_and_client_session
from storymap.climate import ClimateAggregator
from storymap.geocoding import NominatimGeocoder
from storymap.models import Location
from storymap.search import SearchClient
from tests.stubs import StubLLM


@pytest.fixture(autouse=True)
def services(settings):
    services = build_services(settings, llm=StubLLM())
    services.geocoder = AsyncMock(spec=NominatimGeocoder)
    search = AsyncMock(spec=SearchClient)
    search.climate_answer.side_effect = [
        "Historically 20°C, 500mm rain, 10 km/h winds.",
        "By 2070, 22°C, 400 mm, 12 km/h.",
    ]
    services.climate = ClimateAggregator(search)
    mcp_server.set_services(services)
    return services


async def test_search_locations(services):
    services.geocoder.search.return_value = [
        Location(display_name="Uluru, Northern Territory, Australia", latitude=-25.34, longitude=131.03,
                 raw={"osm_id": 1}),
    ]
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        result = await client.call_tool("search_locations", {"query": "Uluru"})
    assert not result.isError
    first = json.loads(result.content[0].text)
    assert first["displayName"] == "Uluru, Northern Territory, Australia"
    assert "raw" not in first


async def test_climate_comparison():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        result = await client.call_tool("climate_comparison", {"lat": -31.9, "lon": 141.4})
    assert not result.isError
    data = json.loads(result.content[0].text)
    assert data["changes"] == {"temperature": 10.0, "rainfall": -20.0, "wind": 20.0}
