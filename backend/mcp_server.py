"""FastMCP server exposing place lookups as MCP tools.

Tools:
  - search_locations(query)         geocode a free-text Australian place
  - cultural_insights(location)     music, art, food and culture for a place
  - climate_comparison(lat, lon)    past vs projected climate with deltas

The tools run against a Services container replaced via set_services() for
tests, or built from the environment when run as __main__.

Usage:
    uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from backend.services import Services, build_services
from storymap.config import Settings

mcp = FastMCP("storymap")

_services: Services | None = None


def set_services(services: Services) -> None:
    """Replace the active service container (used in tests)."""
    global _services
    _services = services


def get_services() -> Services:
    global _services
    if _services is None:
        _services = build_services(Settings.from_env())
    return _services


@mcp.tool()
async def search_locations(query: str) -> list[dict]:
    """Find Australian places matching a free-text query."""
    locations = await get_services().geocoder.search(query)
    return [loc.model_dump(by_alias=True, exclude={"raw"}) for loc in locations]


@mcp.tool()
async def cultural_insights(location: str) -> dict:
    """Music, art, food and culture insights for a place."""
    report = await get_services().culture.insights(location)
    return report.model_dump(by_alias=True)


@mcp.tool()
async def climate_comparison(lat: float, lon: float) -> dict:
    """Historical vs projected temperature, rainfall and wind, with % changes."""
    comparison = await get_services().climate.comparison(lat, lon)
    return comparison.model_dump(by_alias=True)


if __name__ == "__main__":
    mcp.run()
