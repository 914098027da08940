"""Service container: every provider client and generator, built from Settings once."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from storymap.climate import ClimateAggregator
from storymap.config import Settings
from storymap.culture import CultureAggregator
from storymap.geocoding import NominatimGeocoder
from storymap.llm import LLM, GroqLLM
from storymap.music import MusicClient
from storymap.narrative import NarrativeGenerator
from storymap.quiz import QuizGenerator
from storymap.search import SearchClient
from storymap.weather import WeatherClient


@dataclass
class Services:
    geocoder: NominatimGeocoder
    search: SearchClient
    weather: WeatherClient
    narrative: NarrativeGenerator
    quiz: QuizGenerator
    culture: CultureAggregator
    climate: ClimateAggregator


def build_services(settings: Settings, llm: LLM | None = None) -> Services:
    """Wire clients from settings. `llm` overrides the Groq client (tests)."""
    if llm is None:
        llm = GroqLLM(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            preferred=settings.groq_models,
            timeout=settings.llm_timeout,
        )
    search = SearchClient(settings.tavily_api_key, settings.tavily_base_url, settings.http_timeout)
    music = MusicClient(settings.musicbrainz_base_url, settings.user_agent, settings.http_timeout)
    return Services(
        geocoder=NominatimGeocoder(settings.nominatim_base_url, settings.user_agent, settings.http_timeout),
        search=search,
        weather=WeatherClient(settings.openweather_api_key, settings.openweather_base_url, settings.http_timeout),
        narrative=NarrativeGenerator(llm, search),
        quiz=QuizGenerator(llm),
        culture=CultureAggregator(search, music),
        climate=ClimateAggregator(search),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency: the container stored on app.state."""
    return request.app.state.services
