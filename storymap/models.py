"""Core domain models.

Every value here is request-scoped; nothing is persisted. Pydantic handles
validation of provider payloads and serialisation of API responses. Fields
are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

StoryTheme = Literal["historical", "cultural", "environmental", "general"]
Availability = Literal["Available", "Limited", "No Results"]
EventType = Literal["bushfires", "floods", "droughts", "other"]

# Grounded contexts whose fact text is this short are not worth a story.
MIN_FACT_LENGTH = 50


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Location ─────────────────────────────────────────────────


class Location(ApiModel):
    """A geocoded place candidate."""

    display_name: str
    latitude: float
    longitude: float
    address: dict[str, Any] = Field(default_factory=dict)
    type: str = "location"
    importance: float = 0.0
    bounding_box: list[float] | None = None
    raw: dict[str, Any] = Field(default_factory=dict)


# ── Facts ────────────────────────────────────────────────────


class Source(ApiModel):
    title: str = ""
    content: str = ""
    url: str = ""


class FactSheet(ApiModel):
    """The answer and sources returned by a single search lookup."""

    summary: str = ""
    sources: list[Source] = Field(default_factory=list)
    query: str = ""

    def source_titles(self) -> list[str]:
        return [s.title for s in self.sources if s.title]


# ── Narrative ────────────────────────────────────────────────


class StoryContext(ApiModel):
    theme: StoryTheme
    title: str
    fact_text: str


class Narrative(ApiModel):
    title: str
    content: str
    theme: str
    location: str
    fallback: bool = False


class Story(ApiModel):
    id: int
    title: str
    content: str
    theme: StoryTheme
    location: str
    timestamp: str


class DataContext(ApiModel):
    historical: Availability = "Limited"
    cultural: Availability = "Limited"
    climate: Availability = "Limited"


class StoriesResult(ApiModel):
    location: str
    stories: list[Story]
    data_context: DataContext
    timestamp: str


class Character(ApiModel):
    character: str
    location: str
    type: str


# ── Culture ──────────────────────────────────────────────────


class CultureItem(ApiModel):
    name: str
    type: str
    description: str = ""
    date: str | None = None
    location: str | None = None
    url: str | None = None
    genres: list[str] = Field(default_factory=list)


class InsightCategory(ApiModel):
    summary: str
    items: list[CultureItem] = Field(default_factory=list)
    has_results: bool = True


class CulturalInsights(ApiModel):
    music: InsightCategory
    art: InsightCategory
    food: InsightCategory
    culture: InsightCategory


class ResultCounts(ApiModel):
    music_results: int = 0
    art_results: int = 0
    total_results: int = 0


class CultureMetadata(ApiModel):
    location: str
    sources: dict[str, Availability]
    validation: ResultCounts
    timestamp: str


class CultureReport(ApiModel):
    insights: CulturalInsights
    metadata: CultureMetadata


# ── Quiz ─────────────────────────────────────────────────────


class QuizQuestion(ApiModel):
    """One multiple-choice question: exactly four options, one correct index."""

    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer: StrictInt = Field(ge=0, le=3)
    explanation: str = ""

    @field_validator("question")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question is blank")
        return v


class Quiz(ApiModel):
    questions: list[QuizQuestion]
    location: str
    source: str


class LearningModule(ApiModel):
    title: str
    description: str = ""
    url: str | None = None


# ── Climate ──────────────────────────────────────────────────


class ClimateSnapshot(ApiModel):
    temperature: float
    rainfall: float
    wind: float
    source: str = ""
    fallback: bool = False


class ClimateChanges(ApiModel):
    temperature: float
    rainfall: float
    wind: float


class ClimateComparison(ApiModel):
    latitude: float
    longitude: float
    past: ClimateSnapshot
    future: ClimateSnapshot
    changes: ClimateChanges


class ClimateEvent(ApiModel):
    title: str
    description: str = ""
    date: str = "Unknown"
    type: EventType = "other"
    severity: str = "Medium"
    url: str | None = None


class EventSite(ApiModel):
    """A place on the climate map with a documented history of one event type."""

    id: str
    type: EventType
    location: str
    state: str
    latitude: float
    longitude: float


# ── Weather ──────────────────────────────────────────────────


class Weather(ApiModel):
    temperature: float
    feels_like: float
    humidity: float
    condition: str
    rain_chance: int
    wind_speed: float
    pressure: float
    location: str
    mock: bool = False
