"""Pydantic request bodies for API endpoints.

Required fields default to empty so handlers can answer a missing value with
a one-line 400 instead of a validation dump.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoryBody(Body):
    location: str = ""
    theme: str = "outback adventure"


class StoriesBody(Body):
    location: str = ""


class CharacterBody(Body):
    location: str = ""
    character_type: str = "local resident"


class QuizBody(Body):
    location: str = ""
    difficulty: str = "medium"
    question_count: int = 5
