"""Quiz Generator: multiple-choice questions as validated JSON.

The model is asked for a bare JSON array. Fences are stripped, the array is
parsed, and every element is validated against QuizQuestion; invalid
elements are dropped. A payload that does not parse, or leaves no valid
question, raises QuizError. Nothing is guessed from a partial parse.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from storymap.errors import QuizError
from storymap.llm import LLM, chat
from storymap.models import FactSheet, Quiz, QuizQuestion
from storymap.prompts import GENERIC_QUIZ_TEMPLATE, GROUNDED_QUIZ_TEMPLATE, QUIZ_SYSTEM, render_prompt

logger = logging.getLogger(__name__)

GROUNDED_COUNT = 8
GENERIC_COUNT = 5
MAX_COUNT = 20


def strip_code_fences(text: str) -> str:
    """Return the body of the first ``` fenced block, or the text itself."""
    cleaned = text.strip()
    if "```" not in cleaned:
        return cleaned
    after = cleaned.split("```", 1)[1]
    first_line, _, rest = after.partition("\n")
    # Drop a language tag such as ```json
    if first_line.strip() and not first_line.strip().startswith(("[", "{")):
        after = rest
    return after.split("```", 1)[0].strip()


def parse_questions(text: str) -> list[QuizQuestion]:
    """Parse a raw completion into the valid questions it contains.

    Raises QuizError when the payload is not a JSON array or holds no
    valid question.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("quiz payload is not valid JSON (%s); raw content: %r", e, text)
        raise QuizError("Failed to generate valid quiz format") from e
    if not isinstance(data, list):
        logger.error("quiz payload is not a JSON array; raw content: %r", text)
        raise QuizError("Failed to generate valid quiz format")

    questions: list[QuizQuestion] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("quiz element %d is not an object, dropped", i)
            continue
        try:
            questions.append(QuizQuestion.model_validate(item))
        except ValidationError as e:
            logger.warning("quiz element %d dropped: %d validation errors", i, e.error_count())

    if not questions:
        raise QuizError("No valid questions generated")
    return questions


class QuizGenerator:
    def __init__(self, llm: LLM) -> None:
        self._llm = llm

    async def _ask(self, stage: str, prompt: str, temperature: float, count: int) -> list[QuizQuestion]:
        text = await self._llm(stage, chat(QUIZ_SYSTEM, prompt), max_tokens=1200, temperature=temperature)
        questions = parse_questions(text)
        if len(questions) < count:
            logger.info("%s: %d of %d requested questions were valid", stage, len(questions), count)
        return questions[:count]

    async def generate_location_quiz(self, location: str, facts: FactSheet, count: int = GROUNDED_COUNT) -> Quiz:
        """Questions grounded in facts looked up for the location."""
        count = _clamp(count)
        prompt = render_prompt(GROUNDED_QUIZ_TEMPLATE, {
            "location": location,
            "count": count,
            "information": facts.summary or "General Indigenous Australian culture",
            "sources": facts.source_titles(),
        })
        questions = await self._ask("quiz:grounded", prompt, 0.2, count)
        return Quiz(questions=questions, location=location, source="AI-generated based on verified cultural data")

    async def generate_quiz(self, location: str, difficulty: str = "medium", count: int = GENERIC_COUNT) -> Quiz:
        count = _clamp(count)
        prompt = render_prompt(GENERIC_QUIZ_TEMPLATE, {
            "location": location,
            "difficulty": difficulty,
            "count": count,
        })
        questions = await self._ask("quiz:generic", prompt, 0.3, count)
        return Quiz(questions=questions, location=location, source="AI-generated")


def _clamp(count: int) -> int:
    return max(1, min(count, MAX_COUNT))
