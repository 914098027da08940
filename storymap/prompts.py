"""Handlebars prompt templates for every LLM call.

Text variables use triple braces so place names and fact text reach the
model unescaped.
"""

from collections.abc import Callable
from typing import Any

import pybars


_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def _helper_take(this, options, items, count):
    """{{#take array N}}...{{/take}} iterates over the first N items."""
    result = []
    for item in list(items or [])[:int(count)]:
        result.extend(options["fn"](item))
    return result


_HELPERS: dict[str, Callable] = {
    "take": _helper_take,
}


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return "".join(compiled(context, helpers=_HELPERS))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


# ── System messages ──────────────────────────────────────────

STORYTELLER_SYSTEM = (
    "You are a master storyteller specializing in Australian outback narratives. "
    "Your stories celebrate the resilience, culture, and natural beauty of rural "
    "Australia while being respectful of Indigenous heritage and local communities."
)

FACTUAL_SYSTEM = (
    "You are a factual storyteller who creates engaging narratives based strictly "
    "on verified information. You never fabricate details, characters, or events. "
    "You present real facts in a compelling narrative format."
)

CHARACTER_SYSTEM = (
    "You create authentic, respectful character profiles of rural Australians. "
    "Your characters are diverse, realistic, and reflect the true spirit of outback "
    "communities."
)

CLIMATE_SYSTEM = (
    "You create compelling, balanced narratives about climate change that inform "
    "and inspire action while respecting local communities and their resilience."
)

QUIZ_SYSTEM = (
    "You are an educational content creator specializing in respectful Indigenous "
    "Australian cultural education. You create factual quiz questions, avoid sacred "
    "or sensitive content, and reply with JSON only."
)

# ── User prompts ─────────────────────────────────────────────

NARRATIVE_TEMPLATE = """Create an engaging, culturally respectful short story set in {{{location}}}, Australia.
Theme: {{{theme}}}

Requirements:
- 200-300 words maximum
- Focus on the unique landscape, culture, and atmosphere of rural Australia
- Include authentic details about the region's history, industry, or natural features
- Respectful portrayal of Indigenous culture if relevant
- Emotional connection to the land and community
- Vivid, sensory descriptions that transport the reader

Style: Warm, human storytelling that captures the spirit of the Australian outback."""

CONTEXTUAL_TEMPLATE = """Based on the following verified information about {{{location}}}, Australia, create a factual, concise {{{theme}}} narrative:

{{{facts}}}

Requirements:
- Use ONLY the provided factual information
- Write 2-3 paragraphs (150-200 words maximum)
- Focus on real historical events, verified cultural practices, or documented facts
- Avoid fictional characters or imagined scenarios
- Present information in an engaging but factual storytelling format
- If insufficient factual data is provided, focus on general verified information about the region

Put a short title on the first line, then the narrative."""

CHARACTER_TEMPLATE = """Create a detailed, authentic character profile for a {{{character_type}}} from {{{location}}}, Australia.

Include:
- Name and age
- Background and family history
- Connection to the land and community
- Daily life and challenges
- Dreams and aspirations
- Unique personality traits
- How the landscape has shaped them

Make them feel real and relatable, with depth and authenticity."""

CLIMATE_NARRATIVE_TEMPLATE = """Create a compelling narrative about climate change impacts in {{{location}}}, Australia.

Climate data:
- Temperature: {{past.temperature}}°C historically, {{future.temperature}}°C projected ({{changes.temperature}}% change)
- Rainfall: {{past.rainfall}}mm historically, {{future.rainfall}}mm projected ({{changes.rainfall}}% change)
- Wind: {{past.wind}}km/h historically, {{future.wind}}km/h projected ({{changes.wind}}% change)

Requirements:
- 150-200 words
- Focus on human stories and community resilience
- Include practical adaptation strategies
- Balance concern with hope and action
- Mention local environmental changes"""

_QUIZ_SCHEMA = """Return ONLY a JSON array, no other text, in exactly this format:
[
  {
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0,
    "explanation": "Brief explanation of the correct answer"
  }
]
"correctAnswer" is the zero-based index of the correct option."""

GROUNDED_QUIZ_TEMPLATE = """Based on the following verified cultural and historical information about {{{location}}}, Australia, create {{count}} educational quiz questions about Indigenous culture.

Cultural Information:
{{{information}}}

Sources:
{{#if sources}}{{#take sources 10}}- {{{this}}}
{{/take}}{{else}}- Various cultural sources
{{/if}}
Requirements:
- Create exactly {{count}} multiple-choice questions with 4 options each
- Base questions ONLY on the provided factual information
- Focus on publicly available cultural knowledge (tools, art, practices, history)
- Avoid sacred or sensitive cultural content
- Include one correct answer and 3 plausible distractors
- Provide brief explanations for correct answers
- Questions should be respectful and educational

""" + _QUIZ_SCHEMA

GENERIC_QUIZ_TEMPLATE = """Create {{count}} respectful, educational multiple choice questions about Aboriginal and Torres Strait Islander culture, with focus on the {{{location}}} region if relevant.

Difficulty: {{{difficulty}}}

Requirements:
- Culturally appropriate and respectful content
- Focus on publicly available cultural knowledge
- Avoid sacred or sensitive information
- Include topics like: traditional tools, art forms, connection to country, cultural practices
- Each question must have exactly 4 options with one correct answer

""" + _QUIZ_SCHEMA
