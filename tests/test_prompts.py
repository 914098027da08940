"""Tests for Handlebars prompt rendering and the prompt templates."""

import pytest

from storymap.prompts import (
    CONTEXTUAL_TEMPLATE,
    GROUNDED_QUIZ_TEMPLATE,
    NARRATIVE_TEMPLATE,
    PromptError,
    render_prompt,
)


def test_render_simple_variable():
    assert render_prompt("Hello {{name}}!", {"name": "World"}) == "Hello World!"


def test_render_missing_variable():
    assert render_prompt("Hello {{name}}!", {}) == "Hello !"


def test_triple_braces_do_not_escape():
    assert render_prompt("{{{place}}}", {"place": "O'Connor & Co"}) == "O'Connor & Co"


def test_take_helper_limits_items():
    tpl = "{{#take items 2}}{{this}};{{/take}}"
    assert render_prompt(tpl, {"items": ["a", "b", "c"]}) == "a;b;"


def test_render_invalid_template():
    with pytest.raises(PromptError):
        render_prompt("{{> missing_partial}}", {})


def test_narrative_prompt_embeds_location_and_theme():
    prompt = render_prompt(NARRATIVE_TEMPLATE, {"location": "Broken Hill", "theme": "mining"})
    assert "set in Broken Hill, Australia" in prompt
    assert "Theme: mining" in prompt


def test_contextual_prompt_embeds_facts_verbatim():
    facts = "Founded in 1883 after silver was found."
    prompt = render_prompt(CONTEXTUAL_TEMPLATE, {"location": "Broken Hill", "theme": "historical", "facts": facts})
    assert facts in prompt
    assert "Use ONLY the provided factual information" in prompt


def test_grounded_quiz_prompt_lists_sources():
    prompt = render_prompt(GROUNDED_QUIZ_TEMPLATE, {
        "location": "Uluru",
        "count": 8,
        "information": "Anangu are the traditional owners.",
        "sources": ["Parks Australia", "Uluru Kata Tjuta"],
    })
    assert "create 8 educational quiz questions" in prompt
    assert "- Parks Australia\n" in prompt
    assert '"correctAnswer": 0' in prompt


def test_grounded_quiz_prompt_without_sources():
    prompt = render_prompt(GROUNDED_QUIZ_TEMPLATE, {
        "location": "Uluru", "count": 8, "information": "x", "sources": [],
    })
    assert "- Various cultural sources" in prompt
