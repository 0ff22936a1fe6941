"""Prompt Builder: verifies the request text for each operation kind.

Tests:
    - Deterministic output for identical operations
    - Word finder states the letters, the length rule and the ordering rule
    - Definition and cross-check prompts embed fixed dictionary descriptions
    - Schema-bound prompts end with the JSON-only instruction
    - Chat turns are sent verbatim
"""

import pytest

from scholar.core.operations import (
    AnalyzeBoardImage, ChatTurn, CrossValidate, FindWords, GetDefinition,
)
from scholar.core.prompt_builder import (
    CHAT_GREETING, CHAT_SYSTEM_INSTRUCTION, build_prompt, describe_dictionary,
)
from scholar.core.schema_contracts import REFERENCE_DICTIONARIES

JSON_ONLY_TAIL = "No markdown, no explanation, no text before or after the JSON."


class _Conversation:
    async def send(self, message, context=None):
        return message


def test_prompt_is_deterministic():
    op = FindWords(letters="aeilnor", length=7)
    assert build_prompt(op) == build_prompt(FindWords(letters="aeilnor", length=7))


def test_find_words_exact_length():
    prompt = build_prompt(FindWords(letters="aeilnor", length=7))
    assert "'aeilnor'" in prompt
    assert "exactly 7 letters" in prompt
    assert "longest first" in prompt


def test_find_words_any_length():
    prompt = build_prompt(FindWords(letters="aeilnor"))
    assert "any length" in prompt
    assert "exactly" not in prompt


def test_definition_prompt_names_dictionary():
    prompt = build_prompt(GetDefinition(word="qi", dictionary="OSPD"))
    assert describe_dictionary("OSPD") in prompt
    assert "'qi'" in prompt


def test_cross_validate_lists_every_dictionary():
    prompt = build_prompt(CrossValidate(word="qi"))
    for name, description in REFERENCE_DICTIONARIES.items():
        assert f"{name} ({description})" in prompt


@pytest.mark.parametrize("op", [
    FindWords(letters="abc"),
    GetDefinition(word="qi"),
    CrossValidate(word="qi"),
])
def test_schema_bound_prompts_end_with_json_only(op):
    assert build_prompt(op).endswith(JSON_ONLY_TAIL)


def test_board_prompt_requests_top_three_in_markdown():
    prompt = build_prompt(AnalyzeBoardImage(b"img", "image/png", "rstlne"))
    assert "'RSTLNE'" in prompt
    assert "top 3" in prompt
    assert "markdown" in prompt


def test_chat_turn_is_sent_verbatim():
    assert build_prompt(ChatTurn(_Conversation(), "What is a bingo?")) == "What is a bingo?"


def test_chat_texts_are_fixed():
    assert CHAT_GREETING.startswith("Hello! I'm your Scrabble Scholar.")
    assert "Scrabble expert" in CHAT_SYSTEM_INSTRUCTION
