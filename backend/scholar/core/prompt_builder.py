"""Prompt Builder: maps an operation to the exact text sent to the backend.

Invariants:
    - build_prompt() is pure and deterministic: same operation, same text
    - Schema-bound prompts always end with the JSON-only instruction
    - Dictionary descriptions come from REFERENCE_DICTIONARIES verbatim,
      never from the backend
    - ChatTurn has no template: the user message is sent as-is and
      CHAT_SYSTEM_INSTRUCTION is attached once per conversation
"""

from scholar.core.operations import (
    AnalyzeBoardImage, ChatTurn, CrossValidate, FindWords, GetDefinition, Operation,
)
from scholar.core.schema_contracts import REFERENCE_DICTIONARIES


CHAT_SYSTEM_INSTRUCTION = (
    "You are a friendly and knowledgeable Scrabble expert. Answer any "
    "questions about rules, strategy, word origins, or anything else related "
    "to the game of Scrabble."
)

CHAT_GREETING = (
    "Hello! I'm your Scrabble Scholar. Ask me anything about rules, "
    "strategies, or word origins!"
)

_EXPERT_ROLE = "You are a Scrabble dictionary expert."

_JSON_ONLY = (
    "Respond ONLY with a JSON object matching the declared schema. "
    "No markdown, no explanation, no text before or after the JSON."
)

_ORDERING = (
    "Sort the words by length, longest first; words of equal length "
    "in ascending alphabetical order."
)


def build_prompt(op: Operation) -> str:
    """Build the request text for one operation."""
    match op:
        case FindWords():
            return _find_words_prompt(op)
        case GetDefinition():
            return _definition_prompt(op)
        case CrossValidate():
            return _cross_validate_prompt(op)
        case AnalyzeBoardImage():
            return _board_prompt(op)
        case ChatTurn():
            return op.message
    raise TypeError(f"Unsupported operation: {op!r}")


def describe_dictionary(name: str) -> str:
    return f"{name} ({REFERENCE_DICTIONARIES[name]})"


def _find_words_prompt(op: FindWords) -> str:
    if op.length is None:
        length_rule = "Words may be any length from 2 letters up to all of the letters."
    else:
        length_rule = f"Every word must be exactly {op.length} letters long."
    return "\n".join([
        _EXPERT_ROLE,
        f"Using only the letters '{op.letters}' (each letter at most as many "
        "times as it appears), find all valid Scrabble words.",
        length_rule,
        _ORDERING,
        'Return {"words": [...]}; if no words are found, return {"words": []}.',
        _JSON_ONLY,
    ])


def _definition_prompt(op: GetDefinition) -> str:
    return "\n".join([
        _EXPERT_ROLE,
        f"Reference dictionary: {describe_dictionary(op.dictionary)}.",
        f"Is the word '{op.word}' valid in {op.dictionary}? "
        "Provide its definition if it is.",
        'Return {"isValid": boolean, "definition": string}; the definition '
        "is an empty string if the word is not valid.",
        _JSON_ONLY,
    ])


def _cross_validate_prompt(op: CrossValidate) -> str:
    dictionaries = "\n".join(
        f"- {describe_dictionary(name)}" for name in REFERENCE_DICTIONARIES
    )
    return "\n".join([
        _EXPERT_ROLE,
        f"Check the word '{op.word}' against each of these reference dictionaries:",
        dictionaries,
        "Report one verdict per dictionary, in the order listed, as "
        '{"verdicts": [{"dictionary": name, "isValid": boolean, '
        '"definition": string}]}. Use an empty definition when the word '
        "is not valid in that dictionary.",
        _JSON_ONLY,
    ])


def _board_prompt(op: AnalyzeBoardImage) -> str:
    return (
        "You are a Scrabble strategy grandmaster. The user has uploaded an "
        "image of their Scrabble board. Their current letters are "
        f"'{op.letters.upper()}'. Analyze the board and suggest the top 3 "
        "optimal moves. For each move, give the word, its position on the "
        "board, and the score, and explain the strategic reasoning. Format "
        "your response as markdown, using a heading per move and bullet "
        "points for details."
    )
