"""Response Sanitizer: turns raw backend text into a typed result or the fallback.

Invariants:
    - parse_response() never raises: empty, non-JSON, or off-schema text
      yields the caller's fallback
    - Fence markers (``` / ```json) are stripped before parsing
    - Every recovered failure is logged once at WARNING with a truncated payload
    - Word lists are re-sorted here (longest first, then alphabetical);
      the backend's ordering is never trusted

Design Decisions:
    - MalformedResponseError is raised by the decode steps and caught in
      parse_response(), so policies can reject a parsed value the same way
      a JSON syntax error is rejected
"""

import json
import logging
import re
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from scholar.core.errors import ErrorContext, MalformedResponseError
from scholar.core.schema_contracts import (
    REFERENCE_DICTIONARIES,
    CrossValidationReport,
    DictionaryVerdict,
    WordSearchResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LOG_PAYLOAD_CHARS = 500
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fence(raw: str) -> str:
    """Remove one leading and one trailing fence marker, if present."""
    text = raw.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_response(
    raw: str | None,
    fallback: T,
    model: type[BaseModel] | None = None,
    postprocess: Callable[[Any], T] | None = None,
    context: ErrorContext | None = None,
) -> T:
    """Parse raw backend text into `model` (or plain JSON when model is None).

    `postprocess` runs on the parsed value and may itself raise
    MalformedResponseError to reject it.
    """
    if not isinstance(raw, str) or not raw.strip():
        return fallback
    try:
        value = _decode(raw, model, context)
        return postprocess(value) if postprocess else value
    except MalformedResponseError as e:
        logger.warning(
            "Malformed backend response, using fallback: %s", e.message,
            extra={
                "operation": e.context.operation,
                "payload": e.payload[:_LOG_PAYLOAD_CHARS],
            },
        )
        return fallback


def _decode(raw: str, model: type[BaseModel] | None, context: ErrorContext | None):
    text = strip_code_fence(raw)
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedResponseError(f"invalid JSON ({e})", text, context)
    if model is None:
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"schema violation ({e.error_count()} errors)", text, context,
        )


# ─── Per-operation policies ─────────────────────────────────────

def sort_words(words: Iterable[str]) -> list[str]:
    """Longest first; equal lengths in ascending lexicographic order."""
    return sorted(words, key=lambda w: (-len(w), w))


def normalize_word_list(
    result: WordSearchResult, length: int | None = None,
) -> WordSearchResult:
    """Lowercase, de-duplicate, enforce exact length, then sort."""
    words = {w.strip().lower() for w in result.words if w.strip()}
    if length is not None:
        words = {w for w in words if len(w) == length}
    return WordSearchResult(words=sort_words(words))


def normalize_cross_validation(
    report: CrossValidationReport, word: str,
) -> CrossValidationReport:
    """Order verdicts by reference dictionary and attach fixed descriptions.

    Unknown dictionaries are dropped; a missing one rejects the whole report.
    """
    by_name: dict[str, DictionaryVerdict] = {}
    for verdict in report.verdicts:
        name = verdict.dictionary.strip().upper()
        if name in REFERENCE_DICTIONARIES:
            by_name.setdefault(name, verdict)
    missing = [name for name in REFERENCE_DICTIONARIES if name not in by_name]
    if missing:
        raise MalformedResponseError(
            f"missing verdicts for {', '.join(missing)}",
            report.model_dump_json(by_alias=True),
        )
    return CrossValidationReport(
        word=word,
        verdicts=[
            DictionaryVerdict(
                dictionary=name,
                description=description,
                is_valid=by_name[name].is_valid,
                definition=by_name[name].definition,
            )
            for name, description in REFERENCE_DICTIONARIES.items()
        ],
    )
