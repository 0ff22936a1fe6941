"""Domain Types: enums that replace bare strings across the codebase.

Invariants:
    - The operation set is closed: five kinds, dispatched by match, never subclassed
    - AppView is closed: four views, each mapped to the operations it issues
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RequestKey = NewType("RequestKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class OperationKind(str, Enum):
    """Named categories of backend request."""
    FIND_WORDS = "find_words"
    GET_DEFINITION = "get_definition"
    CROSS_VALIDATE = "cross_validate"
    ANALYZE_BOARD_IMAGE = "analyze_board_image"
    CHAT_TURN = "chat_turn"


class RequestStatus(str, Enum):
    """Per-key lifecycle in the request registry."""
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ChatStatus(str, Enum):
    """Chat session state machine: IDLE -> PENDING -> IDLE."""
    IDLE = "idle"
    PENDING = "pending"


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class AppView(str, Enum):
    """Top-level views (tabs) of the application."""
    WORD_FINDER = "Word Finder"
    VALIDATOR = "Validator"
    BOARD_ANALYZER = "Board Analyzer"
    AI_CHAT = "AI Chat"


VIEW_OPERATIONS: dict[AppView, tuple[OperationKind, ...]] = {
    AppView.WORD_FINDER: (OperationKind.FIND_WORDS, OperationKind.GET_DEFINITION),
    AppView.VALIDATOR: (OperationKind.GET_DEFINITION, OperationKind.CROSS_VALIDATE),
    AppView.BOARD_ANALYZER: (OperationKind.ANALYZE_BOARD_IMAGE,),
    AppView.AI_CHAT: (OperationKind.CHAT_TURN,),
}

DEFAULT_VIEW = AppView.WORD_FINDER
