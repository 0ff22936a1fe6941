"""Operations: per-call request values and the caller-side checks run before any I/O.

Invariants:
    - Operations are frozen and discarded after resolution
    - validate_operation() is pure: it returns a normalized copy or raises
      ValidationInputError, and never touches the network
    - Letters and words are lowercased and stripped; letters must be alphabetic
    - FindWords.length is an exact target length or None ("any length")
"""

import binascii
import base64
from dataclasses import dataclass, field, replace
from typing import Protocol, Union

from scholar.core.domain_types import OperationKind
from scholar.core.errors import ErrorContext, ValidationInputError
from scholar.core.schema_contracts import REFERENCE_DICTIONARIES


class ConversationHandle(Protocol):
    """Backend-side conversation that keeps context across turns."""

    async def send(self, message: str, context: ErrorContext | None = None) -> str: ...


@dataclass(frozen=True)
class FindWords:
    letters: str
    length: int | None = None
    kind: OperationKind = field(default=OperationKind.FIND_WORDS, init=False)


@dataclass(frozen=True)
class GetDefinition:
    word: str
    dictionary: str = "NWL"
    kind: OperationKind = field(default=OperationKind.GET_DEFINITION, init=False)


@dataclass(frozen=True)
class CrossValidate:
    word: str
    kind: OperationKind = field(default=OperationKind.CROSS_VALIDATE, init=False)


@dataclass(frozen=True)
class AnalyzeBoardImage:
    image_data: bytes = field(repr=False)
    mime_type: str
    letters: str
    kind: OperationKind = field(default=OperationKind.ANALYZE_BOARD_IMAGE, init=False)

    @property
    def image_base64(self) -> str:
        return base64.b64encode(self.image_data).decode("ascii")


@dataclass(frozen=True)
class ChatTurn:
    conversation: ConversationHandle = field(repr=False)
    message: str
    kind: OperationKind = field(default=OperationKind.CHAT_TURN, init=False)


Operation = Union[FindWords, GetDefinition, CrossValidate, AnalyzeBoardImage, ChatTurn]


@dataclass(frozen=True)
class InputLimits:
    """Bounds the view layer is expected to enforce; re-checked here."""
    max_letters: int = 15
    max_word_length: int = 15
    max_image_bytes: int = 10 * 1024 * 1024
    allowed_image_types: tuple[str, ...] = (
        "image/jpeg", "image/png", "image/gif", "image/webp",
    )

    @classmethod
    def from_settings(cls, settings) -> "InputLimits":
        return cls(
            max_letters=settings.max_letters,
            max_word_length=settings.max_word_length,
            max_image_bytes=settings.max_image_bytes,
            allowed_image_types=tuple(settings.allowed_image_types),
        )


DEFAULT_LIMITS = InputLimits()


def validate_operation(op: Operation, limits: InputLimits = DEFAULT_LIMITS) -> Operation:
    """Check preconditions and return the normalized operation."""
    ctx = ErrorContext(operation=op.kind.value)
    match op:
        case FindWords():
            letters = _check_letters(op.letters, limits, ctx)
            if op.length is not None and not 1 <= op.length <= limits.max_word_length:
                raise ValidationInputError(
                    f"Word length must be between 1 and {limits.max_word_length}.",
                    "length", ctx,
                )
            return replace(op, letters=letters)
        case GetDefinition():
            word = _check_word(op.word, limits, ctx)
            dictionary = op.dictionary.strip().upper()
            if dictionary not in REFERENCE_DICTIONARIES:
                raise ValidationInputError(
                    f"Unknown dictionary '{op.dictionary}'. "
                    f"Choose one of: {', '.join(REFERENCE_DICTIONARIES)}.",
                    "dictionary", ctx,
                )
            return replace(op, word=word, dictionary=dictionary)
        case CrossValidate():
            return replace(op, word=_check_word(op.word, limits, ctx))
        case AnalyzeBoardImage():
            _check_image(op, limits, ctx)
            letters = _check_letters(
                op.letters, limits, ctx, "Please enter your current letters.",
            )
            return replace(op, letters=letters)
        case ChatTurn():
            message = op.message.strip()
            if not message:
                raise ValidationInputError("Please enter a message.", "message", ctx)
            return replace(op, message=message)
    raise TypeError(f"Unsupported operation: {op!r}")


def decode_image(data: str, field_name: str = "image") -> bytes:
    """Decode a base64 image payload (bare or data: URL)."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationInputError(
            "The uploaded image could not be read.", field_name,
            ErrorContext(operation=OperationKind.ANALYZE_BOARD_IMAGE.value),
        )


def _check_letters(
    letters: str,
    limits: InputLimits,
    ctx: ErrorContext,
    empty_message: str = "Please enter some letters.",
) -> str:
    letters = letters.strip().lower()
    if not letters:
        raise ValidationInputError(empty_message, "letters", ctx)
    if not letters.isascii() or not letters.isalpha():
        raise ValidationInputError(
            "Letters may only contain A-Z.", "letters", ctx,
        )
    if len(letters) > limits.max_letters:
        raise ValidationInputError(
            f"Please enter no more than {limits.max_letters} letters.",
            "letters", ctx,
        )
    return letters


def _check_word(word: str, limits: InputLimits, ctx: ErrorContext) -> str:
    word = word.strip().lower()
    if not word:
        raise ValidationInputError("Please enter a word to validate.", "word", ctx)
    if not word.isascii() or not word.isalpha():
        raise ValidationInputError(
            "Please enter a single word using letters A-Z.", "word", ctx,
        )
    if len(word) > limits.max_word_length:
        raise ValidationInputError(
            f"Words are at most {limits.max_word_length} letters long.",
            "word", ctx,
        )
    return word


def _check_image(op: AnalyzeBoardImage, limits: InputLimits, ctx: ErrorContext) -> None:
    if not op.image_data:
        raise ValidationInputError(
            "Please upload an image of the board.", "image", ctx,
        )
    if op.mime_type not in limits.allowed_image_types:
        raise ValidationInputError(
            "Invalid file type. Please upload a PNG, JPG, GIF, or WebP file.",
            "mime_type", ctx,
        )
    if len(op.image_data) > limits.max_image_bytes:
        mb = limits.max_image_bytes // (1024 * 1024)
        raise ValidationInputError(
            f"File is too large. Please upload an image under {mb}MB.",
            "image", ctx,
        )
