"""Schema Contracts: the fixed response shape of every schema-bound operation.

Invariants:
    - FIND_WORDS, GET_DEFINITION and CROSS_VALIDATE have exactly one contract each
    - ANALYZE_BOARD_IMAGE and CHAT_TURN have none (free text, never schema-checked)
    - input_schema is sent to the backend as a forced tool; model checks the reply
    - Field types are strict: "true" is not a boolean, 7 is not a string
    - Reference dictionary descriptions are fixed text owned by this module

Design Decisions:
    - JSON schemas written out by hand in Anthropic Tool Use format, not generated
      from the pydantic models, so the wire contract reads as a literal
    - camelCase aliases on the wire (isValid), snake_case attributes in Python
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from scholar.core.domain_types import OperationKind


# ─── Reference Dictionaries ─────────────────────────────────────

REFERENCE_DICTIONARIES: dict[str, str] = {
    "OSPD": (
        "Official Scrabble Players Dictionary: the North American reference "
        "for recreational and school play, with offensive words removed."
    ),
    "NWL": (
        "NASPA Word List: the official lexicon for club and tournament play "
        "in the United States and Canada."
    ),
    "CSW": (
        "Collins Scrabble Words: the international tournament lexicon used "
        "outside North America, the largest of the three lists."
    ),
}


# ─── Result Models ──────────────────────────────────────────────

class _ContractModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class WordSearchResult(_ContractModel):
    """Words buildable from a letter set."""
    words: list[StrictStr]

    @property
    def no_words_found(self) -> bool:
        """True for a completed search that returned nothing."""
        return not self.words


class DefinitionResult(_ContractModel):
    """Validity of one word in one dictionary, with its definition."""
    is_valid: StrictBool = Field(alias="isValid")
    definition: StrictStr


class DictionaryVerdict(_ContractModel):
    dictionary: StrictStr
    is_valid: StrictBool = Field(alias="isValid")
    definition: StrictStr
    description: str = ""


class CrossValidationReport(_ContractModel):
    """Verdicts for one word across every reference dictionary."""
    word: str = ""
    verdicts: list[DictionaryVerdict]


# ─── Contracts ──────────────────────────────────────────────────

@dataclass(frozen=True)
class SchemaContract:
    """Declared response structure for one operation kind."""
    kind: OperationKind
    tool_name: str
    description: str
    input_schema: dict[str, Any]
    model: type[BaseModel]

    def as_tool(self) -> dict[str, Any]:
        """Anthropic tool definition constraining the reply to this shape."""
        return {
            "name": self.tool_name,
            "description": self.description,
            "input_schema": self.input_schema,
        }

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def field_types(self) -> dict[str, str]:
        """Top-level field -> primitive type label (string, boolean,
        array<string>, array<object>)."""
        types = {}
        for name, prop in self.input_schema["properties"].items():
            if prop["type"] == "array":
                types[name] = f"array<{prop['items']['type']}>"
            else:
                types[name] = prop["type"]
        return types


FIND_WORDS_CONTRACT = SchemaContract(
    kind=OperationKind.FIND_WORDS,
    tool_name="report_words",
    description="Reports every valid word that can be built from the letters.",
    input_schema={
        "type": "object",
        "properties": {
            "words": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "Lowercase words, longest first, ties in alphabetical order."
                ),
            },
        },
        "required": ["words"],
    },
    model=WordSearchResult,
)

GET_DEFINITION_CONTRACT = SchemaContract(
    kind=OperationKind.GET_DEFINITION,
    tool_name="report_definition",
    description="Reports whether the word is valid and defines it.",
    input_schema={
        "type": "object",
        "properties": {
            "isValid": {"type": "boolean"},
            "definition": {
                "type": "string",
                "description": "Definition, or an empty string if not valid.",
            },
        },
        "required": ["isValid", "definition"],
    },
    model=DefinitionResult,
)

CROSS_VALIDATE_CONTRACT = SchemaContract(
    kind=OperationKind.CROSS_VALIDATE,
    tool_name="report_cross_validation",
    description="Reports the word's validity in each reference dictionary.",
    input_schema={
        "type": "object",
        "properties": {
            "verdicts": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "dictionary": {
                            "type": "string",
                            "enum": list(REFERENCE_DICTIONARIES),
                        },
                        "isValid": {"type": "boolean"},
                        "definition": {"type": "string"},
                    },
                    "required": ["dictionary", "isValid", "definition"],
                },
            },
        },
        "required": ["verdicts"],
    },
    model=CrossValidationReport,
)

CONTRACTS: dict[OperationKind, SchemaContract] = {
    OperationKind.FIND_WORDS: FIND_WORDS_CONTRACT,
    OperationKind.GET_DEFINITION: GET_DEFINITION_CONTRACT,
    OperationKind.CROSS_VALIDATE: CROSS_VALIDATE_CONTRACT,
}


def contract_for(kind: OperationKind) -> SchemaContract | None:
    """Contract for a schema-bound kind; None for free-text kinds."""
    return CONTRACTS.get(kind)
