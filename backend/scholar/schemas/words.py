"""Word Schemas: request/response validation for word finding and validation.

Invariants:
    - letters/word: alphabetic only, surrounding whitespace stripped
    - length: exact target length, or null for "any length"
    - Upper bounds (letter count, word length) are not checked here:
      validate_operation() applies the configured InputLimits
    - Responses use camelCase aliases (noWordsFound, isValid)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scholar.core.schema_contracts import WordSearchResult

_ALPHA = r"^[A-Za-z]+$"


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class FindWordsRequest(_Request):
    letters: str = Field(min_length=1, pattern=_ALPHA)
    length: int | None = None


class FindWordsResponse(BaseModel):
    """Distinguishes "no words found" from a search never performed."""
    model_config = ConfigDict(populate_by_name=True)

    words: list[str]
    no_words_found: bool = Field(alias="noWordsFound")

    @classmethod
    def from_result(cls, result: WordSearchResult) -> "FindWordsResponse":
        return cls(words=result.words, no_words_found=result.no_words_found)


class ValidateWordRequest(_Request):
    word: str = Field(min_length=1, pattern=_ALPHA)
    dictionary: str | None = Field(None, max_length=8)

    @field_validator("dictionary")
    @classmethod
    def upper_dictionary(cls, v: str | None) -> str | None:
        return v.upper() if v else None


class CrossValidateRequest(_Request):
    word: str = Field(min_length=1, pattern=_ALPHA)


class DefinitionLookupRequest(_Request):
    word: str = Field(min_length=1, pattern=_ALPHA)
