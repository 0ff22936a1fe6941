"""Word Routes: find words, validate a word, cross-check a word across dictionaries.

Invariants:
    - Routes only translate HTTP <-> operations; all logic lives in the invoker
    - Backend failures surface as 503 with the operation's user message
      (global ScholarError handler)
"""

import logging

from fastapi import APIRouter, Depends, Request

from scholar.api.dependencies import get_invoker
from scholar.core.operations import CrossValidate, FindWords, GetDefinition
from scholar.core.schema_contracts import CrossValidationReport, DefinitionResult
from scholar.schemas.words import (
    CrossValidateRequest, FindWordsRequest, FindWordsResponse, ValidateWordRequest,
)
from scholar.services.operation_invoker import OperationInvoker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/words", tags=["words"])


@router.post("/find", response_model=FindWordsResponse)
async def find_words(
    body: FindWordsRequest, invoker: OperationInvoker = Depends(get_invoker),
):
    """Find words buildable from the letters (exact length or any)."""
    result = await invoker.invoke(FindWords(letters=body.letters, length=body.length))
    return FindWordsResponse.from_result(result)


@router.post("/validate", response_model=DefinitionResult)
async def validate_word(
    body: ValidateWordRequest,
    request: Request,
    invoker: OperationInvoker = Depends(get_invoker),
):
    """Check one word against one reference dictionary."""
    dictionary = body.dictionary or request.app.state.settings.default_dictionary
    return await invoker.invoke(GetDefinition(word=body.word, dictionary=dictionary))


@router.post("/cross-validate", response_model=CrossValidationReport)
async def cross_validate_word(
    body: CrossValidateRequest, invoker: OperationInvoker = Depends(get_invoker),
):
    """Check one word against every reference dictionary."""
    return await invoker.invoke(CrossValidate(word=body.word))
