"""Board Routes: analyze an uploaded board image against the player's letters."""

import logging

from fastapi import APIRouter, Depends

from scholar.api.dependencies import get_invoker
from scholar.core.operations import AnalyzeBoardImage, decode_image
from scholar.schemas.board import AnalyzeBoardRequest, AnalyzeBoardResponse
from scholar.services.operation_invoker import OperationInvoker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/board", tags=["board"])


@router.post("/analyze", response_model=AnalyzeBoardResponse)
async def analyze_board(
    body: AnalyzeBoardRequest, invoker: OperationInvoker = Depends(get_invoker),
):
    """Top 3 suggested moves as markdown."""
    image = decode_image(body.image_base64, "imageBase64")
    analysis = await invoker.invoke(AnalyzeBoardImage(
        image_data=image, mime_type=body.mime_type, letters=body.letters,
    ))
    return AnalyzeBoardResponse(analysis=analysis)
