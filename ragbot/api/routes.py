"""
API routes for the question answering service.
"""

from typing import Optional

from fastapi import APIRouter

from ragbot.api.dependencies import Engine
from ragbot.core.config import get_settings
from ragbot.core.exceptions import AppException, InternalError, ValidationError
from ragbot.core.logging import get_logger
from ragbot.models.schemas import AskRequest, AskResponse, ErrorResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", include_in_schema=False)
async def root():
    """Static welcome message."""
    settings = get_settings()
    return {"message": f"Welcome to {settings.app_name}"}


@router.post(
    "/ask",
    response_model=AskResponse,
    summary="Ask a question",
    description="Answer a question using the most relevant corpus snippets as context.",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def ask(engine: Engine, body: Optional[AskRequest] = None) -> AskResponse:
    """
    Answer a question with the RAG pipeline.

    - Embeds the question
    - Ranks corpus snippets by similarity
    - Generates an answer from the top-ranked snippets
    """
    question = (body.question or "").strip() if body else ""

    if not question:
        raise ValidationError(message="Question is required")

    logger.info(f"Received question ({len(question)} chars)")

    try:
        answer = await engine.ask(question)
    except AppException:
        raise
    except Exception as e:
        logger.exception("Unexpected error in ask endpoint")
        raise InternalError(
            message=f"Ask failed: {str(e)}",
            details={"type": type(e).__name__},
        )

    return AskResponse(answer=answer)
