"""
Pydantic models for API requests and responses.
"""

from typing import Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Question submitted to the /ask endpoint."""

    question: Optional[str] = Field(
        default=None,
        description="Question to answer from the corpus",
        examples=["What programming languages do you know?"],
    )


class AskResponse(BaseModel):
    """Answer produced by the RAG pipeline."""

    answer: str


class ErrorResponse(BaseModel):
    """Error payload returned for failed requests."""

    error: str


class HealthResponse(BaseModel):
    """Service health report."""

    status: str
    version: str
    environment: str
    services: dict[str, str]
    corpus_size: int = 0
    metric: str
    top_k: Optional[int] = None


class ReadinessResponse(BaseModel):
    """Readiness report."""

    ready: bool
    message: Optional[str] = None
