"""
Health check endpoints.

Provides health and readiness checks for the application
and its dependencies.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ragbot.api.dependencies import Engine
from ragbot.core.config import get_settings
from ragbot.models.schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the application and its services.",
)
async def health_check(engine: Engine) -> HealthResponse:
    """
    Perform health check on all services.

    Returns the status of:
    - API service
    - Gemini generation model
    - Corpus index
    """
    settings = get_settings()

    llm_healthy = await engine.answer_generator.llm_service.health_check()
    index_ready = engine.is_ready

    return HealthResponse(
        status="healthy" if llm_healthy and index_ready else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        services={
            "api": "healthy",
            "gemini": "healthy" if llm_healthy else "unavailable",
            "corpus_index": "healthy" if index_ready else "building",
        },
        corpus_size=len(engine.corpus_index) if engine.corpus_index else 0,
        metric=engine.metric.name,
        top_k=engine.top_k,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Check if the corpus index is built and requests can be served.",
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(engine: Engine):
    """Report whether the corpus has been embedded."""
    if not engine.is_ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "ready": False,
                "message": "Corpus index is still being built",
            },
        )

    return ReadinessResponse(ready=True)
