"""
FastAPI application entry point.

Configures the application with middleware, exception handlers,
route registration and the startup corpus embedding.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ragbot.api import health, routes
from ragbot.core.config import get_settings
from ragbot.core.exceptions import AppException
from ragbot.core.logging import get_logger, setup_logging
from ragbot.services.rag_engine import RAGEngine

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown.

    The corpus is embedded before the application starts serving,
    so no request ever sees a partially built index.
    """
    setup_logging()
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"in {settings.environment} mode"
    )

    engine: Optional[RAGEngine] = getattr(app.state, "rag_engine", None)
    if engine is None:
        engine = RAGEngine()
        app.state.rag_engine = engine

    if not engine.is_ready:
        try:
            await engine.load_and_build()
        except AppException as e:
            logger.error(
                f"Startup failed: {e.message}",
                extra={"details": e.details},
            )
            raise

    yield
    logger.info("Shutting down application")


def create_app(rag_engine: Optional[RAGEngine] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        rag_engine: Pre-built engine; when omitted one is created at startup

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        RAG question answering API

        Answers questions from a fixed text corpus. The corpus is embedded
        once at startup with the Gemini embedding model; each question is
        embedded, matched against the corpus by vector similarity, and the
        best matches are handed to a Gemini model to write the answer.

        ## Endpoints

        - **POST /ask**: answer a question
        - **GET /health**: service health
        - **GET /ready**: corpus index readiness
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if rag_engine is not None:
        app.state.rag_engine = rag_engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle application-specific exceptions."""
        logger.error(
            f"{exc.__class__.__name__}: {exc.message}",
            extra={"details": exc.details, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as client errors."""
        logger.warning(
            f"Invalid request body on {request.url.path}",
            extra={"errors": exc.errors()},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(health.router, tags=["Health"])
    app.include_router(routes.router, tags=["Ask"])

    return app


app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "ragbot.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
