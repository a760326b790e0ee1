"""
FastAPI dependencies shared by route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from ragbot.core.exceptions import ServiceNotReadyError
from ragbot.services.rag_engine import RAGEngine


def get_rag_engine(request: Request) -> RAGEngine:
    """
    Return the application's RAG engine.

    The engine is created by the lifespan handler and stored on app.state.
    """
    engine = getattr(request.app.state, "rag_engine", None)

    if engine is None:
        raise ServiceNotReadyError(message="RAG engine has not been initialized")

    return engine


Engine = Annotated[RAGEngine, Depends(get_rag_engine)]
