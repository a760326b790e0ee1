"""
Embedding service for text vectorization.

Calls the Gemini embedding API with retrieval task types and
batches corpus documents to respect the per-call request limit.
"""

from enum import Enum
from typing import Optional

from ragbot.core.config import get_settings
from ragbot.core.exceptions import UpstreamError
from ragbot.core.logging import get_logger
from ragbot.services.gemini_client import GeminiClient, model_path

logger = get_logger(__name__)

MAX_BATCH_SIZE = 100


class TaskType(str, Enum):
    """Embedding task types understood by the Gemini API."""

    RETRIEVAL_QUERY = "RETRIEVAL_QUERY"
    RETRIEVAL_DOCUMENT = "RETRIEVAL_DOCUMENT"


def batched(items: list, size: int):
    """Yield consecutive slices of at most `size` items."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


class EmbeddingService:
    """
    Generate embeddings through the hosted Gemini embedding model.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        model_name: Optional[str] = None,
        batch_size: Optional[int] = None,
    ):
        settings = get_settings()
        self.client = client or GeminiClient()
        self.model_name = model_name or settings.embedding_model
        self.batch_size = min(batch_size or settings.embed_batch_size, MAX_BATCH_SIZE)

    def _request(self, text: str, task_type: TaskType) -> dict:
        return {
            "model": model_path(self.model_name),
            "content": {"parts": [{"text": text}]},
            "taskType": task_type.value,
        }

    async def embed_query(self, text: str) -> list[float]:
        """
        Generate the embedding for a search query.

        Args:
            text: Query text

        Returns:
            Embedding vector
        """
        result = await self.client.call(
            self.model_name,
            "embedContent",
            self._request(text, TaskType.RETRIEVAL_QUERY),
        )

        try:
            return list(result["embedding"]["values"])
        except (KeyError, TypeError):
            raise UpstreamError(
                message="Embedding response is missing 'embedding.values'",
                details={"keys": list(result) if isinstance(result, dict) else []},
            )

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for corpus documents in batches.

        Args:
            texts: Documents to embed

        Returns:
            One vector per document, in input order
        """
        if not texts:
            return []

        vectors: list[list[float]] = []

        for batch_number, batch in enumerate(batched(texts, self.batch_size), 1):
            result = await self.client.call(
                self.model_name,
                "batchEmbedContents",
                {
                    "requests": [
                        self._request(text, TaskType.RETRIEVAL_DOCUMENT)
                        for text in batch
                    ]
                },
            )

            try:
                embeddings = [list(e["values"]) for e in result["embeddings"]]
            except (KeyError, TypeError):
                raise UpstreamError(
                    message="Batch embedding response is malformed",
                    details={"batch": batch_number},
                )

            if len(embeddings) != len(batch):
                raise UpstreamError(
                    message=(
                        f"Expected {len(batch)} embeddings, "
                        f"got {len(embeddings)}"
                    ),
                    details={"batch": batch_number},
                )

            vectors.extend(embeddings)
            logger.debug(f"Embedded batch {batch_number} ({len(batch)} documents)")

        return vectors
