"""
In-memory corpus index for document retrieval.

Holds the embedded corpus for the lifetime of the process and
ranks it against query vectors with a pluggable similarity metric.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ragbot.core.logging import get_logger
from ragbot.services.similarity import COSINE, SimilarityMetric, rank

logger = get_logger(__name__)


@dataclass(frozen=True)
class CorpusEntry:
    """A corpus snippet and its embedding."""

    text: str
    vector: tuple[float, ...]


@dataclass(frozen=True)
class RankedResult:
    """A corpus snippet with its relevance score."""

    text: str
    score: float


class CorpusIndex:
    """
    NumPy-backed brute-force index over the corpus.

    Built once at startup and shared read-only between requests.
    """

    def __init__(
        self,
        entries: Optional[list[CorpusEntry]] = None,
        metric: SimilarityMetric = COSINE,
    ):
        self.metric = metric
        self._entries: list[CorpusEntry] = list(entries or [])

        if self._entries:
            self._matrix = np.array(
                [entry.vector for entry in self._entries], dtype=float
            )
        else:
            self._matrix = np.empty((0, 0), dtype=float)

    @classmethod
    def from_embeddings(
        cls,
        texts: list[str],
        vectors: list[list[float]],
        metric: SimilarityMetric = COSINE,
    ) -> "CorpusIndex":
        """
        Build an index from parallel lists of texts and vectors.

        Args:
            texts: Corpus snippets
            vectors: Embedding for each snippet, same order
            metric: Scoring strategy used by search

        Returns:
            New CorpusIndex
        """
        if len(texts) != len(vectors):
            raise ValueError(
                f"Got {len(texts)} texts but {len(vectors)} vectors"
            )

        entries = [
            CorpusEntry(text=text, vector=tuple(vector))
            for text, vector in zip(texts, vectors)
        ]
        return cls(entries=entries, metric=metric)

    @property
    def entries(self) -> list[CorpusEntry]:
        return list(self._entries)

    @property
    def texts(self) -> list[str]:
        return [entry.text for entry in self._entries]

    @property
    def dimension(self) -> int:
        """Embedding dimension, 0 for an empty index."""
        return self._matrix.shape[1] if self._matrix.ndim == 2 else 0

    def __len__(self) -> int:
        return len(self._entries)

    def search(
        self,
        query_vector: list[float],
        top_k: Optional[int] = None,
    ) -> list[RankedResult]:
        """
        Rank the corpus against a query vector.

        Args:
            query_vector: Query embedding
            top_k: Number of results to return; None returns the whole corpus

        Returns:
            Ranked results, most relevant first
        """
        if not self._entries:
            logger.warning("Search requested on an empty corpus index")
            return []

        indices, scores = rank(
            query_vector,
            self._matrix,
            metric=self.metric,
            top_k=top_k,
        )

        return [
            RankedResult(text=self._entries[idx].text, score=float(score))
            for idx, score in zip(indices, scores)
        ]

    def get_stats(self) -> dict:
        """Get index statistics."""
        return {
            "document_count": len(self._entries),
            "dimension": self.dimension,
            "metric": self.metric.name,
        }
