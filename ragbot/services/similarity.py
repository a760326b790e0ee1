"""
Vector similarity scoring and ranking.

Provides interchangeable scoring strategies (cosine similarity and
Euclidean distance) and a brute-force ranker over a matrix of
corpus vectors.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np


def cosine_similarity(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    Compute cosine similarity between a query and every row of a matrix.

    Rows (or a query) with zero magnitude score 0.0.

    Args:
        query: Query vector of shape (d,)
        matrix: Corpus vectors of shape (n, d)

    Returns:
        Array of n similarity scores in [-1, 1]
    """
    dots = matrix @ query
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    scores = np.zeros_like(dots, dtype=float)
    np.divide(dots, norms, out=scores, where=norms != 0)
    return scores


def euclidean_distance(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    Compute the straight-line distance from a query to every row of a matrix.

    Args:
        query: Query vector of shape (d,)
        matrix: Corpus vectors of shape (n, d)

    Returns:
        Array of n non-negative distances
    """
    return np.linalg.norm(matrix - query, axis=1)


@dataclass(frozen=True)
class SimilarityMetric:
    """A scoring strategy and the direction in which it ranks."""

    name: str
    score: Callable[[np.ndarray, np.ndarray], np.ndarray]
    higher_is_better: bool


COSINE = SimilarityMetric(
    name="cosine",
    score=cosine_similarity,
    higher_is_better=True,
)

EUCLIDEAN = SimilarityMetric(
    name="euclidean",
    score=euclidean_distance,
    higher_is_better=False,
)

METRICS: dict[str, SimilarityMetric] = {
    COSINE.name: COSINE,
    EUCLIDEAN.name: EUCLIDEAN,
}


def get_metric(name: str) -> SimilarityMetric:
    """Resolve a metric by name ("cosine" or "euclidean")."""
    try:
        return METRICS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown similarity metric '{name}'. "
            f"Expected one of: {', '.join(sorted(METRICS))}"
        )


def rank(
    query_vector,
    matrix: np.ndarray,
    metric: SimilarityMetric,
    top_k: Optional[int] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Rank corpus rows against a query, most relevant first.

    Ties keep corpus order.

    Args:
        query_vector: Query embedding
        matrix: Corpus vectors of shape (n, d)
        metric: Scoring strategy
        top_k: Number of results to keep; None keeps all

    Returns:
        Tuple of (row indices, scores) in ranked order
    """
    if matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=float)

    query = np.asarray(query_vector, dtype=float)
    scores = metric.score(query, matrix)

    keys = -scores if metric.higher_is_better else scores
    order = np.argsort(keys, kind="stable")

    if top_k is not None:
        order = order[:top_k]

    return order, scores[order]
