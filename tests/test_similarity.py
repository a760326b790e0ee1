"""
Tests for similarity scoring and ranking.
"""

import numpy as np
import pytest

from ragbot.services.similarity import (
    COSINE,
    EUCLIDEAN,
    cosine_similarity,
    euclidean_distance,
    get_metric,
    rank,
)


@pytest.fixture
def matrix():
    return np.array(
        [
            [0.0, 1.0],   # orthogonal to the query
            [1.0, 0.0],   # same direction as the query
            [1.0, 1.0],   # 45 degrees
            [-1.0, 0.0],  # opposite
        ]
    )


class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    def test_known_values(self, matrix):
        scores = cosine_similarity(np.array([1.0, 0.0]), matrix)

        np.testing.assert_allclose(scores, [0.0, 1.0, np.sqrt(0.5), -1.0])

    def test_scale_invariant(self):
        scores = cosine_similarity(np.array([3.0, 4.0]), np.array([[6.0, 8.0]]))

        assert scores[0] == pytest.approx(1.0)

    def test_zero_corpus_vector_scores_zero(self):
        scores = cosine_similarity(
            np.array([1.0, 2.0]),
            np.array([[0.0, 0.0], [1.0, 2.0]]),
        )

        assert scores[0] == 0.0
        assert scores[1] == pytest.approx(1.0)

    def test_zero_query_scores_zero(self, matrix):
        scores = cosine_similarity(np.zeros(2), matrix)

        assert np.all(scores == 0.0)

    def test_dimension_mismatch_raises(self, matrix):
        with pytest.raises(ValueError):
            cosine_similarity(np.array([1.0, 0.0, 0.0]), matrix)


class TestEuclideanDistance:
    """Tests for euclidean_distance."""

    def test_known_values(self, matrix):
        distances = euclidean_distance(np.array([1.0, 0.0]), matrix)

        np.testing.assert_allclose(distances, [np.sqrt(2), 0.0, 1.0, 2.0])

    def test_three_four_five(self):
        distances = euclidean_distance(np.zeros(2), np.array([[3.0, 4.0]]))

        assert distances[0] == pytest.approx(5.0)


class TestGetMetric:
    """Tests for metric lookup."""

    def test_resolves_names(self):
        assert get_metric("cosine") is COSINE
        assert get_metric("Euclidean") is EUCLIDEAN

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown similarity metric"):
            get_metric("manhattan")


class TestRank:
    """Tests for rank."""

    def test_cosine_orders_descending(self, matrix):
        order, scores = rank([1.0, 0.0], matrix, COSINE)

        assert order.tolist() == [1, 2, 0, 3]
        assert list(scores) == sorted(scores, reverse=True)

    def test_euclidean_orders_ascending(self, matrix):
        order, scores = rank([1.0, 0.0], matrix, EUCLIDEAN)

        assert order.tolist() == [1, 2, 0, 3]
        assert list(scores) == sorted(scores)

    def test_metrics_can_disagree(self):
        # Long vector in the query direction vs short vector slightly off it
        matrix = np.array([[10.0, 0.0], [0.9, 0.1]])

        cosine_order, _ = rank([1.0, 0.0], matrix, COSINE)
        euclidean_order, _ = rank([1.0, 0.0], matrix, EUCLIDEAN)

        assert cosine_order.tolist() == [0, 1]
        assert euclidean_order.tolist() == [1, 0]

    @pytest.mark.parametrize("metric", [COSINE, EUCLIDEAN])
    def test_identical_vector_ranks_first(self, metric):
        rng = np.random.default_rng(7)
        matrix = rng.normal(size=(20, 8))
        query = matrix[13].copy()

        order, _ = rank(query, matrix, metric)

        assert order[0] == 13

    def test_top_k_truncates(self, matrix):
        order, scores = rank([1.0, 0.0], matrix, COSINE, top_k=2)

        assert order.tolist() == [1, 2]
        assert len(scores) == 2

    def test_top_k_larger_than_corpus(self, matrix):
        order, _ = rank([1.0, 0.0], matrix, COSINE, top_k=50)

        assert len(order) == 4

    def test_ties_keep_corpus_order(self):
        matrix = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 0.0]])

        order, _ = rank([1.0, 0.0], matrix, COSINE)

        assert order.tolist() == [0, 2, 3, 1]

    def test_empty_matrix(self):
        order, scores = rank([1.0, 0.0], np.empty((0, 0)), COSINE, top_k=10)

        assert len(order) == 0
        assert len(scores) == 0
