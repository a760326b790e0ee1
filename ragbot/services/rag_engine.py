"""
RAG (Retrieval-Augmented Generation) engine.

Orchestrates the complete pipeline: corpus embedding at startup,
then query embedding, ranking and answer generation per request.
"""

import time
from pathlib import Path
from typing import Optional, Union

from ragbot.core.config import get_settings
from ragbot.core.exceptions import ServiceNotReadyError
from ragbot.core.logging import get_logger
from ragbot.services.answer_generator import AnswerGenerator
from ragbot.services.corpus_loader import load_corpus
from ragbot.services.embedding_service import EmbeddingService
from ragbot.services.similarity import SimilarityMetric, get_metric
from ragbot.services.vector_store import CorpusIndex, RankedResult

logger = get_logger(__name__)


class RAGEngine:
    """
    Complete RAG pipeline orchestrator.

    The corpus index is None until build_index completes; requests
    are refused until then.
    """

    def __init__(
        self,
        embedding_service: Optional[EmbeddingService] = None,
        answer_generator: Optional[AnswerGenerator] = None,
        metric: Optional[Union[SimilarityMetric, str]] = None,
        top_k: Optional[int] = None,
    ):
        self.settings = get_settings()
        self.embedding_service = embedding_service or EmbeddingService()
        self.answer_generator = answer_generator or AnswerGenerator()

        metric = metric or self.settings.similarity_metric
        self.metric = get_metric(metric) if isinstance(metric, str) else metric

        if top_k is None:
            top_k = self.settings.retrieval_top_k
        self.top_k = top_k or None

        self.corpus_index: Optional[CorpusIndex] = None

    @property
    def is_ready(self) -> bool:
        return self.corpus_index is not None

    async def build_index(self, texts: list[str]) -> CorpusIndex:
        """
        Embed corpus documents and install the in-memory index.

        Args:
            texts: Corpus documents

        Returns:
            The newly built index
        """
        start_time = time.time()

        logger.info(f"Generating embeddings for {len(texts)} documents")
        vectors = await self.embedding_service.embed_documents(texts)

        index = CorpusIndex.from_embeddings(texts, vectors, metric=self.metric)
        self.corpus_index = index

        processing_time = (time.time() - start_time) * 1000
        logger.info(
            f"Corpus index ready: {len(index)} documents, "
            f"dimension {index.dimension}, metric {self.metric.name} "
            f"({processing_time:.2f}ms)"
        )
        return index

    async def load_and_build(self, path: Optional[Union[str, Path]] = None) -> CorpusIndex:
        """Load the corpus file and build the index from it."""
        texts = load_corpus(path or self.settings.corpus_path)
        return await self.build_index(texts)

    def _require_index(self) -> CorpusIndex:
        if self.corpus_index is None:
            raise ServiceNotReadyError(message="Corpus index has not been built")
        return self.corpus_index

    async def retrieve(self, question: str) -> list[RankedResult]:
        """
        Rank corpus documents against a question.

        Args:
            question: User question

        Returns:
            Ranked results, most relevant first
        """
        index = self._require_index()

        query_vector = await self.embedding_service.embed_query(question)
        results = index.search(query_vector, top_k=self.top_k)

        logger.info(f"Retrieved {len(results)} documents for query")
        return results

    async def ask(self, question: str) -> str:
        """
        Complete RAG query: retrieve and generate.

        Args:
            question: User question

        Returns:
            Answer text
        """
        start_time = time.time()

        results = await self.retrieve(question)
        answer = await self.answer_generator.generate_answer(
            question,
            [result.text for result in results],
        )

        processing_time = (time.time() - start_time) * 1000
        logger.info(f"Answered question in {processing_time:.2f}ms")

        return answer

    def get_stats(self) -> dict:
        """Get RAG engine statistics."""
        return {
            "ready": self.is_ready,
            "corpus": self.corpus_index.get_stats() if self.corpus_index else None,
            "metric": self.metric.name,
            "top_k": self.top_k,
            "embedding_model": self.embedding_service.model_name,
            "generation_model": self.answer_generator.llm_service.model,
        }
