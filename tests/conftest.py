"""
Shared fixtures for the test suite.
"""

import json
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from ragbot.services.answer_generator import AnswerGenerator
from ragbot.services.gemini_client import GeminiClient
from ragbot.services.rag_engine import RAGEngine
from ragbot.services.vector_store import CorpusIndex

BASE_URL = "https://gemini.test/v1beta"


class GeminiStub:
    """
    Fake Gemini REST backend for httpx.MockTransport.

    Records every request and answers embedContent, batchEmbedContents
    and generateContent the way the real API shapes its responses.
    """

    def __init__(self, answer: str = "stub answer"):
        self.answer = answer
        self.requests: list[httpx.Request] = []
        self.status_code = 200

    @staticmethod
    def vector_for(text: str) -> list[float]:
        """Deterministic vector: "doc-17" -> [17.0, 1.0]."""
        suffix = text.rsplit("-", 1)[-1]
        return [float(suffix) if suffix.isdigit() else 0.0, 1.0]

    def payloads(self, method: str) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith(f":{method}")
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "boom"}})

        path = request.url.path

        if request.method == "GET":
            return httpx.Response(200, json={"name": path})

        body = json.loads(request.content)

        if path.endswith(":embedContent"):
            text = body["content"]["parts"][0]["text"]
            return httpx.Response(200, json={"embedding": {"values": self.vector_for(text)}})

        if path.endswith(":batchEmbedContents"):
            return httpx.Response(
                200,
                json={
                    "embeddings": [
                        {"values": self.vector_for(r["content"]["parts"][0]["text"])}
                        for r in body["requests"]
                    ]
                },
            )

        if path.endswith(":generateContent"):
            return httpx.Response(
                200,
                json={
                    "candidates": [
                        {"content": {"role": "model", "parts": [{"text": self.answer}]}}
                    ]
                },
            )

        return httpx.Response(404)


@pytest.fixture
def gemini_stub():
    """Fake Gemini backend."""
    return GeminiStub()


@pytest.fixture
def gemini_client(gemini_stub):
    """GeminiClient wired to the fake backend."""
    return GeminiClient(
        api_key="test-key",
        base_url=BASE_URL,
        timeout=5,
        transport=httpx.MockTransport(gemini_stub.handler),
    )


@pytest.fixture
def mock_embedding_service():
    """Embedding service returning fixed vectors."""
    service = Mock()
    service.model_name = "fake-embedding"
    service.embed_query = AsyncMock(return_value=[1.0, 0.0])
    service.embed_documents = AsyncMock(
        side_effect=lambda texts: [[float(i), 1.0] for i in range(len(texts))]
    )
    return service


@pytest.fixture
def mock_llm_service():
    """LLM service returning fixed markup text."""
    service = Mock()
    service.model = "fake-llm"
    service.generate = AsyncMock(return_value="**Skill A**\nSkill B")
    service.health_check = AsyncMock(return_value=True)
    return service


@pytest.fixture
def corpus():
    """Small corpus with hand-picked 2D vectors."""
    return {
        "Python": [1.0, 0.0],
        "Go": [0.0, 1.0],
        "SQL": [0.7, 0.7],
    }


@pytest.fixture
def rag_engine(mock_embedding_service, mock_llm_service):
    """Engine with mocked services and no index yet."""
    return RAGEngine(
        embedding_service=mock_embedding_service,
        answer_generator=AnswerGenerator(
            llm_service=mock_llm_service,
            system_instruction="Answer from the context.",
        ),
        metric="cosine",
        top_k=2,
    )


@pytest.fixture
def ready_engine(rag_engine, corpus):
    """Engine with a pre-built corpus index."""
    rag_engine.corpus_index = CorpusIndex.from_embeddings(
        list(corpus),
        list(corpus.values()),
        metric=rag_engine.metric,
    )
    return rag_engine
