"""
Shared fixtures: temporary SQLite stores, an in-memory projection with
deterministic embeddings, and fake generators.
"""

import pytest
from fastapi.testclient import TestClient

from chavis.agents.agent import TextGenerator
from chavis.api.deps import build_services
from chavis.api.main import create_app
from chavis.core.dao import KnowledgeStore, UnansweredLog
from chavis.core.errors import UpstreamGenerationFailure
from chavis.vector.embeddings import DeterministicHashEmbedding
from chavis.vector.index import SimpleInMemoryVectorStore
from chavis.vector.knowledge_index import KnowledgeIndex


class EchoGenerator(TextGenerator):
    """Answers with the length of the grounding context it received."""

    def __init__(self):
        super().__init__("echo-model")
        self.calls = []

    async def generate(self, context: str, question: str) -> str:
        self.calls.append((context, question))
        return f"context length: {len(context)}"


class FailingGenerator(TextGenerator):
    def __init__(self):
        super().__init__("failing-model")

    async def generate(self, context: str, question: str) -> str:
        raise UpstreamGenerationFailure("connection refused")

    async def health_check(self) -> bool:
        return False


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "chavis.db")


@pytest.fixture
def store(db_path):
    return KnowledgeStore(db_path)


@pytest.fixture
def unanswered_log(db_path):
    return UnansweredLog(db_path)


@pytest.fixture
def embedder():
    return DeterministicHashEmbedding(dimension=32)


@pytest.fixture
def vector_store():
    return SimpleInMemoryVectorStore()


@pytest.fixture
def index(vector_store, embedder):
    return KnowledgeIndex(vector_store, embedder)


@pytest.fixture
def echo_generator():
    return EchoGenerator()


@pytest.fixture
def failing_generator():
    return FailingGenerator()


@pytest.fixture
def make_client(db_path, embedder):
    """Build a TestClient around services with injectable fakes."""
    def _make(vector_store=None, generator=None):
        services = build_services(
            db_path=db_path,
            vector_store=vector_store or SimpleInMemoryVectorStore(),
            embedding_provider=embedder,
            generator=generator or EchoGenerator(),
        )
        app = create_app(services=services, reindex_on_startup=False)
        return TestClient(app), services

    return _make
