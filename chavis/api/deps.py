"""
Service wiring for the HTTP layer.

Adapters are built once per application and injected into the cascade and the
administration service; routes reach them through FastAPI dependencies.
"""

from dataclasses import dataclass

from fastapi import Request

from ..agents.agent import TextGenerator
from ..agents.orchestrator import AnsweringCascade
from ..core import config
from ..core.dao import KnowledgeStore, UnansweredLog
from ..core.exact_match import ExactMatchResolver
from ..core.knowledge_admin import KnowledgeAdminService
from ..core.search_service import RetrievalAugmentedResolver
from ..vector.knowledge_index import KnowledgeIndex


@dataclass
class AppServices:
    store: KnowledgeStore
    unanswered: UnansweredLog
    index: KnowledgeIndex
    generator: TextGenerator
    admin: KnowledgeAdminService
    cascade: AnsweringCascade


def build_services(db_path: str = None, vector_store=None, embedding_provider=None,
                   generator: TextGenerator = None, top_k: int = None) -> AppServices:
    """Construct every adapter and service, falling back to configured providers."""
    store = KnowledgeStore(db_path)
    unanswered = UnansweredLog(db_path)

    embedding_provider = embedding_provider or config.get_embedding_provider()
    vector_store = vector_store or config.get_vector_store(embedding_provider.get_dimension())
    index = KnowledgeIndex(vector_store, embedding_provider)

    generator = generator or config.get_generator()

    cascade = AnsweringCascade(
        exact_resolver=ExactMatchResolver(store),
        rag_resolver=RetrievalAugmentedResolver(index, generator, top_k=top_k or config.RAG_TOP_K),
        unanswered_log=unanswered,
        refusal_message=config.REFUSAL_MESSAGE,
    )

    return AppServices(
        store=store,
        unanswered=unanswered,
        index=index,
        generator=generator,
        admin=KnowledgeAdminService(store, index),
        cascade=cascade,
    )


def ensure_services(app) -> AppServices:
    """Return the app's services, building them from configuration on first use."""
    if getattr(app.state, "services", None) is None:
        app.state.services = build_services()
    return app.state.services


def get_services(request: Request) -> AppServices:
    return ensure_services(request.app)
