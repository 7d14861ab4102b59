"""
Vector index adapter for the knowledge projection.

Wraps an IVectorStore and an IEmbeddingProvider behind document-level
operations keyed by opaque document ids. Embedding and search run in a worker
thread so the event loop only suspends while they are in flight. The stores
are not thread-safe, so every store access is serialized on one lock; a query
sees the projection either before or after a concurrent write.
"""

import asyncio
import threading
from typing import Dict, List, Tuple

from ..core.errors import ProjectionSyncFailure, UpstreamRetrievalFailure
from ..core.schema import KnowledgeItem, RetrievedDocument
from ..util.logging import logger
from .embeddings import IEmbeddingProvider
from .index import IVectorStore
from .types import VectorRecord

KNOWLEDGE_DOC_PREFIX = "knowledge_"


def knowledge_document_id(item_id: str) -> str:
    return f"{KNOWLEDGE_DOC_PREFIX}{item_id}"


def knowledge_document(item: KnowledgeItem) -> Tuple[str, Dict[str, object]]:
    """Document text and scalar metadata projected from a knowledge item."""
    metadata = {
        "source": "knowledge",
        "knowledge_id": item.id,
        "keywords": ", ".join(item.keywords),
        "reference_link": item.reference_link,
    }
    return item.answer, metadata


class KnowledgeIndex:
    """Add/update/delete/query documents in the vector projection."""

    def __init__(self, vector_store: IVectorStore, embedding_provider: IEmbeddingProvider):
        self.vector_store = vector_store
        self.embedding_provider = embedding_provider
        self._lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return self.vector_store.__class__.__name__

    def _upsert(self, doc_id: str, text: str, metadata: Dict[str, object]) -> None:
        record = VectorRecord(
            id=doc_id,
            vector=self.embedding_provider.embed_text(text),
            text=text,
            metadata=dict(metadata or {}),
        )
        with self._lock:
            self.vector_store.add(record)

    def _remove(self, doc_id: str) -> None:
        with self._lock:
            self.vector_store.delete(doc_id)

    async def _write(self, operation: str, doc_id: str, func, *args) -> None:
        try:
            await asyncio.to_thread(func, *args)
        except Exception as e:
            logger.log_vector_operation(operation, doc_id, {
                "provider": self.provider_name,
                "error": str(e)[:100]
            }, status="failed")
            raise ProjectionSyncFailure(operation, doc_id, e) from e

        logger.log_vector_operation(operation, doc_id, {"provider": self.provider_name})

    async def add(self, doc_id: str, text: str, metadata: Dict[str, object] = None) -> None:
        await self._write("add", doc_id, self._upsert, doc_id, text, metadata)

    async def update(self, doc_id: str, text: str, metadata: Dict[str, object] = None) -> None:
        """Replace the document in place under the same id."""
        await self._write("update", doc_id, self._upsert, doc_id, text, metadata)

    async def delete(self, doc_id: str) -> None:
        await self._write("delete", doc_id, self._remove, doc_id)

    def _search(self, text: str, n_results: int) -> List[RetrievedDocument]:
        query_embedding = self.embedding_provider.embed_text(text)
        with self._lock:
            results = self.vector_store.search(query_embedding, n_results)
        return [RetrievedDocument(text=r.text, metadata=dict(r.metadata or {})) for r in results]

    async def query(self, text: str, n_results: int = 5) -> List[RetrievedDocument]:
        """Nearest documents to the text, in provider order."""
        try:
            return await asyncio.to_thread(self._search, text, n_results)
        except Exception as e:
            raise UpstreamRetrievalFailure(f"vector query failed: {e}") from e

    def document_ids(self) -> List[str]:
        with self._lock:
            return self.vector_store.ids()

    def clear(self) -> None:
        with self._lock:
            self.vector_store.clear()
