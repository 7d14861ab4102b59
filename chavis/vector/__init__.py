"""
Vector projection - non-canonical, advisory layer over the SQLite knowledge store.
"""

from .index import IVectorStore, SimpleInMemoryVectorStore
from .types import VectorRecord, QueryResult
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding
from .knowledge_index import KnowledgeIndex, knowledge_document, knowledge_document_id

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'VectorRecord',
    'QueryResult',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'KnowledgeIndex',
    'knowledge_document',
    'knowledge_document_id'
]
