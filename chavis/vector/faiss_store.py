"""
FAISS-backed vector store.
Non-canonical, advisory layer over the SQLite knowledge store.
"""

from typing import List
import faiss
import numpy as np

from .types import VectorRecord, QueryResult
from .index import IVectorStore


class FaissVectorStore(IVectorStore):
    """FAISS-backed implementation of IVectorStore.

    Uses an IndexIDMap2 over a flat inner-product index so records can be
    removed and replaced by id. Vectors are normalized, making the inner
    product a cosine similarity.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension
        self.index = faiss.IndexIDMap2(faiss.IndexFlatIP(dimension))

        # record id <-> faiss int64 id
        self.id_to_vector_index = {}
        self.vector_id_map = {}
        self.records = {}  # record id -> VectorRecord (text and metadata)
        self.next_vector_index = 0

    def _prepare(self, record: VectorRecord):
        vector = np.asarray(record.vector, dtype=np.float32)
        if vector.size != self.dimension:
            raise ValueError(f"Vector dimension {vector.size} does not match expected dimension {self.dimension}")

        norm = np.linalg.norm(vector)
        if norm == 0:
            raise ValueError(f"Cannot index zero vector for record '{record.id}'")
        return (vector / norm).reshape(1, -1)

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record, replacing an existing record with the same id."""
        vector_array = self._prepare(record)

        if record.id in self.id_to_vector_index:
            self.delete(record.id)

        vector_index = self.next_vector_index
        self.next_vector_index += 1

        self.index.add_with_ids(vector_array, np.array([vector_index], dtype=np.int64))
        self.id_to_vector_index[record.id] = vector_index
        self.vector_id_map[vector_index] = record.id
        self.records[record.id] = record

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the FAISS store."""
        for record in records:
            self.add(record)

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if not self.index.ntotal:
            return []

        query_vector = np.asarray(query_vector, dtype=np.float32)
        norm = np.linalg.norm(query_vector)
        if norm == 0:
            return []

        query_array = (query_vector / norm).reshape(1, -1)
        scores, indices = self.index.search(query_array, min(top_k, self.index.ntotal))

        query_results = []
        for score, vector_index in zip(scores[0], indices[0]):
            record_id = self.vector_id_map.get(int(vector_index))
            if record_id is None:
                continue  # faiss pads missing neighbours with -1
            record = self.records[record_id]
            query_results.append(QueryResult(
                id=record_id,
                score=float(score),
                text=record.text,
                metadata=record.metadata
            ))

        return query_results

    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        vector_index = self.id_to_vector_index.pop(record_id, None)
        if vector_index is None:
            return

        self.index.remove_ids(np.array([vector_index], dtype=np.int64))
        del self.vector_id_map[vector_index]
        self.records.pop(record_id, None)

    def ids(self) -> List[str]:
        return list(self.id_to_vector_index)

    def clear(self) -> None:
        """Clear all records from the FAISS store."""
        self.index = faiss.IndexIDMap2(faiss.IndexFlatIP(self.dimension))
        self.id_to_vector_index.clear()
        self.vector_id_map.clear()
        self.records.clear()
        self.next_vector_index = 0
