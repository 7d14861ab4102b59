"""
Vector store interface and the in-memory implementation.
Non-canonical, advisory layer over the SQLite knowledge store.
"""

from abc import ABC, abstractmethod
from typing import List
import numpy as np

from .types import VectorRecord, QueryResult


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def add(self, record: VectorRecord) -> None:
        """Add a single vector record, replacing any record with the same id."""
        pass

    @abstractmethod
    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        pass

    @abstractmethod
    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        pass

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID. Unknown ids are ignored."""
        pass

    @abstractmethod
    def ids(self) -> List[str]:
        """Return the ids of all stored records."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all records from the store."""
        pass


class SimpleInMemoryVectorStore(IVectorStore):
    """Simple in-memory implementation of IVectorStore using cosine similarity."""

    def __init__(self):
        self._vectors = {}  # record_id -> VectorRecord
        self._index = {}    # record_id -> normalized_vector

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        self._vectors[record.id] = record

        # Store normalized vector for similarity calculations
        vector = np.asarray(record.vector, dtype=np.float32)
        norm = np.linalg.norm(vector)
        self._index[record.id] = vector / norm if norm > 0 else vector

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        for record in records:
            self.add(record)

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if not self._index:
            return []

        query_vector = np.asarray(query_vector, dtype=np.float32)
        norm = np.linalg.norm(query_vector)
        if norm == 0:
            return []

        normalized_query = query_vector / norm

        similarities = {
            record_id: float(np.dot(normalized_query, stored_vector))
            for record_id, stored_vector in self._index.items()
        }

        # Sort by similarity (descending) and return top_k results
        sorted_results = sorted(similarities.items(), key=lambda x: x[1], reverse=True)

        query_results = []
        for record_id, score in sorted_results[:top_k]:
            original_record = self._vectors[record_id]
            query_results.append(QueryResult(
                id=original_record.id,
                score=score,
                text=original_record.text,
                metadata=original_record.metadata
            ))

        return query_results

    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        self._vectors.pop(record_id, None)
        self._index.pop(record_id, None)

    def ids(self) -> List[str]:
        return list(self._vectors)

    def clear(self) -> None:
        """Clear all records from the store."""
        self._vectors.clear()
        self._index.clear()
