"""
Tests for the in-memory vector store.
"""

import numpy as np
from chavis.vector.index import IVectorStore, SimpleInMemoryVectorStore
from chavis.vector.types import VectorRecord


def test_vector_store_interface():
    """Test that SimpleInMemoryVectorStore implements IVectorStore interface."""
    store = SimpleInMemoryVectorStore()

    assert isinstance(store, IVectorStore)


def test_add_single_record():
    """Test adding a single vector record."""
    store = SimpleInMemoryVectorStore()

    store.add(VectorRecord(
        id="test_id",
        vector=np.array([1.0, 0.0, 0.0]),
        text="hello",
        metadata={"key": "value"}
    ))

    results = store.search(np.array([1.0, 0.0, 0.0]), top_k=1)
    assert len(results) == 1
    assert results[0].id == "test_id"
    assert results[0].text == "hello"
    assert results[0].metadata["key"] == "value"


def test_add_replaces_existing_id():
    store = SimpleInMemoryVectorStore()

    store.add(VectorRecord(id="doc", vector=np.array([1.0, 0.0]), text="old"))
    store.add(VectorRecord(id="doc", vector=np.array([0.0, 1.0]), text="new"))

    results = store.search(np.array([0.0, 1.0]), top_k=5)
    assert len(results) == 1
    assert results[0].text == "new"


def test_search_similarity_order():
    """Test that search returns results ordered by similarity."""
    store = SimpleInMemoryVectorStore()

    store.batch_add([
        VectorRecord(id="a", vector=np.array([1.0, 0.0]), text="vector a"),
        VectorRecord(id="b", vector=np.array([0.0, 1.0]), text="vector b"),
    ])

    results = store.search(np.array([1.0, 0.1]), top_k=2)
    assert [r.id for r in results] == ["a", "b"]


def test_top_k_limits_results():
    store = SimpleInMemoryVectorStore()
    store.batch_add([
        VectorRecord(id=f"r{i}", vector=np.array([1.0, float(i)]), text=str(i)) for i in range(8)
    ])

    assert len(store.search(np.array([1.0, 1.0]), top_k=5)) == 5


def test_delete_and_unknown_delete():
    store = SimpleInMemoryVectorStore()
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0]), text="a"))

    store.delete("a")
    store.delete("never-added")

    assert store.ids() == []
    assert store.search(np.array([1.0, 0.0])) == []


def test_zero_query_vector_returns_nothing():
    store = SimpleInMemoryVectorStore()
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0]), text="a"))

    assert store.search(np.array([0.0, 0.0])) == []


def test_clear():
    store = SimpleInMemoryVectorStore()
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0]), text="a"))

    store.clear()

    assert store.ids() == []
