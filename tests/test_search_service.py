"""
Tests for the retrieval-augmented resolver.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from chavis.core.errors import UpstreamGenerationFailure, UpstreamRetrievalFailure
from chavis.core.schema import RetrievedDocument
from chavis.core.search_service import RetrievalAugmentedResolver, build_context


def _index_returning(documents):
    index = MagicMock()
    index.provider_name = "MockStore"
    index.query = AsyncMock(return_value=documents)
    return index


def test_build_context_joins_with_blank_line():
    docs = [RetrievedDocument("first", {}), RetrievedDocument("second", {})]

    assert build_context(docs) == "first\n\nsecond"


@pytest.mark.asyncio
async def test_queries_top_five(echo_generator):
    index = _index_returning([])
    resolver = RetrievalAugmentedResolver(index, echo_generator)

    await resolver.resolve("vacation policy")

    index.query.assert_awaited_once_with("vacation policy", n_results=5)


@pytest.mark.asyncio
async def test_empty_retrieval_is_exhausted_and_skips_generation(echo_generator):
    resolver = RetrievalAugmentedResolver(_index_returning([]), echo_generator)

    result = await resolver.resolve("vacation policy")

    assert result.exhausted is True
    assert result.sources == []
    assert echo_generator.calls == []


@pytest.mark.asyncio
async def test_blank_documents_are_discarded(echo_generator):
    docs = [RetrievedDocument("", {}), RetrievedDocument("   ", {}), RetrievedDocument(None, {})]
    resolver = RetrievalAugmentedResolver(_index_returning(docs), echo_generator)

    result = await resolver.resolve("question")

    assert result.exhausted is True


@pytest.mark.asyncio
async def test_generation_receives_context_in_retrieval_order(echo_generator):
    docs = [
        RetrievedDocument("Batteries are in the third drawer.", {"source": "office_guide"}),
        RetrievedDocument("", {}),
        RetrievedDocument("Welcome dinner is the last Friday.", {"source": "office_guide"}),
    ]
    resolver = RetrievalAugmentedResolver(_index_returning(docs), echo_generator)

    result = await resolver.resolve("office info")

    context, question = echo_generator.calls[0]
    assert context == "Batteries are in the third drawer.\n\nWelcome dinner is the last Friday."
    assert question == "office info"
    assert result.exhausted is False
    assert [s.text for s in result.sources] == [docs[0].text, docs[2].text]
    assert result.answer == f"context length: {len(context)}"


@pytest.mark.asyncio
async def test_retrieval_failure_degrades_to_exhausted(echo_generator):
    index = _index_returning([])
    index.query.side_effect = UpstreamRetrievalFailure("unreachable")
    resolver = RetrievalAugmentedResolver(index, echo_generator)

    result = await resolver.resolve("question")

    assert result.exhausted is True
    assert result.retrieval_degraded is True
    assert echo_generator.calls == []


@pytest.mark.asyncio
async def test_generation_failure_propagates(failing_generator):
    resolver = RetrievalAugmentedResolver(_index_returning([RetrievedDocument("doc", {})]), failing_generator)

    with pytest.raises(UpstreamGenerationFailure):
        await resolver.resolve("question")


@pytest.mark.asyncio
async def test_unexpected_generator_error_becomes_generation_failure():
    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=RuntimeError("boom"))
    resolver = RetrievalAugmentedResolver(_index_returning([RetrievedDocument("doc", {})]), generator)

    with pytest.raises(UpstreamGenerationFailure):
        await resolver.resolve("question")
