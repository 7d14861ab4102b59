"""
Retrieval-augmented resolver: vector retrieval, grounding, constrained generation.
"""

from typing import List, Tuple

from .config import RAG_TOP_K
from .errors import UpstreamGenerationFailure, UpstreamRetrievalFailure
from .schema import RagResult, RetrievedDocument
from ..agents.agent import TextGenerator
from ..util.logging import logger
from ..vector.knowledge_index import KnowledgeIndex

CONTEXT_SEPARATOR = "\n\n"


def build_context(documents: List[RetrievedDocument]) -> str:
    """Join document texts in retrieval order, separated by a blank line."""
    return CONTEXT_SEPARATOR.join(doc.text for doc in documents)


class RetrievalAugmentedResolver:
    """Answers from the top-K nearest documents through the text generator."""

    def __init__(self, index: KnowledgeIndex, generator: TextGenerator, top_k: int = RAG_TOP_K):
        self.index = index
        self.generator = generator
        self.top_k = top_k

    async def retrieve(self, question: str) -> Tuple[List[RetrievedDocument], bool]:
        """
        Query the vector index, dropping documents without text.

        Returns:
            (documents, degraded) where degraded is True when the index query
            failed and the empty result stands in for it.
        """
        try:
            documents = await self.index.query(question, n_results=self.top_k)
        except UpstreamRetrievalFailure as e:
            logger.log_vector_operation("query", "-", {
                "provider": self.index.provider_name,
                "error": str(e)[:100]
            }, status="degraded")
            return [], True

        return [doc for doc in documents if doc.text and doc.text.strip()], False

    async def resolve(self, question: str) -> RagResult:
        """
        Raises:
            UpstreamGenerationFailure: the generator call failed
        """
        documents, degraded = await self.retrieve(question)

        if not documents:
            return RagResult(sources=[], answer="", exhausted=True, retrieval_degraded=degraded)

        try:
            answer = await self.generator.generate(build_context(documents), question)
        except UpstreamGenerationFailure:
            raise
        except Exception as e:
            raise UpstreamGenerationFailure(f"generation failed: {e}") from e

        return RagResult(sources=documents, answer=answer, exhausted=False)
