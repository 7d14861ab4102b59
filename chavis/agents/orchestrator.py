"""
Answering cascade: exact match, then retrieval-augmented generation, then
unanswered-question logging.

Exact keyword matches are curated ground truth. They are always tried first
and a generated answer never replaces one.
"""

from enum import Enum

from ..core.config import REFUSAL_MESSAGE
from ..core.dao import UnansweredLog
from ..core.errors import UpstreamGenerationFailure, ValidationError
from ..core.exact_match import ExactMatchResolver
from ..core.schema import CascadeResponse
from ..core.search_service import RetrievalAugmentedResolver
from ..util.logging import logger


class CascadeOutcome(str, Enum):
    EXACT_MATCH = "EXACT_MATCH"
    NO_MATCH = "NO_MATCH"
    GENERATED = "GENERATED"
    GENERATION_FAILED = "GENERATION_FAILED"


RESPONSE_TYPES = {
    CascadeOutcome.EXACT_MATCH: "exact_match",
    CascadeOutcome.NO_MATCH: "no_match",
    CascadeOutcome.GENERATED: "rag",
}


class AnsweringCascade:
    """Sequences the resolvers for one question and shapes the response."""

    def __init__(self, exact_resolver: ExactMatchResolver, rag_resolver: RetrievalAugmentedResolver,
                 unanswered_log: UnansweredLog, refusal_message: str = REFUSAL_MESSAGE):
        self.exact_resolver = exact_resolver
        self.rag_resolver = rag_resolver
        self.unanswered_log = unanswered_log
        self.refusal_message = refusal_message

    async def answer(self, question: str) -> CascadeResponse:
        """
        Resolve a question.

        Raises:
            ValidationError: question is not a non-blank string
            UpstreamGenerationFailure: generation failed; the question has
                already been logged as unanswered
        """
        if not isinstance(question, str) or not question.strip():
            raise ValidationError("question must be a non-empty string")

        question = question.strip()

        match = self.exact_resolver.resolve(question)
        if match is not None:
            logger.log_cascade_outcome(CascadeOutcome.EXACT_MATCH.value, question, {
                "knowledge_id": match.item.id,
                "keyword": match.matched_keyword
            })
            return CascadeResponse(
                answer=match.answer,
                type=RESPONSE_TYPES[CascadeOutcome.EXACT_MATCH],
                sources=[],
                matched_keyword=match.matched_keyword,
                reference_link=match.reference_link,
            )

        try:
            result = await self.rag_resolver.resolve(question)
        except UpstreamGenerationFailure as e:
            self.unanswered_log.append(question)
            logger.log_cascade_outcome(CascadeOutcome.GENERATION_FAILED.value, question, {"error": str(e)[:100]})
            raise

        if result.exhausted:
            self.unanswered_log.append(question)
            logger.log_cascade_outcome(CascadeOutcome.NO_MATCH.value, question, {
                "retrieval_degraded": result.retrieval_degraded
            })
            return CascadeResponse(
                answer=self.refusal_message,
                type=RESPONSE_TYPES[CascadeOutcome.NO_MATCH],
                sources=[],
            )

        logger.log_cascade_outcome(CascadeOutcome.GENERATED.value, question, {"sources": len(result.sources)})
        return CascadeResponse(
            answer=result.answer,
            type=RESPONSE_TYPES[CascadeOutcome.GENERATED],
            sources=result.sources,
        )
