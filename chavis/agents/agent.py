"""
Text generation adapter interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..core.config import REFUSAL_MESSAGE


def build_system_prompt(refusal_message: str = REFUSAL_MESSAGE) -> str:
    """Fixed framing that limits the answer to the supplied context."""
    return (
        "당신은 사내 지식 가이드 챗봇(CHAVIS)입니다. "
        "아래 [사내 지식]만을 참고하여 질문에 친절하고 정확하게 답변하세요. "
        f"참고 자료에 없는 내용은 \"{refusal_message}\"라고 답하세요."
    )


def build_user_prompt(context: str, question: str) -> str:
    return f"[사내 지식]\n{context}\n\n[질문]\n{question}"


def build_messages(context: str, question: str, refusal_message: str = REFUSAL_MESSAGE) -> List[Dict[str, str]]:
    """Chat messages for one grounded question."""
    return [
        {'role': 'system', 'content': build_system_prompt(refusal_message)},
        {'role': 'user', 'content': build_user_prompt(context, question)},
    ]


class TextGenerator(ABC):
    """
    Abstract base class for text generation providers.
    Implementations raise UpstreamGenerationFailure when the provider call fails.
    """

    def __init__(self, model_name: str):
        self.model_name = model_name

    @abstractmethod
    async def generate(self, context: str, question: str) -> str:
        """
        Answer the question using only the grounding context.

        Args:
            context: Concatenated retrieved document text
            question: The user's trimmed question

        Returns:
            The generated answer text
        """
        pass

    async def health_check(self) -> bool:
        return True

    def get_status(self) -> Dict[str, Any]:
        """Get current status of this generator."""
        return {
            "model_name": self.model_name,
            "generator_type": self.__class__.__name__,
        }
