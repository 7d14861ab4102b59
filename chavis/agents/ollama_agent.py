"""
Ollama-backed text generation adapter.
"""

from datetime import datetime

import ollama

from .agent import TextGenerator, build_messages
from ..core.config import REFUSAL_MESSAGE
from ..core.errors import UpstreamGenerationFailure
from ..util.logging import logger


class OllamaGenerator(TextGenerator):
    """
    Generator that calls a local Ollama instance through its async client.
    The client is created per instance and injected into the cascade.
    """

    def __init__(self, model_name: str, host: str = None, temperature: float = 0.2,
                 refusal_message: str = REFUSAL_MESSAGE, client: ollama.AsyncClient = None):
        super().__init__(model_name)
        self.host = host
        self.temperature = temperature
        self.refusal_message = refusal_message
        self.client = client or ollama.AsyncClient(host=host)

    async def generate(self, context: str, question: str) -> str:
        messages = build_messages(context, question, self.refusal_message)
        start_time = datetime.now()

        try:
            response = await self.client.chat(
                model=self.model_name,
                messages=messages,
                options={'temperature': self.temperature}
            )
        except ollama.ResponseError as e:
            logger.log_operation("generation", "failed", {"model": self.model_name, "error": str(e)[:100]})
            raise UpstreamGenerationFailure(f"Ollama model error: {e}") from e
        except Exception as e:
            logger.log_operation("generation", "failed", {"model": self.model_name, "error": str(e)[:100]})
            raise UpstreamGenerationFailure(f"Ollama generation failed: {e}") from e

        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
        content = response['message']['content'] or ''

        logger.log_operation("generation", "success", {
            "model": self.model_name,
            "processing_time_ms": processing_time,
            "response_length": len(content)
        })
        return content

    async def health_check(self) -> bool:
        """Check if Ollama is reachable."""
        try:
            await self.client.list()
            return True
        except Exception:
            return False

    def get_status(self):
        status = super().get_status()
        status.update({'host': self.host or 'default', 'temperature': self.temperature})
        return status
