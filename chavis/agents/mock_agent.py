"""
Mock generator that answers without an external model.
Used for development and when Ollama is not installed.
"""

from .agent import TextGenerator


class MockGenerator(TextGenerator):
    """Returns the first grounding paragraph as the answer."""

    def __init__(self, model_name: str = "mock-model"):
        super().__init__(model_name)
        self.calls = []

    async def generate(self, context: str, question: str) -> str:
        self.calls.append((context, question))
        first_paragraph = context.split("\n\n", 1)[0].strip()
        return first_paragraph
