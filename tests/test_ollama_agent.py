"""
Tests for the Ollama generation adapter and prompt framing.
"""

from unittest.mock import AsyncMock, MagicMock

import ollama
import pytest

from chavis.agents.agent import build_messages, build_system_prompt
from chavis.agents.mock_agent import MockGenerator
from chavis.agents.ollama_agent import OllamaGenerator
from chavis.core.config import REFUSAL_MESSAGE
from chavis.core.errors import UpstreamGenerationFailure


def test_system_prompt_contains_exact_refusal_sentence():
    assert f"\"{REFUSAL_MESSAGE}\"" in build_system_prompt()


def test_messages_carry_context_and_question():
    messages = build_messages("건전지는 탕비실에 있습니다.", "건전지 어디?")

    assert [m["role"] for m in messages] == ["system", "user"]
    assert "[사내 지식]\n건전지는 탕비실에 있습니다." in messages[1]["content"]
    assert messages[1]["content"].endswith("[질문]\n건전지 어디?")


@pytest.mark.asyncio
async def test_generate_calls_chat_with_model_and_messages():
    client = MagicMock()
    client.chat = AsyncMock(return_value={"message": {"content": "탕비실 세 번째 서랍입니다."}})
    generator = OllamaGenerator("llama3", client=client, temperature=0.1)

    answer = await generator.generate("context", "question")

    assert answer == "탕비실 세 번째 서랍입니다."
    kwargs = client.chat.call_args.kwargs
    assert kwargs["model"] == "llama3"
    assert kwargs["messages"] == build_messages("context", "question")
    assert kwargs["options"] == {"temperature": 0.1}


@pytest.mark.asyncio
async def test_response_error_becomes_generation_failure():
    client = MagicMock()
    client.chat = AsyncMock(side_effect=ollama.ResponseError("model not found"))
    generator = OllamaGenerator("missing-model", client=client)

    with pytest.raises(UpstreamGenerationFailure):
        await generator.generate("context", "question")


@pytest.mark.asyncio
async def test_connection_error_becomes_generation_failure():
    client = MagicMock()
    client.chat = AsyncMock(side_effect=ConnectionError("Failed to connect to Ollama"))
    generator = OllamaGenerator("llama3", client=client)

    with pytest.raises(UpstreamGenerationFailure):
        await generator.generate("context", "question")


@pytest.mark.asyncio
async def test_health_check():
    client = MagicMock()
    client.list = AsyncMock(return_value={"models": []})
    assert await OllamaGenerator("llama3", client=client).health_check() is True

    client.list = AsyncMock(side_effect=ConnectionError("down"))
    assert await OllamaGenerator("llama3", client=client).health_check() is False


@pytest.mark.asyncio
async def test_mock_generator_returns_first_paragraph():
    generator = MockGenerator()

    answer = await generator.generate("first doc\n\nsecond doc", "question")

    assert answer == "first doc"
    assert generator.calls == [("first doc\n\nsecond doc", "question")]
