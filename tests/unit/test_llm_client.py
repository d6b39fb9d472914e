"""
Tests for the LiteLLM-backed client, with litellm.acompletion patched out.
"""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from config.settings import Settings
from core import ConfigurationError, ExternalCallError
from utils.llm_client import LLMClient, build_llm_client


def completion(content, total_tokens=42):
    """A minimal object shaped like a LiteLLM ModelResponse."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=30, completion_tokens=12, total_tokens=total_tokens),
    )


class APIError(Exception):
    def __init__(self, status_code):
        super().__init__(f"status {status_code}")
        self.status_code = status_code


MESSAGES = [{"role": "system", "content": "be nice"}, {"role": "user", "content": "hi"}]


class TestChat:
    """LLMClient.chat()"""

    async def test_returns_content_and_usage(self):
        client = LLMClient(api_key="key", api_base="https://api.example.com/v1", max_retries=1)

        with patch("utils.llm_client.litellm.acompletion", new=AsyncMock(return_value=completion("hello"))) as mock_call:
            response = await client.chat("xai/grok-3-fast", MESSAGES, temperature=0.8, max_tokens=800)

        assert response.content == "hello"
        assert response.total_tokens == 42
        assert response.input_tokens == 30
        kwargs = mock_call.call_args.kwargs
        assert kwargs["model"] == "xai/grok-3-fast"
        assert kwargs["messages"] == MESSAGES
        assert kwargs["max_tokens"] == 800
        assert kwargs["temperature"] == 0.8
        assert kwargs["api_base"] == "https://api.example.com/v1"

    async def test_missing_api_key(self):
        client = LLMClient(api_key="")

        with patch("utils.llm_client.litellm.acompletion", new=AsyncMock()) as mock_call:
            with pytest.raises(ConfigurationError):
                await client.chat("xai/grok-3-fast", MESSAGES)

        mock_call.assert_not_called()

    async def test_endpoint_error_wrapped(self):
        client = LLMClient(api_key="key", max_retries=1)

        with patch("utils.llm_client.litellm.acompletion", new=AsyncMock(side_effect=APIError(503))):
            with pytest.raises(ExternalCallError) as exc_info:
                await client.chat("xai/grok-3-fast", MESSAGES)

        assert exc_info.value.status_code == 503

    async def test_retries_then_succeeds(self):
        client = LLMClient(api_key="key", max_retries=2)
        mock_call = AsyncMock(side_effect=[APIError(502), completion("second time")])

        with patch("utils.llm_client.litellm.acompletion", new=mock_call):
            response = await client.chat("xai/grok-3-fast", MESSAGES)

        assert response.content == "second time"
        assert mock_call.call_count == 2

    async def test_malformed_response(self):
        client = LLMClient(api_key="key", max_retries=1)

        with patch("utils.llm_client.litellm.acompletion", new=AsyncMock(return_value=SimpleNamespace(choices=[]))):
            with pytest.raises(ExternalCallError):
                await client.chat("xai/grok-3-fast", MESSAGES)

    async def test_chat_with_system_builds_messages(self):
        client = LLMClient(api_key="key", max_retries=1)

        with patch("utils.llm_client.litellm.acompletion", new=AsyncMock(return_value=completion("ok"))) as mock_call:
            await client.chat_with_system("m", "be nice", "hi")

        assert mock_call.call_args.kwargs["messages"] == MESSAGES


class TestBuildClient:
    """build_llm_client()"""

    def test_uses_settings(self):
        config = Settings(LLM_API_KEY="abc", LLM_API_BASE="https://api.example.com/v1/", LLM_MAX_RETRIES=5)

        client = build_llm_client(config)

        assert client.api_key == "abc"
        assert client.api_base == "https://api.example.com/v1"
        assert client.max_retries == 5
