"""
LLM Client using LiteLLM for OpenAI-compatible chat completions.

Switch providers by changing the model string:
    - "xai/grok-3-fast" (xAI)
    - "gpt-4o" (OpenAI)
    - "claude-sonnet-4-5-20250929" (Anthropic)

The client is built once at startup (see build_llm_client) and handed to the
agents that need it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import litellm
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from config.settings import Settings, settings as default_settings
from core import ConfigurationError, ExternalCallError, get_logger

logger = get_logger(__name__)

# Configure LiteLLM
litellm.set_verbose = False  # Set True for debugging


@dataclass
class LLMResponse:
    """Response from an LLM call, including content and token usage."""
    content: str
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


class LLMClient:
    """
    Chat completions client.

    Usage:
        client = LLMClient(api_key="...", api_base="https://api.x.ai/v1")
        response = await client.chat("xai/grok-3-fast", messages=[...])
    """

    def __init__(
        self,
        api_key: str,
        api_base: Optional[str] = None,
        max_retries: int = 3,
    ):
        """
        Args:
            api_key: Key for the chat completions endpoint
            api_base: Endpoint base URL (None lets LiteLLM pick the provider default)
            max_retries: Attempts per call before the error is surfaced
        """
        self.api_key = api_key
        self.api_base = api_base
        self.max_retries = max_retries
        logger.info("LLM client initialized", api_base=api_base, max_retries=max_retries)

    async def chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.8,
        max_tokens: int = 800,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Generate a chat completion.

        Args:
            model: Model identifier
            messages: List of {"role", "content"} dicts, system message first
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            **kwargs: Additional parameters passed to LiteLLM

        Returns:
            LLMResponse with the raw reply text and token usage

        Raises:
            ConfigurationError: No API key configured
            ExternalCallError: The endpoint failed or returned no usable content
        """
        if not self.api_key:
            raise ConfigurationError("LLM_API_KEY", "not set")

        logger.debug(
            "LLM request",
            model=model,
            message_count=len(messages),
            temperature=temperature,
        )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                reraise=True,
            ):
                with attempt:
                    response = await litellm.acompletion(
                        model=model,
                        messages=messages,
                        temperature=temperature,
                        max_tokens=max_tokens,
                        api_key=self.api_key,
                        api_base=self.api_base,
                        **kwargs,
                    )
        except Exception as e:
            logger.error("LLM request failed", model=model, error=str(e))
            raise ExternalCallError(
                status_code=getattr(e, "status_code", None),
                details=str(e),
            ) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error("LLM response malformed", model=model, error=str(e))
            raise ExternalCallError(details=f"malformed response: {e}") from e

        if not isinstance(content, str):
            raise ExternalCallError(details="response has no text content")

        usage = getattr(response, "usage", None)
        input_tokens = getattr(usage, "prompt_tokens", 0) or 0
        output_tokens = getattr(usage, "completion_tokens", 0) or 0
        total_tokens = getattr(usage, "total_tokens", 0) or 0

        logger.debug(
            "LLM response",
            model=model,
            total_tokens=total_tokens,
            response_length=len(content),
            finish_reason=getattr(response.choices[0], "finish_reason", None),
        )

        # Log truncated response for debugging at DEBUG level
        if len(content) > 200:
            truncated = f"{content[:100]}...{content[-100:]}"
        else:
            truncated = content
        logger.debug("LLM response preview", model=model, response_preview=truncated)

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
        )

    async def chat_with_system(
        self,
        model: str,
        system_prompt: str,
        user_message: str,
        **kwargs: Any,
    ) -> LLMResponse:
        """Convenience method for a single user message under a system prompt."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        return await self.chat(model=model, messages=messages, **kwargs)


def build_llm_client(config: Settings = default_settings) -> LLMClient:
    """Create the process-wide client from settings."""
    return LLMClient(
        api_key=config.LLM_API_KEY,
        api_base=config.LLM_API_BASE,
        max_retries=config.LLM_MAX_RETRIES,
    )
