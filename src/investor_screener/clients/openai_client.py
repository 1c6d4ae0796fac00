"""
OpenAI client wrapper for the investor screening pipeline.

Handles:
- Chat completions with optional JSON-object response mode
- Retry with exponential backoff for rate-limited requests only
- Mapping SDK exceptions into the screener error hierarchy
"""

import os

from openai import AsyncOpenAI, RateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import config
from ..errors import OpenAIError, wrap_openai_error


class OpenAIClient:
    """
    Async OpenAI client used by every LLM-calling component.

    One instance is created at application start-up and passed to the
    enricher, profiler, fit assessor and describer.

    Configuration via environment variables:
    - OPENAI_API_KEY: Required API key
    - OPENAI_CHAT_MODEL: Chat model (default: gpt-4o-mini)
    """

    def __init__(
        self,
        api_key: str | None = None,
        chat_model: str | None = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            chat_model: Model for chat completions (defaults to OPENAI_CHAT_MODEL or gpt-4o-mini)
        """
        self.api_key = api_key or os.getenv('OPENAI_API_KEY')
        if not self.api_key:
            raise ValueError('OPENAI_API_KEY environment variable is required')

        self.chat_model = chat_model or os.getenv('OPENAI_CHAT_MODEL', 'gpt-4o-mini')

        self._client = AsyncOpenAI(api_key=self.api_key)

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """
        Get a chat completion response.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Override the default chat model
            temperature: Sampling temperature (0.0 for deterministic)
            max_tokens: Maximum tokens in response
            json_mode: Ask the model for a single JSON object

        Returns:
            The assistant's response text (empty string if none)

        Raises:
            OpenAIError: If the request fails after any rate-limit retries
        """
        try:
            return await self._create(
                messages=messages,
                model=model or self.chat_model,
                temperature=temperature,
                max_tokens=max_tokens,
                json_mode=json_mode,
            )
        except OpenAIError:
            raise
        except Exception as e:
            raise wrap_openai_error(e, context={'model': model or self.chat_model})

    @retry(
        retry=retry_if_exception_type(RateLimitError),
        stop=stop_after_attempt(config.OPENAI_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _create(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: int | None,
        json_mode: bool,
    ) -> str:
        kwargs = {}
        if json_mode:
            kwargs['response_format'] = {'type': 'json_object'}

        response = await self._client.chat.completions.create(
            model=model,
            messages=messages,  # type: ignore
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
        if not response.choices:
            return ''
        return response.choices[0].message.content or ''

    async def health_check(self) -> dict[str, bool | str]:
        """
        Verify API connectivity with a minimal request.

        Returns:
            Dict with 'healthy' bool and optional 'error' message
        """
        try:
            await self._client.models.retrieve(self.chat_model)
            return {
                'healthy': True,
                'chat_model': self.chat_model,
            }
        except Exception as e:
            return {'healthy': False, 'error': str(e)}

    async def close(self):
        """Close the client connection."""
        await self._client.close()
