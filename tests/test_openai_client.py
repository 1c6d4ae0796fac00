"""
Tests for the OpenAI client wrapper.

The SDK client is replaced with mocks; no request leaves the process.
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from investor_screener.clients.openai_client import OpenAIClient
from investor_screener.errors import OpenAIError, OpenAIRateLimitError


def _response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


def _client_with(create: AsyncMock) -> OpenAIClient:
    client = OpenAIClient(api_key='sk-test', chat_model='gpt-4o-mini')
    client._client = MagicMock()
    client._client.chat.completions.create = create
    return client


class TestOpenAIClientInit:
    """Test construction."""

    def test_requires_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError):
                OpenAIClient()

    def test_model_defaults(self):
        with patch.dict(os.environ, {'OPENAI_API_KEY': 'sk-env'}, clear=True):
            client = OpenAIClient()

        assert client.api_key == 'sk-env'
        assert client.chat_model == 'gpt-4o-mini'


class TestChatCompletion:
    """Test chat completions."""

    @pytest.mark.asyncio
    async def test_json_mode_sets_response_format(self):
        create = AsyncMock(return_value=_response('{"sectors": []}'))
        client = _client_with(create)

        text = await client.chat_completion(
            messages=[{'role': 'user', 'content': 'hi'}],
            max_tokens=1500,
            json_mode=True,
        )

        assert text == '{"sectors": []}'
        kwargs = create.await_args.kwargs
        assert kwargs['response_format'] == {'type': 'json_object'}
        assert kwargs['model'] == 'gpt-4o-mini'
        assert kwargs['max_tokens'] == 1500

    @pytest.mark.asyncio
    async def test_plain_mode_has_no_response_format(self):
        create = AsyncMock(return_value=_response('A short description.'))
        client = _client_with(create)

        await client.chat_completion(messages=[{'role': 'user', 'content': 'hi'}], temperature=0.7)

        kwargs = create.await_args.kwargs
        assert 'response_format' not in kwargs
        assert kwargs['temperature'] == 0.7

    @pytest.mark.asyncio
    async def test_empty_choices_returns_empty_string(self):
        response = MagicMock()
        response.choices = []
        client = _client_with(AsyncMock(return_value=response))

        assert await client.chat_completion(messages=[{'role': 'user', 'content': 'hi'}]) == ''

    @pytest.mark.asyncio
    async def test_null_content_returns_empty_string(self):
        client = _client_with(AsyncMock(return_value=_response(None)))

        assert await client.chat_completion(messages=[{'role': 'user', 'content': 'hi'}]) == ''

    @pytest.mark.asyncio
    async def test_failures_are_wrapped(self):
        client = _client_with(AsyncMock(side_effect=RuntimeError('connection reset')))

        with pytest.raises(OpenAIError) as exc_info:
            await client.chat_completion(messages=[{'role': 'user', 'content': 'hi'}])

        assert exc_info.value.context['model'] == 'gpt-4o-mini'
        assert exc_info.value.context['error_type'] == 'RuntimeError'

    @pytest.mark.asyncio
    async def test_rate_limit_message_maps_to_rate_limit_error(self):
        client = _client_with(AsyncMock(side_effect=RuntimeError('Rate limit reached')))

        with pytest.raises(OpenAIRateLimitError):
            await client.chat_completion(messages=[{'role': 'user', 'content': 'hi'}])


class TestHealthCheck:
    """Test connectivity checks."""

    @pytest.mark.asyncio
    async def test_healthy(self):
        client = OpenAIClient(api_key='sk-test', chat_model='gpt-4o-mini')
        client._client = MagicMock()
        client._client.models.retrieve = AsyncMock(return_value=MagicMock())

        assert await client.health_check() == {'healthy': True, 'chat_model': 'gpt-4o-mini'}

    @pytest.mark.asyncio
    async def test_unhealthy(self):
        client = OpenAIClient(api_key='sk-test')
        client._client = MagicMock()
        client._client.models.retrieve = AsyncMock(side_effect=RuntimeError('401 Unauthorized'))

        status = await client.health_check()

        assert status['healthy'] is False
        assert '401' in status['error']
