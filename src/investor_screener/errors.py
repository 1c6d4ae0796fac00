"""
Exception hierarchy for the investor screener.

Every error carries a ``context`` dict for structured logging. Library
exceptions (openai, httpx, asyncio timeouts) are mapped into the hierarchy
at the client boundary by ``wrap_openai_error`` and ``wrap_fetch_error``;
pipeline components convert these into missing data rather than letting
them reach the caller.
"""

import asyncio
from typing import Any

import httpx
import openai


class InvestorScreenerError(Exception):
    """Base exception for all investor screener errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Client Errors
# =============================================================================


class ClientError(InvestorScreenerError):
    """Failure talking to an external service."""


class OpenAIError(ClientError):
    """An OpenAI call failed after any retries."""


class OpenAIRateLimitError(OpenAIError):
    """Still rate limited once the retry budget was spent."""


class OpenAIModelError(OpenAIError):
    """The model refused the request."""


class FetchError(ClientError):
    """A web page could not be fetched."""


class FetchTimeoutError(FetchError):
    """The fetch exceeded its wall-clock timeout."""


class FetchStatusError(FetchError):
    """The server answered with a non-success HTTP status."""


class FetchNetworkError(FetchError):
    """DNS, TLS or connection failure."""


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(InvestorScreenerError):
    """Failure inside a screening component."""


class ExtractionError(PipelineError):
    """The model answered but produced nothing usable."""


# =============================================================================
# Wrapping
# =============================================================================

_REFUSAL_MARKERS = ('content policy', 'content_policy', 'refused')


def wrap_openai_error(exc: Exception, context: dict[str, Any] | None = None) -> OpenAIError:
    """
    Map an exception raised during an OpenAI call into the hierarchy.

    SDK exception types are checked first; anything else is classified
    from its message.
    """
    ctx = {**(context or {}), 'original_error': str(exc), 'error_type': type(exc).__name__}
    text = str(exc).lower()

    if isinstance(exc, openai.RateLimitError) or 'rate limit' in text or 'rate_limit' in text:
        return OpenAIRateLimitError(f"OpenAI rate limit exceeded: {exc}", context=ctx)

    if isinstance(exc, openai.APIStatusError):
        ctx['status_code'] = exc.status_code
    if any(marker in text for marker in _REFUSAL_MARKERS):
        return OpenAIModelError(f"OpenAI model refused request: {exc}", context=ctx)

    return OpenAIError(f"OpenAI API error: {exc}", context=ctx)


def wrap_fetch_error(exc: Exception, url: str) -> FetchError:
    """
    Map an httpx or timeout exception raised while fetching ``url``.

    Status errors record ``status_code`` in the context.
    """
    ctx: dict[str, Any] = {
        'url': url,
        'original_error': str(exc),
        'error_type': type(exc).__name__,
    }

    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return FetchTimeoutError(f"Fetch timed out: {url}", context=ctx)

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        ctx['status_code'] = status
        return FetchStatusError(f"HTTP {status} fetching {url}", context=ctx)

    return FetchNetworkError(f"Network error fetching {url}: {exc}", context=ctx)
