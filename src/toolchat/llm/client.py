"""Built-in OpenAI-compatible async httpx client.

Provides the two completion modes the chat loop needs: a blocking call that
returns the first choice, and a streamed call that yields raw body chunks.
Reads configuration from constructor arguments or environment variables.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator, Sequence
from typing import Any

import httpx
import tenacity

from toolchat.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_AUTH_ERROR_STATUS_CODES = {401, 403}


def _is_retryable(exc: BaseException) -> bool:
    """Check if an exception is retryable.

    Retryable: 429, 500, 502, 503, 504, connection errors.
    Not retryable: 401, 403, 400, other client errors.
    """
    if isinstance(exc, LLMAuthError):
        return False
    if isinstance(exc, LLMResponseError):
        return exc.status_code in _RETRYABLE_STATUS_CODES
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))


def _raise_for_status(response: httpx.Response, body: str) -> None:
    """Map a non-200 response to the LLM error hierarchy."""
    status = response.status_code
    if status == 200:
        return
    if status in _AUTH_ERROR_STATUS_CODES:
        raise LLMAuthError(
            f"Authentication failed: HTTP {status} - {body}",
            status_code=status,
            body=body,
        )
    if status == 429:
        retry_after_raw = response.headers.get("Retry-After")
        retry_after: float | None = None
        if retry_after_raw is not None:
            try:
                retry_after = float(retry_after_raw)
            except (ValueError, TypeError):
                pass
        raise LLMRateLimitError(
            f"Rate limited: HTTP 429 - {body}",
            retry_after=retry_after,
            body=body,
        )
    raise LLMResponseError(
        f"Completion request failed: HTTP {status} - {body}",
        status_code=status,
        body=body,
    )


class OpenAIClient:
    """Async httpx client for OpenAI-compatible chat completions.

    Implements the CompletionClient protocol. Every request carries the
    tool list with ``tool_choice="auto"`` so the model decides whether to
    call a tool.

    Usage::

        async with OpenAIClient(api_key="sk-...") as client:
            choice = await client.complete(messages, tools)
            async for chunk in client.stream(messages, tools):
                ...
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str = "gpt-4.1",
        timeout: float | None = 120.0,
        max_retries: int = 1,
    ) -> None:
        """Initialize the OpenAI-compatible client.

        Args:
            api_key: API key. Falls back to OPENAI_API_KEY env var.
            base_url: API base URL. Falls back to OPENAI_BASE_URL env var,
                then to https://api.openai.com/v1.
            model: Model identifier sent with every request.
            timeout: Request timeout in seconds, or None for no timeout.
            max_retries: Total attempts for a blocking completion. 1 means a
                single attempt with no retry.

        Raises:
            LLMConfigError: If no API key is provided or found in environment.
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        if not self._api_key:
            raise LLMConfigError(
                "No API key provided. Pass api_key= or set OPENAI_API_KEY "
                "environment variable."
            )
        self._base_url = (
            base_url
            or os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
        ).rstrip("/")
        self._model = model
        self._max_retries = max(1, max_retries)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
        )

    @property
    def model(self) -> str:
        return self._model

    def build_payload(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
        *,
        stream: bool,
    ) -> dict[str, Any]:
        """Build the request body shared by both completion modes.

        ``tools`` and ``tool_choice`` are omitted when no tools are known,
        since the API rejects an empty tool list.
        """
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": list(messages),
            "stream": stream,
        }
        if tools:
            payload["tool_choice"] = "auto"
            payload["tools"] = list(tools)
        return payload

    async def complete(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
    ) -> dict:
        """Send a blocking completion request and return the first choice.

        Returns:
            The ``choices[0]`` dict, whose ``message`` holds either plain
            assistant text or one or more ``tool_calls``.

        Raises:
            LLMAuthError: On 401/403 (no retry).
            LLMRateLimitError: On 429 after all attempts are exhausted.
            LLMResponseError: On any other non-200 status, or a body with
                no choices.
            httpx.HTTPError: On transport failures.
        """
        retryer = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=1, min=1, max=30)
                + tenacity.wait_random(0, 2)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retryer(self._do_complete, messages, tools)

    async def _do_complete(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
    ) -> dict:
        """Execute a single blocking completion request (no retry)."""
        payload = self.build_payload(messages, tools, stream=False)
        logger.debug(
            "Completion request: %d messages, %d tools", len(payload["messages"]), len(tools)
        )
        response = await self._client.post(
            f"{self._base_url}/chat/completions",
            json=payload,
        )
        _raise_for_status(response, response.text)

        data = response.json()
        try:
            return data["choices"][0]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMResponseError(
                f"Unexpected response format: no choices. Response: {data}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def stream(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
    ) -> AsyncIterator[bytes]:
        """Send a streamed completion request and yield raw body chunks.

        The chunks are framed as ``data: `` event lines; decode them with
        :class:`toolchat.llm.stream.StreamDecoder`.

        Raises:
            LLMResponseError: If the API answers with a non-200 status.
            httpx.HTTPError: On transport failures, including mid-stream.
        """
        payload = self.build_payload(messages, tools, stream=True)
        async with self._client.stream(
            "POST",
            f"{self._base_url}/chat/completions",
            json=payload,
        ) as response:
            if response.status_code != 200:
                body = (await response.aread()).decode("utf-8", errors="replace")
                _raise_for_status(response, body)
            async for chunk in response.aiter_bytes():
                yield chunk

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> OpenAIClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
