"""LLM-specific error hierarchy.

All LLM errors inherit from ToolChatError for consistent exception handling.
"""

from __future__ import annotations

from toolchat.exceptions import ToolChatError


class LLMClientError(ToolChatError):
    """Base for all LLM client errors."""


class LLMConfigError(LLMClientError):
    """Missing or invalid LLM configuration (e.g., no API key)."""


class LLMResponseError(LLMClientError):
    """Non-200 status or unexpected response format from the completion API.

    Attributes:
        status_code: HTTP status of the response, or None for format errors.
        body: Response body text, kept as diagnostic detail.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class LLMRateLimitError(LLMResponseError):
    """Rate limited by the API (429).

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header),
            or None if not provided.
    """

    def __init__(
        self,
        message: str = "Rate limited",
        retry_after: float | None = None,
        body: str = "",
    ) -> None:
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message, status_code=429, body=body)


class LLMAuthError(LLMResponseError):
    """Authentication failed (401/403)."""
