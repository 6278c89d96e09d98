"""LLM client infrastructure for toolchat.

Provides an OpenAI-compatible async HTTP client, the completion client
protocol, and the decoder for streamed completion bodies.
"""

from toolchat.llm.client import OpenAIClient
from toolchat.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from toolchat.llm.protocols import CompletionClient
from toolchat.llm.stream import StreamDecoder, decode_stream

__all__ = [
    "OpenAIClient",
    "CompletionClient",
    "StreamDecoder",
    "decode_stream",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
