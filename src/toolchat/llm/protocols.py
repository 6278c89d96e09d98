"""Completion client protocol.

Defines the pluggable interface the conversation loop talks to.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionClient(Protocol):
    """Protocol for pluggable completion clients.

    Any object with ``complete()``, ``stream()`` and ``aclose()`` matching
    these signatures works. The built-in OpenAIClient implements it.
    """

    async def complete(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
    ) -> dict:
        """Send a blocking request, return the first choice dict."""
        ...

    def stream(
        self,
        messages: Sequence[dict],
        tools: Sequence[dict],
    ) -> AsyncIterator[bytes]:
        """Send a streamed request, return an iterator of raw body chunks."""
        ...

    async def aclose(self) -> None:
        """Release underlying resources."""
        ...
