"""ToolRegistry: session cache of adapted tool definitions.

Fetches the tool list from the executor once, adapts each input schema
and keeps the result for the rest of the session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolchat.exceptions import ToolRegistryError
from toolchat.toolkit.models import ToolDefinition
from toolchat.toolkit.schema import adapt_input_schema

if TYPE_CHECKING:
    from toolchat.toolkit.protocols import ToolExecutor

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Caches the tool executor's tool list for a chat session.

    Usage::

        registry = ToolRegistry(executor)
        await registry.refresh()
        payload_tools = registry.to_openai()
    """

    def __init__(self, executor: ToolExecutor) -> None:
        self._executor = executor
        self._tools: tuple[ToolDefinition, ...] = ()

    @property
    def tools(self) -> tuple[ToolDefinition, ...]:
        return self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def to_openai(self) -> list[dict]:
        return [tool.to_openai() for tool in self._tools]

    async def refresh(self) -> tuple[ToolDefinition, ...]:
        """Fetch the tool list unconditionally and replace the cache.

        Raises:
            ToolRegistryError: If an entry has no name.
        """
        raw_tools = await self._executor.list_tools()
        tools: list[ToolDefinition] = []
        for raw in raw_tools:
            name = raw.get("name")
            if not name:
                raise ToolRegistryError(f"Tool entry without a name: {raw!r}")
            tools.append(
                ToolDefinition(
                    name=name,
                    description=raw.get("description") or "",
                    parameters=adapt_input_schema(raw.get("inputSchema")),
                )
            )
        self._tools = tuple(tools)
        logger.info("Loaded %d tools: %s", len(self._tools), ", ".join(self.names()))
        return self._tools

    async def ensure_loaded(self) -> tuple[ToolDefinition, ...]:
        """Fetch the tool list only if the cache is empty."""
        if not self._tools:
            await self.refresh()
        return self._tools
