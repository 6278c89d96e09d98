"""Tool executor protocol.

The chat loop reaches tools through this two-operation interface.
MCPToolExecutor binds it to an MCP server; tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ToolExecutor(Protocol):
    """External capability that lists and runs tools."""

    async def list_tools(self) -> list[Mapping[str, Any]]:
        """Return the available tools.

        Each entry carries ``name``, ``description`` and ``inputSchema``.
        """
        ...

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """Invoke a tool and return a JSON-serializable result."""
        ...
