"""MCPToolExecutor: ToolExecutor bound to a stdio MCP server.

Launches the server process described by a ServerConfig, keeps one MCP
client session open for the lifetime of the chat, and exposes it through
the two-operation ToolExecutor interface.
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import Implementation

from toolchat._version import __version__
from toolchat.exceptions import ToolChatError

if TYPE_CHECKING:
    from toolchat.models.config import ServerConfig

logger = logging.getLogger(__name__)

CLIENT_NAME = "toolchat"


class MCPToolExecutor:
    """Tool executor backed by an MCP client session over stdio.

    Usage::

        async with MCPToolExecutor(server_config) as executor:
            tools = await executor.list_tools()
            result = await executor.call_tool("get_weather", {"city": "Oslo"})
    """

    def __init__(self, server: ServerConfig) -> None:
        self._server = server
        self._stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise ToolChatError("MCP session is not connected. Call connect() first.")
        return self._session

    async def connect(self) -> None:
        """Launch the server process and initialize the MCP session."""
        params = StdioServerParameters(
            command=self._server.command,
            args=self._server.args,
            env=self._server.merged_env(),
            cwd=self._server.cwd,
        )
        stack = AsyncExitStack()
        try:
            read, write = await stack.enter_async_context(stdio_client(params))
            session = await stack.enter_async_context(
                ClientSession(
                    read,
                    write,
                    client_info=Implementation(name=CLIENT_NAME, version=__version__),
                )
            )
            await session.initialize()
        except BaseException:
            await stack.aclose()
            raise
        self._stack = stack
        self._session = session
        logger.info(
            "Connected to MCP server: %s %s",
            self._server.command,
            " ".join(self._server.args),
        )

    async def aclose(self) -> None:
        """Close the session and stop the server process."""
        stack, self._stack, self._session = self._stack, None, None
        if stack is not None:
            await stack.aclose()

    async def __aenter__(self) -> MCPToolExecutor:
        await self.connect()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def list_tools(self) -> list[dict[str, Any]]:
        result = await self.session.list_tools()
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.inputSchema,
            }
            for tool in result.tools
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Invoke a tool; the MCP result is returned in its JSON form."""
        result = await self.session.call_tool(name, arguments)
        if result.isError:
            logger.warning("Tool %s reported an error result", name)
        return result.model_dump(mode="json", exclude_none=True)
