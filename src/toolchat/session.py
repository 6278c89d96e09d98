"""Session -- wires the chat components together for one process.

Usage::

    config = ChatConfig.from_env()
    asyncio.run(run_chat(config, Terminal()))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolchat.conversation.loop import ConversationLoop
from toolchat.llm.client import OpenAIClient
from toolchat.toolkit.mcp import MCPToolExecutor
from toolchat.toolkit.registry import ToolRegistry

if TYPE_CHECKING:
    from toolchat.cli.terminal import Terminal
    from toolchat.models.config import ChatConfig


async def run_chat(config: ChatConfig, terminal: Terminal) -> ConversationLoop:
    """Connect to the tool server and run the chat until the user exits.

    The MCP server process and the HTTP client are closed on the way out,
    whether the session ends normally or with an error.
    """
    async with MCPToolExecutor(config.server) as executor:
        async with OpenAIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout,
            max_retries=config.max_retries,
        ) as client:
            loop = ConversationLoop(client, ToolRegistry(executor), executor, terminal)
            await loop.run()
            return loop
