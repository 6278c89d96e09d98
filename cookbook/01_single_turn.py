"""Single Turn Without the Interactive Prompt

Connects to the MCP server from SERVER_CONFIG, asks one question, and
prints the transcript the conversation loop built: the user message, any
tool requests and their correlated results, and the streamed answer.

Demonstrates: ChatConfig.from_env(), MCPToolExecutor, ToolRegistry,
              ConversationLoop.handle_turn(), History
"""

import asyncio
import sys

from dotenv import load_dotenv

from toolchat import (
    ChatConfig,
    ConversationLoop,
    MCPToolExecutor,
    OpenAIClient,
    ToolRegistry,
)
from toolchat.cli.terminal import Terminal

load_dotenv()

QUESTION = " ".join(sys.argv[1:]) or "Which tools can you use? Try one of them."


async def main() -> None:
    config = ChatConfig.from_env()
    terminal = Terminal()

    async with MCPToolExecutor(config.server) as executor:
        async with OpenAIClient(
            api_key=config.api_key, base_url=config.base_url, model=config.model
        ) as client:
            loop = ConversationLoop(client, ToolRegistry(executor), executor, terminal)
            await loop.start()
            await loop.handle_turn(QUESTION)

            print("\n--- transcript ---")
            for message in loop.history:
                if message.role == "tool":
                    print(f"[tool:{message.name} {message.tool_call_id}] {message.content[:120]}")
                elif message.tool_calls:
                    names = ", ".join(tc.name for tc in message.tool_calls)
                    print(f"[assistant] requested: {names}")
                else:
                    print(f"[{message.role}] {message.content[:120]}")


if __name__ == "__main__":
    asyncio.run(main())
