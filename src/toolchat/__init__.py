"""toolchat: terminal chat with an LLM that can call MCP tools.

The model answers directly or asks for tools; tool results are folded back
into the conversation before the final answer is streamed to the terminal.
"""

from toolchat._version import __version__

from toolchat.conversation import ConversationLoop, History, LoopState
from toolchat.exceptions import (
    ConfigError,
    ToolArgumentsError,
    ToolCallError,
    ToolChatError,
    ToolRegistryError,
)
from toolchat.llm import CompletionClient, OpenAIClient, StreamDecoder, decode_stream
from toolchat.models import ChatConfig, Message, ServerConfig, ToolCallRequest
from toolchat.toolkit import (
    MCPToolExecutor,
    ToolDefinition,
    ToolDispatcher,
    ToolExecutor,
    ToolRegistry,
    adapt_input_schema,
)

__all__ = [
    "__version__",
    "ChatConfig",
    "CompletionClient",
    "ConfigError",
    "ConversationLoop",
    "History",
    "LoopState",
    "MCPToolExecutor",
    "Message",
    "OpenAIClient",
    "ServerConfig",
    "StreamDecoder",
    "ToolArgumentsError",
    "ToolCallError",
    "ToolCallRequest",
    "ToolChatError",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolExecutor",
    "ToolRegistry",
    "ToolRegistryError",
    "adapt_input_schema",
    "decode_stream",
]
