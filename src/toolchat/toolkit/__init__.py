"""Toolkit for toolchat: tool definitions, schema adaptation, registry and dispatch.

Tools live in an external executor (normally an MCP server). The registry
caches their adapted definitions; the dispatcher runs the model's tool
calls against the executor and records the results.
"""

from toolchat.toolkit.dispatcher import ToolDispatcher, serialize_result
from toolchat.toolkit.mcp import MCPToolExecutor
from toolchat.toolkit.models import ToolDefinition
from toolchat.toolkit.protocols import ToolExecutor
from toolchat.toolkit.registry import ToolRegistry
from toolchat.toolkit.schema import adapt_input_schema

__all__ = [
    "MCPToolExecutor",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolExecutor",
    "ToolRegistry",
    "adapt_input_schema",
    "serialize_result",
]
