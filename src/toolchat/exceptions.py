"""toolchat exception hierarchy.

All toolchat-specific exceptions inherit from ToolChatError.
"""


class ToolChatError(Exception):
    """Base exception for all toolchat errors."""


class ConfigError(ToolChatError):
    """Raised when process configuration is missing or malformed."""


class ToolRegistryError(ToolChatError):
    """Raised when the tool executor cannot list its tools."""


class ToolArgumentsError(ToolChatError):
    """Raised when a tool call carries arguments that are not valid JSON.

    A malformed payload aborts the whole dispatch batch.
    """

    def __init__(self, tool_name: str, call_id: str, raw: str, reason: str) -> None:
        self.tool_name = tool_name
        self.call_id = call_id
        self.raw = raw
        super().__init__(
            f"Invalid arguments for tool '{tool_name}' (call {call_id}): {reason}. "
            f"Payload: {raw!r}"
        )


class ToolCallError(ToolChatError):
    """Raised when the tool executor rejects a tool invocation."""

    def __init__(self, tool_name: str, call_id: str, cause: BaseException) -> None:
        self.tool_name = tool_name
        self.call_id = call_id
        super().__init__(
            f"Tool '{tool_name}' (call {call_id}) failed: "
            f"{type(cause).__name__}: {cause}"
        )
