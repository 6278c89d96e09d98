"""Conversation message models.

Frozen dataclasses for conversation turns and the tool-call requests
carried by assistant turns. Both render to the OpenAI chat wire format.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal

from toolchat.exceptions import ToolArgumentsError

Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class ToolCallRequest:
    """A model-issued request to invoke a tool.

    Attributes:
        id: Correlation identifier assigned by the completion API.
        name: Name of the tool to invoke.
        arguments: JSON-serialized arguments, exactly as the model sent them.
    """

    id: str
    name: str
    arguments: str = ""

    def parse_arguments(self) -> dict[str, Any]:
        """Parse the serialized arguments into a dict.

        An empty payload parses as ``{}``.

        Raises:
            ToolArgumentsError: If the payload is not valid JSON or does not
                decode to an object.
        """
        if not self.arguments.strip():
            return {}
        try:
            parsed = json.loads(self.arguments)
        except json.JSONDecodeError as exc:
            raise ToolArgumentsError(self.name, self.id, self.arguments, str(exc)) from exc
        if not isinstance(parsed, dict):
            raise ToolArgumentsError(
                self.name,
                self.id,
                self.arguments,
                f"expected a JSON object, got {type(parsed).__name__}",
            )
        return parsed

    def to_openai(self) -> dict:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }

    @classmethod
    def from_openai(cls, data: dict) -> ToolCallRequest:
        function = data.get("function") or {}
        return cls(
            id=data["id"],
            name=function["name"],
            arguments=function.get("arguments") or "",
        )


@dataclass(frozen=True)
class Message:
    """One turn in the conversation.

    ``tool_calls`` is only set on assistant turns that request tools;
    ``name`` and ``tool_call_id`` are only set on tool-role turns.
    """

    role: Role
    content: str = ""
    tool_calls: tuple[ToolCallRequest, ...] = field(default_factory=tuple)
    name: str | None = None
    tool_call_id: str | None = None

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls,
        content: str = "",
        tool_calls: tuple[ToolCallRequest, ...] = (),
    ) -> Message:
        return cls(role="assistant", content=content, tool_calls=tuple(tool_calls))

    @classmethod
    def tool(cls, content: str, *, name: str, tool_call_id: str) -> Message:
        return cls(role="tool", content=content, name=name, tool_call_id=tool_call_id)

    @classmethod
    def from_openai(cls, data: dict) -> Message:
        """Build an assistant Message from an API ``choices[i].message`` dict."""
        raw_calls = data.get("tool_calls") or []
        return cls(
            role=data.get("role", "assistant"),
            content=data.get("content") or "",
            tool_calls=tuple(ToolCallRequest.from_openai(tc) for tc in raw_calls),
        )

    def to_openai(self) -> dict:
        """Render in the chat-completions request format."""
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            out["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
        if self.role == "tool":
            out["name"] = self.name
            out["tool_call_id"] = self.tool_call_id
        return out
