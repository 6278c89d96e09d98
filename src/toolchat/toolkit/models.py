"""Toolkit data models.

Frozen dataclass for tool definitions published by the tool executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ToolDefinition:
    """A single tool definition for LLM consumption.

    Attributes:
        name: Tool name as registered with the tool executor.
        description: Human-readable description of when/why to use this tool.
        parameters: Adapted JSON Schema dict describing tool parameters.
    """

    name: str
    description: str
    parameters: dict = field(default_factory=dict)

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
