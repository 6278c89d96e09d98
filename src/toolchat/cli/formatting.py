"""Rich formatting helpers for the toolchat CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from toolchat.models.message import ToolCallRequest


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_banner(exit_command: str) -> str:
    return f'[bright_blue]💬  Starting chat – type "{escape(exit_command)}" to quit[/bright_blue]'


def format_tools(names: list[str]) -> str:
    return f"[bright_blue]Tools: {len(names)}, \\[{escape(', '.join(names))}][/bright_blue]"


def format_tool_call(request: ToolCallRequest) -> str:
    return (
        f"[bright_yellow]Running tool: {escape(request.name)} "
        f"( {escape(request.arguments)} )[/bright_yellow]"
    )


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
