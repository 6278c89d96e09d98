"""Terminal: line input and coloured output for the chat session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolchat.cli.formatting import (
    format_banner,
    format_error,
    format_tool_call,
    format_tools,
    get_console,
)
from toolchat.conversation.loop import EXIT_COMMAND

if TYPE_CHECKING:
    from rich.console import Console

    from toolchat.models.message import ToolCallRequest

USER_PROMPT = "[green]you> [/green]"
ASSISTANT_PROMPT = "[cyan]ai> [/cyan]"


class Terminal:
    """Rich-backed terminal used by the conversation loop."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or get_console()

    @property
    def console(self) -> Console:
        return self._console

    def read_line(self) -> str | None:
        """Prompt for one line; None at end of input."""
        try:
            return self._console.input(USER_PROMPT)
        except EOFError:
            return None

    def write(self, text: str) -> None:
        """Write a reply fragment verbatim and immediately, with no newline."""
        self._console.file.write(text)
        self._console.file.flush()

    def begin_reply(self) -> None:
        self._console.print(ASSISTANT_PROMPT, end="")

    def end_reply(self) -> None:
        self._console.print()

    def show_banner(self) -> None:
        self._console.print(format_banner(EXIT_COMMAND))

    def show_tools(self, names: list[str]) -> None:
        self._console.print(format_tools(names), highlight=False)

    def show_tool_call(self, request: ToolCallRequest) -> None:
        self._console.print(format_tool_call(request), highlight=False)

    def show_error(self, message: str) -> None:
        format_error(message, self._console)

    def show_goodbye(self) -> None:
        self._console.print("\n[grey50]👋  Chat finished – goodbye![/grey50]")
