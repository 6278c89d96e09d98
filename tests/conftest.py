"""Shared test fixtures for toolchat.

Provides in-memory fakes for the tool executor, the completion client
and the terminal, so the conversation loop runs without any network or
subprocess.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Sequence

import pytest


# ------------------------------------------------------------------
# Response builders
# ------------------------------------------------------------------

def text_choice(content: str = "Hello!") -> dict:
    """A blocking-completion choice with plain assistant text."""
    return {
        "index": 0,
        "message": {"role": "assistant", "content": content},
        "finish_reason": "stop",
    }


def tool_choice(*calls: tuple[str, str, dict | str]) -> dict:
    """A blocking-completion choice requesting tools.

    Each call is ``(id, name, arguments)``; dict arguments are serialized.
    """
    return {
        "index": 0,
        "message": {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": call_id,
                    "type": "function",
                    "function": {
                        "name": name,
                        "arguments": args if isinstance(args, str) else json.dumps(args),
                    },
                }
                for call_id, name, args in calls
            ],
        },
        "finish_reason": "tool_calls",
    }


def sse_event(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n\n"


def sse_body(*fragments: str) -> bytes:
    """A complete streamed body for the given fragments, ending with [DONE]."""
    return ("".join(sse_event(f) for f in fragments) + "data: [DONE]\n\n").encode()


# ------------------------------------------------------------------
# Fakes
# ------------------------------------------------------------------

class FakeExecutor:
    """In-memory ToolExecutor.

    ``handlers`` maps tool name to an async or sync callable taking the
    arguments dict. ``delays`` optionally holds per-tool sleep seconds so
    tests can control completion order.
    """

    def __init__(
        self,
        tools: list[dict] | None = None,
        handlers: dict | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.tools = tools if tools is not None else []
        self.handlers = handlers or {}
        self.delays = delays or {}
        self.list_calls = 0
        self.calls: list[tuple[str, dict]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_tools(self) -> list[dict]:
        self.list_calls += 1
        return list(self.tools)

    async def call_tool(self, name: str, arguments: dict):
        self.calls.append((name, arguments))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(name, 0))
            handler = self.handlers[name]
            result = handler(arguments)
            if asyncio.iscoroutine(result):
                result = await result
            return result
        finally:
            self.in_flight -= 1


class ScriptedClient:
    """CompletionClient that replays canned choices and stream bodies.

    ``streams`` entries are either a list of byte chunks or an exception
    instance; an exception is raised after the chunks before it in the
    list have been yielded.
    """

    def __init__(self, choices: list[dict], streams: list[list] | None = None) -> None:
        self._choices = list(choices)
        self._streams = list(streams or [])
        self.complete_calls: list[tuple[list[dict], list[dict]]] = []
        self.stream_calls: list[tuple[list[dict], list[dict]]] = []
        self.closed = False

    async def complete(self, messages: Sequence[dict], tools: Sequence[dict]) -> dict:
        self.complete_calls.append((list(messages), list(tools)))
        return self._choices.pop(0)

    async def stream(
        self, messages: Sequence[dict], tools: Sequence[dict]
    ) -> AsyncIterator[bytes]:
        self.stream_calls.append((list(messages), list(tools)))
        for item in self._streams.pop(0):
            if isinstance(item, BaseException):
                raise item
            yield item

    async def aclose(self) -> None:
        self.closed = True


class FakeTerminal:
    """Terminal double that records output and replays input lines."""

    def __init__(self, lines: list[str | None] | None = None) -> None:
        self._lines = list(lines or [])
        self.written: list[str] = []
        self.events: list[tuple[str, object]] = []

    def read_line(self) -> str | None:
        if not self._lines:
            return None
        return self._lines.pop(0)

    def write(self, text: str) -> None:
        self.written.append(text)

    def begin_reply(self) -> None:
        self.events.append(("begin_reply", None))

    def end_reply(self) -> None:
        self.events.append(("end_reply", None))

    def show_banner(self) -> None:
        self.events.append(("banner", None))

    def show_tools(self, names: list[str]) -> None:
        self.events.append(("tools", list(names)))

    def show_tool_call(self, request) -> None:
        self.events.append(("tool_call", request))

    def show_error(self, message: str) -> None:
        self.events.append(("error", message))

    def show_goodbye(self) -> None:
        self.events.append(("goodbye", None))

    @property
    def output(self) -> str:
        return "".join(self.written)


WEATHER_TOOL = {
    "name": "get_weather",
    "description": "Current weather for a city",
    "inputSchema": {
        "type": "object",
        "properties": {"city": {"type": "string"}},
        "required": ["city"],
    },
}


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def weather_executor() -> FakeExecutor:
    return FakeExecutor(
        tools=[WEATHER_TOOL],
        handlers={"get_weather": lambda args: {"city": args["city"], "temp_c": 21}},
    )
