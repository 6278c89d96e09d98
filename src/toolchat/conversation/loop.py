"""Tool-augmented conversation loop.

Provides the ConversationLoop class that drives a chat session:
read user input, request a blocking completion, run any requested tools
and re-request until the model stops calling tools, then stream the final
answer to the terminal and record it in history.

State transitions::

    AWAITING_INPUT -> REQUESTING_COMPLETION -> TOOL_DISPATCH -> REQUESTING_COMPLETION ...
                                            -> STREAMING -> AWAITING_INPUT
    AWAITING_INPUT -> CLOSED
"""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from typing import TYPE_CHECKING

import httpx

from toolchat.conversation.history import History
from toolchat.llm.errors import LLMClientError
from toolchat.llm.stream import StreamDecoder, decode_stream
from toolchat.models.message import Message
from toolchat.prompts.system import SYSTEM_PROMPT
from toolchat.toolkit.dispatcher import ToolDispatcher

if TYPE_CHECKING:
    from toolchat.cli.terminal import Terminal
    from toolchat.llm.protocols import CompletionClient
    from toolchat.toolkit.protocols import ToolExecutor
    from toolchat.toolkit.registry import ToolRegistry

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


class LoopState(str, enum.Enum):
    """States the conversation loop moves through."""

    AWAITING_INPUT = "awaiting_input"
    REQUESTING_COMPLETION = "requesting_completion"
    TOOL_DISPATCH = "tool_dispatch"
    STREAMING = "streaming"
    CLOSED = "closed"


class ConversationLoop:
    """Owns the conversation history and drives the chat cycle.

    The loop is single-threaded and cooperative: one user turn is handled
    at a time, and the next line of input is read only once the previous
    turn has been streamed. Tool calls within one batch run concurrently.

    Errors from a blocking completion or a tool batch propagate out of
    :meth:`handle_turn` and :meth:`run`. Errors while streaming the final
    answer are reported on the terminal and the partial answer is dropped.

    Usage::

        loop = ConversationLoop(client, registry, executor, terminal)
        await loop.run()
    """

    def __init__(
        self,
        client: CompletionClient,
        registry: ToolRegistry,
        executor: ToolExecutor,
        terminal: Terminal,
        *,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._registry = registry
        self._terminal = terminal
        self._history = History(system_prompt)
        self._dispatcher = ToolDispatcher(
            executor,
            self._history,
            on_tool_call=terminal.show_tool_call,
        )
        self._state = LoopState.AWAITING_INPUT

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def history(self) -> History:
        return self._history

    async def start(self) -> None:
        """Load the tool list and show it, before the first prompt."""
        await self._registry.refresh()
        self._terminal.show_tools(self._registry.names())

    async def run(self) -> None:
        """Run the interactive session until the user exits.

        Reads lines until ``exit`` (any case) or end of input. Blank lines
        re-prompt.
        """
        self._terminal.show_banner()
        await self.start()

        while self._state is not LoopState.CLOSED:
            line = await self._read_line()
            if line is None:
                self.close()
                break
            content = line.strip()
            if not content:
                continue
            if content.lower() == EXIT_COMMAND:
                self.close()
                break
            await self.handle_turn(content)

    def close(self) -> None:
        if self._state is LoopState.CLOSED:
            return
        self._state = LoopState.CLOSED
        self._terminal.show_goodbye()

    async def handle_turn(self, content: str) -> Message | None:
        """Handle one user message through to the streamed answer.

        Returns:
            The assistant message committed to history, or None if the
            stream failed and nothing was committed.
        """
        self._history.append(Message.user(content))

        message = await self._request_completion()
        while message.tool_calls:
            self._state = LoopState.TOOL_DISPATCH
            # The request must precede its results in history.
            self._history.append(message)
            await self._dispatcher.dispatch(message.tool_calls)
            message = await self._request_completion()

        return await self._stream_reply()

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    async def _read_line(self) -> str | None:
        """Read one input line on a daemon thread.

        The thread is never joined, so cancelling the wait (Ctrl-C at the
        prompt) returns at once while the thread stays blocked on stdin.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str | None] = loop.create_future()

        def _resolve(line: str | None, exc: Exception | None) -> None:
            if future.done():
                return
            if exc is not None:
                future.set_exception(exc)
            else:
                future.set_result(line)

        def _reader() -> None:
            try:
                line = self._terminal.read_line()
            except Exception as exc:
                outcome = (None, exc)
            else:
                outcome = (line, None)
            try:
                loop.call_soon_threadsafe(_resolve, *outcome)
            except RuntimeError:
                logger.debug("Input arrived after the event loop closed")

        threading.Thread(target=_reader, name="toolchat-input", daemon=True).start()
        return await future

    async def _request_completion(self) -> Message:
        self._state = LoopState.REQUESTING_COMPLETION
        await self._registry.ensure_loaded()
        choice = await self._client.complete(
            self._history.to_openai(),
            self._registry.to_openai(),
        )
        message = Message.from_openai(choice.get("message") or {})
        if message.tool_calls:
            logger.debug(
                "Model requested %d tool calls: %s",
                len(message.tool_calls),
                ", ".join(tc.name for tc in message.tool_calls),
            )
        return message

    async def _stream_reply(self) -> Message | None:
        self._state = LoopState.STREAMING
        self._terminal.begin_reply()
        decoder = StreamDecoder()
        chunks = self._client.stream(
            self._history.to_openai(),
            self._registry.to_openai(),
        )
        try:
            async for fragment in decode_stream(chunks, decoder):
                self._terminal.write(fragment)
        except (httpx.HTTPError, LLMClientError) as exc:
            logger.warning("Stream aborted: %s", exc, exc_info=True)
            self._terminal.end_reply()
            self._terminal.show_error(str(exc) or type(exc).__name__)
            self._state = LoopState.AWAITING_INPUT
            return None

        self._terminal.end_reply()
        reply = Message.assistant(decoder.text)
        self._history.append(reply)
        self._state = LoopState.AWAITING_INPUT
        return reply
