"""ToolDispatcher: runs a batch of tool calls against the tool executor.

Every call in a batch runs concurrently. The batch is all-or-nothing:
tool results are appended to history only once every call has succeeded.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from toolchat.exceptions import ToolCallError
from toolchat.models.message import Message

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from toolchat.conversation.history import History
    from toolchat.models.message import ToolCallRequest
    from toolchat.toolkit.protocols import ToolExecutor

logger = logging.getLogger(__name__)


def serialize_result(result: Any) -> str:
    """Serialize a tool result as the text content of a tool message."""
    if hasattr(result, "model_dump"):
        result = result.model_dump(mode="json")
    return json.dumps(result, default=str)


class ToolDispatcher:
    """Dispatches tool-call batches and records their results in history.

    Usage::

        dispatcher = ToolDispatcher(executor, history)
        await dispatcher.dispatch(assistant_message.tool_calls)
    """

    def __init__(
        self,
        executor: ToolExecutor,
        history: History,
        on_tool_call: Callable[[ToolCallRequest], None] | None = None,
    ) -> None:
        self._executor = executor
        self._history = history
        self._on_tool_call = on_tool_call

    async def dispatch(self, requests: Sequence[ToolCallRequest]) -> list[Message]:
        """Run every request concurrently and append the results.

        Arguments are parsed before any call is made. Results are appended
        in completion order, which may differ from request order.

        Returns:
            The tool messages appended to history.

        Raises:
            ToolArgumentsError: If any request carries malformed arguments.
            ToolCallError: If any invocation fails. Nothing from the batch
                is appended in that case.
        """
        parsed = [(request, request.parse_arguments()) for request in requests]
        completed: list[Message] = []

        async def _run(request: ToolCallRequest, arguments: dict[str, Any]) -> None:
            if self._on_tool_call is not None:
                self._on_tool_call(request)
            logger.debug("Calling tool %s (%s) with %s", request.name, request.id, arguments)
            try:
                result = await self._executor.call_tool(request.name, arguments)
            except Exception as exc:
                raise ToolCallError(request.name, request.id, exc) from exc
            completed.append(
                Message.tool(
                    serialize_result(result),
                    name=request.name,
                    tool_call_id=request.id,
                )
            )

        tasks = [asyncio.ensure_future(_run(request, args)) for request, args in parsed]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Every sibling outcome is retrieved before re-raising.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for message in completed:
            self._history.append(message)
        return completed
