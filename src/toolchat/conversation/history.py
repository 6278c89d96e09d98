"""Append-only conversation history."""

from __future__ import annotations

from collections.abc import Iterator

from toolchat.models.message import Message


class History:
    """Ordered transcript of a chat session.

    Seeded with one system message. Messages are only ever appended;
    nothing is reordered, replaced or removed.
    """

    def __init__(self, system_prompt: str) -> None:
        self._messages: list[Message] = [Message.system(system_prompt)]

    def append(self, message: Message) -> None:
        if not isinstance(message, Message):
            raise TypeError(f"Expected Message, got {type(message).__name__}")
        self._messages.append(message)

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the transcript."""
        return tuple(self._messages)

    def to_openai(self) -> list[dict]:
        return [message.to_openai() for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
