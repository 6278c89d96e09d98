"""Conversation state and the chat loop that drives it."""

from toolchat.conversation.history import History
from toolchat.conversation.loop import ConversationLoop, LoopState

__all__ = [
    "ConversationLoop",
    "History",
    "LoopState",
]
