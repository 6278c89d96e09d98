"""Data models for toolchat: conversation messages and session configuration."""

from toolchat.models.config import ChatConfig, ServerConfig
from toolchat.models.message import Message, Role, ToolCallRequest

__all__ = [
    "ChatConfig",
    "ServerConfig",
    "Message",
    "Role",
    "ToolCallRequest",
]
