"""Configuration models for toolchat.

ServerConfig describes how to launch the MCP tool server.
ChatConfig holds everything the chat session needs at startup and
is normally built from the environment with ``ChatConfig.from_env()``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from toolchat.exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4.1"


class ServerConfig(BaseModel):
    """Launch configuration for a stdio MCP server.

    Mirrors the JSON held in the ``SERVER_CONFIG`` environment variable.
    """

    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    cwd: Optional[str] = None

    def merged_env(self, environ: Mapping[str, str] | None = None) -> dict[str, str]:
        """Server env overlaid with the process environment.

        Process values win over the server's own ``env`` entries.
        """
        environ = os.environ if environ is None else environ
        return {**self.env, **environ}


class ChatConfig(BaseModel):
    """Per-session configuration."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    server: ServerConfig
    timeout: Optional[float] = 120.0
    max_retries: int = 1

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> ChatConfig:
        """Build a ChatConfig from environment variables.

        Reads ``OPENAI_API_KEY``, ``OPENAI_BASE_URL``, ``TOOLCHAT_MODEL`` and
        ``SERVER_CONFIG``. Keyword overrides that are not None take precedence.

        Raises:
            ConfigError: If the API key or server config is missing or invalid.
        """
        environ = os.environ if environ is None else environ

        api_key = environ.get("OPENAI_API_KEY", "")
        if not api_key:
            raise ConfigError("OPENAI_API_KEY is not set.")

        raw_server = environ.get("SERVER_CONFIG", "")
        if not raw_server.strip():
            raise ConfigError(
                "SERVER_CONFIG is not set. Expected JSON such as "
                '{"command": "npx", "args": ["my-mcp-server"]}.'
            )
        try:
            server_data = json.loads(raw_server)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"SERVER_CONFIG is not valid JSON: {exc}") from exc

        data: dict[str, object] = {
            "api_key": api_key,
            "base_url": environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
            "model": environ.get("TOOLCHAT_MODEL") or DEFAULT_MODEL,
            "server": server_data,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
