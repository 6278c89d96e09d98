"""CLI and terminal tests -- the click entry point via CliRunner, and the
rich-backed Terminal against an in-memory console.
"""

from __future__ import annotations

import io
import json

import pytest
from click.testing import CliRunner
from rich.console import Console

from toolchat.cli import main
from toolchat.cli.terminal import Terminal
from toolchat.models.message import ToolCallRequest

SERVER_CONFIG = json.dumps({"command": "my-mcp-server", "args": ["--stdio"]})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def captured(monkeypatch):
    """Replace run_chat with a stub that records the config it receives."""
    seen = {}

    async def fake_run_chat(config, terminal):
        seen["config"] = config
        seen["terminal"] = terminal

    monkeypatch.setattr("toolchat.session.run_chat", fake_run_chat)
    return seen


def _env(**extra):
    env = {
        "OPENAI_API_KEY": "sk-test",
        "SERVER_CONFIG": SERVER_CONFIG,
        "TOOLCHAT_MODEL": None,
        "OPENAI_BASE_URL": None,
    }
    env.update(extra)
    return env


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestMain:
    def test_starts_chat_with_env_config(self, runner, captured):
        with runner.isolated_filesystem():
            result = runner.invoke(main, [], env=_env())
        assert result.exit_code == 0, result.output
        config = captured["config"]
        assert config.api_key == "sk-test"
        assert config.model == "gpt-4.1"
        assert config.server.command == "my-mcp-server"
        assert isinstance(captured["terminal"], Terminal)

    def test_model_option_overrides_env(self, runner, captured):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["--model", "o4-mini"], env=_env(TOOLCHAT_MODEL="gpt-4o"))
        assert result.exit_code == 0, result.output
        assert captured["config"].model == "o4-mini"

    def test_reads_dotenv_file(self, runner, captured):
        with runner.isolated_filesystem():
            with open(".env", "w") as fh:
                fh.write("TOOLCHAT_MODEL=from-dotenv\n")
            result = runner.invoke(main, [], env=_env())
        assert result.exit_code == 0, result.output
        assert captured["config"].model == "from-dotenv"

    def test_missing_config_exits_1(self, runner, captured):
        with runner.isolated_filesystem():
            result = runner.invoke(main, [], env=_env(SERVER_CONFIG=None))
        assert result.exit_code == 1
        assert "SERVER_CONFIG" in result.output
        assert "config" not in captured

    def test_fatal_error_exits_1(self, runner, monkeypatch):
        async def failing_run_chat(config, terminal):
            raise RuntimeError("tool server crashed")

        monkeypatch.setattr("toolchat.session.run_chat", failing_run_chat)
        with runner.isolated_filesystem():
            result = runner.invoke(main, [], env=_env())
        assert result.exit_code == 1
        assert "tool server crashed" in result.output


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------

def _terminal() -> tuple[Terminal, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, color_system=None, width=200)
    return Terminal(console), buffer


class TestTerminal:
    def test_reply_fragments_are_written_verbatim(self):
        terminal, buffer = _terminal()
        terminal.begin_reply()
        for fragment in ["Hel", "lo [b]world[/b]"]:
            terminal.write(fragment)
        terminal.end_reply()
        assert buffer.getvalue() == "ai> Hello [b]world[/b]\n"

    def test_reply_fragments_keep_tabs_and_control_characters(self):
        terminal, buffer = _terminal()
        for fragment in ["a\tb", "x\ry", "bell\x07"]:
            terminal.write(fragment)
        assert buffer.getvalue() == "a\tbx\rybell\x07"

    def test_tool_list(self):
        terminal, buffer = _terminal()
        terminal.show_tools(["get_weather", "search"])
        assert buffer.getvalue() == "Tools: 2, [get_weather, search]\n"

    def test_tool_call_notice(self):
        terminal, buffer = _terminal()
        terminal.show_tool_call(ToolCallRequest("c1", "get_weather", '{"city": "Oslo"}'))
        assert buffer.getvalue() == 'Running tool: get_weather ( {"city": "Oslo"} )\n'

    def test_error(self):
        terminal, buffer = _terminal()
        terminal.show_error("connection reset")
        assert buffer.getvalue() == "Error: connection reset\n"

    def test_read_line_returns_none_at_eof(self, monkeypatch):
        terminal, _ = _terminal()

        def raise_eof(*args, **kwargs):
            raise EOFError

        monkeypatch.setattr(terminal.console, "input", raise_eof)
        assert terminal.read_line() is None

    def test_read_line(self, monkeypatch):
        terminal, _ = _terminal()
        monkeypatch.setattr(terminal.console, "input", lambda prompt: "hello")
        assert terminal.read_line() == "hello"
