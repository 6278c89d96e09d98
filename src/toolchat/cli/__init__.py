"""toolchat CLI -- interactive chat with MCP tools.

This module is NEVER imported from toolchat/__init__.py.
It is only loaded via the ``toolchat`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from dotenv import find_dotenv, load_dotenv

from toolchat.cli.formatting import format_error, get_console
from toolchat.cli.terminal import Terminal
from toolchat.models.config import ChatConfig


@click.command()
@click.option(
    "--model",
    default=None,
    help="Model identifier (default: $TOOLCHAT_MODEL or gpt-4.1).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log debug output to stderr.",
)
def main(model: str | None, verbose: bool) -> None:
    """Chat with an LLM that can call the tools of an MCP server.

    Reads OPENAI_API_KEY and SERVER_CONFIG from the environment or a .env
    file. Type "exit" to quit.
    """
    from toolchat.session import run_chat

    load_dotenv(find_dotenv(usecwd=True))
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(name)s] %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

    console = get_console()
    try:
        config = ChatConfig.from_env(model=model)
        asyncio.run(run_chat(config, Terminal(console)))
    except KeyboardInterrupt:
        console.print()
        raise SystemExit(130) from None
    except SystemExit:
        raise
    except Exception as e:
        logging.getLogger(__name__).debug("Chat aborted", exc_info=True)
        format_error(str(e) or type(e).__name__, console)
        raise SystemExit(1) from None
