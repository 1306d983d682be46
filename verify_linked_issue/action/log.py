"""Logging for action runs.

User-facing lines go to a rich console. Debug detail is written as
``::debug::`` workflow commands when the runner has step debugging on,
and to the module logger otherwise so local runs can show it with
``--debug``.
"""

import logging
import os
from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("verify_linked_issue")


def escape_command_data(value: str) -> str:
    """Escape a message for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Whether the runner asked for step debug logging."""
    env = os.environ if environ is None else environ
    return (
        env.get("RUNNER_DEBUG") == "1"
        or env.get("ACTIONS_STEP_DEBUG", "").lower() == "true"
    )


class ActionLogger:
    """Leveled logger with debug, info, warn, error and success."""

    def __init__(self, console: Console | None = None, debug: bool | None = None):
        self.console = console or Console(soft_wrap=True)
        self.show_debug = debug_enabled() if debug is None else debug

    def _raw(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    def debug(self, message: object) -> None:
        if self.show_debug:
            self._raw(f"::debug::{escape_command_data(str(message))}")
        else:
            logger.debug("%s", message)

    def info(self, message: object) -> None:
        self.console.print(escape(str(message)))

    def warn(self, message: object) -> None:
        self.console.print(f"⚠️  [yellow]{escape(str(message))}[/yellow]")

    def error(self, message: object) -> None:
        self.console.print(f"❌ [red]{escape(str(message))}[/red]")

    def success(self, message: object) -> None:
        self.console.print(f"✅ [green]{escape(str(message))}[/green]")

    def command(self, name: str, message: str) -> None:
        """Emit a workflow command such as ``::error::``."""
        self._raw(f"::{name}::{escape_command_data(message)}")
