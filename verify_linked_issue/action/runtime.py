"""Outputs, failure signalling and workspace files for action runs."""

import os
import uuid
from collections.abc import Mapping
from pathlib import Path

from ..errors import TemplateError
from .log import ActionLogger


class ActionOutputs:
    """Step outputs and the failure state of the run."""

    def __init__(
        self,
        log: ActionLogger,
        output_path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        emit_commands: bool = True,
    ):
        """Initialize outputs.

        Args:
            log: Logger workflow commands are written to
            output_path: Step output file. If None, reads GITHUB_OUTPUT.
            environ: Environment to read from instead of os.environ
            emit_commands: Write workflow commands; local runs only record values
        """
        env = os.environ if environ is None else environ
        self.log = log
        self.output_path = output_path or env.get("GITHUB_OUTPUT") or None
        self.emit_commands = emit_commands
        self.values: dict[str, str] = {}
        self.failure: str | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def set_output(self, name: str, value: str) -> None:
        """Record a step output for later workflow steps."""
        self.values[name] = value
        if not self.emit_commands:
            return

        if not self.output_path:
            self.log.command(f"set-output name={name}", value)
            return

        with open(self.output_path, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")

    def set_failed(self, message: str) -> None:
        """Mark the run as failed with a message shown in the job summary."""
        self.failure = message
        if self.emit_commands:
            self.log.command("error", message)


class WorkspaceTemplateLoader:
    """Reads comment templates from the checked out repository."""

    def __init__(
        self,
        workspace: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        env = os.environ if environ is None else environ
        self.workspace = Path(workspace or env.get("GITHUB_WORKSPACE") or Path.cwd())

    def __call__(self, filename: str) -> str:
        """Load a template.

        Raises:
            TemplateError: If the file is missing or unreadable
        """
        path = self.workspace / filename
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(f"Could not read template {path}: {e}") from e
