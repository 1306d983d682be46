"""Configuration for the linked issue action."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..references import DEFAULT_HOSTS, server_hosts

DEFAULT_TEMPLATE_FILENAME = ".github/VERIFY_PR_COMMENT_TEMPLATE.md"


def input_name(name: str) -> str:
    """Environment variable the Actions runner uses for an input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input, returning an empty string when unset."""
    env = os.environ if environ is None else environ
    return env.get(input_name(name), "").strip()


def get_boolean_input(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Read a boolean action input. Only the literal ``true`` enables it."""
    return get_input(name, environ).lower() == "true"


class ActionConfig(BaseModel):
    """Immutable action inputs, built once per run."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = Field(False, description="Do not fail the run when no issue is linked")
    no_comment: bool = Field(
        False, description="Do not comment on the pull request when no issue is linked"
    )
    message: str | None = Field(None, description="Literal comment text override")
    filename: str = Field(
        DEFAULT_TEMPLATE_FILENAME, description="Comment template path in the workspace"
    )
    hosts: tuple[str, ...] = Field(
        DEFAULT_HOSTS, description="Hosts whose issue URLs count as references"
    )

    @field_validator("message", mode="before")
    @classmethod
    def _empty_message_is_unset(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("filename", mode="before")
    @classmethod
    def _default_filename(cls, value: str | None) -> str:
        return value or DEFAULT_TEMPLATE_FILENAME

    @property
    def skip_comment(self) -> bool:
        """Quiet runs never comment."""
        return self.quiet or self.no_comment

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionConfig":
        """Build configuration from the runner's INPUT_* variables.

        URL references are matched against the host of GITHUB_SERVER_URL.
        """
        env = os.environ if environ is None else environ
        return cls(
            quiet=get_boolean_input("quiet", environ),
            no_comment=get_boolean_input("no_comment", environ),
            message=get_input("message", environ),
            filename=get_input("filename", environ),
            hosts=server_hosts(env.get("GITHUB_SERVER_URL")),
        )
