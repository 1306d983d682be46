"""Trigger context of the workflow run."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError


class PullRequestContext(BaseModel):
    """The pull request a run was triggered for."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Owner of the pull request's repository")
    repo: str = Field(..., description="Name of the pull request's repository")
    number: int = Field(..., gt=0, description="Pull request number")
    body: str = Field("", description="Pull request description")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_event(
        cls, payload: Mapping[str, Any], repository: str | None = None
    ) -> "PullRequestContext | None":
        """Build the context from a webhook payload.

        Args:
            payload: Event payload as delivered in GITHUB_EVENT_PATH
            repository: ``owner/repo`` fallback when the payload has no
                repository object (GITHUB_REPOSITORY)

        Returns:
            None when the event is not about a pull request
        """
        pull_request = payload.get("pull_request")
        if not pull_request:
            return None

        full_name = (payload.get("repository") or {}).get("full_name") or repository
        if not full_name or "/" not in full_name:
            raise ConfigurationError(
                "Repository is unknown. Set GITHUB_REPOSITORY to owner/repo."
            )
        owner, repo = full_name.split("/", 1)

        return cls(
            owner=owner,
            repo=repo,
            number=pull_request.get("number") or payload.get("number"),
            body=pull_request.get("body") or "",
        )


def load_event(
    event_path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Read the webhook payload of the current workflow run."""
    env = os.environ if environ is None else environ
    path = event_path or env.get("GITHUB_EVENT_PATH")
    if not path:
        raise ConfigurationError(
            "GITHUB_EVENT_PATH is not set; cannot read the triggering event."
        )

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read event payload {path}: {e}") from e

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload {path} is not a JSON object")
    return payload
