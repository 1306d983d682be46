"""Pydantic models for GitHub data structures.

These models map to the subset of GitHub's REST API v3 responses needed to
decide whether a pull request is linked to an issue.
API Reference: https://docs.github.com/en/rest/issues
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubIssue(BaseModel):
    """GitHub issue model returned by an issue lookup.

    Maps to GitHub REST API Issue object. Pull requests are issues too, so
    ``is_pull_request`` records which kind the lookup found.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    html_url: str | None = Field(None, description="Browser URL of the issue")
    is_pull_request: bool = Field(
        False, description="Whether the number refers to a pull request"
    )
    repository_name: str | None = Field(
        None, description="Full name (owner/repo) of the repository holding the issue"
    )


class TimelineEvent(BaseModel):
    """Event recorded on an issue or pull request.

    Maps to GitHub REST API Issue Event object. Only the ``connected`` event
    type matters for linked issue verification.
    API Reference: https://docs.github.com/en/rest/issues/events
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(None, description="Unique event identifier (integer)")
    event: str = Field(..., description="Event type, e.g. 'connected' (string)")
    actor: GitHubUser | None = Field(None, description="User who triggered the event")
    created_at: datetime | None = Field(
        None, description="Timestamp of event creation (ISO 8601)"
    )

    @property
    def is_connected(self) -> bool:
        """Whether this event links the pull request to an issue."""
        return self.event == "connected"
