"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import GitHubIssue, GitHubUser, TimelineEvent

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubIssue",
    "TimelineEvent",
]
