"""Exception types raised while verifying linked issues."""

from typing import Any

FAILURE_SUMMARY = "Error verifying linked issue."


class LinkedIssueError(Exception):
    """Base error for linked issue verification.

    Carries the nested ``errors`` list reported by the GitHub API, if any.
    """

    def __init__(self, message: str, errors: list[Any] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: list[Any] = list(errors or [])


class TrackerError(LinkedIssueError):
    """A required GitHub API call failed."""


class TemplateError(LinkedIssueError):
    """The comment template could not be loaded."""


class ConfigurationError(LinkedIssueError):
    """The action environment is missing required values."""


class NoLinkedIssueError(LinkedIssueError):
    """The pull request has no linked issue and the run is not quiet."""


def format_failure(exc: BaseException) -> str:
    """Build the failure message reported to the Actions runner."""
    message = getattr(exc, "message", None) or str(exc)
    lines = [f"{FAILURE_SUMMARY}\n\n{message}"]
    for error in getattr(exc, "errors", None) or []:
        if isinstance(error, dict):
            detail = error.get("message") or ", ".join(
                f"{key}: {value}" for key, value in error.items()
            )
        else:
            detail = str(error)
        lines.append(f"- {detail}")
    return "\n".join(lines)
