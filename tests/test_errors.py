"""Tests for error formatting."""

from verify_linked_issue.errors import (
    LinkedIssueError,
    NoLinkedIssueError,
    TrackerError,
    format_failure,
)


def test_format_plain_exception() -> None:
    assert format_failure(RuntimeError("boom")) == (
        "Error verifying linked issue.\n\nboom"
    )


def test_format_nested_errors() -> None:
    error = TrackerError(
        "Validation Failed",
        errors=[
            {"resource": "Issue", "code": "missing", "message": "gone"},
            {"resource": "Issue", "code": "invalid"},
            "plain",
        ],
    )
    assert format_failure(error).splitlines() == [
        "Error verifying linked issue.",
        "",
        "Validation Failed",
        "- gone",
        "- resource: Issue, code: invalid",
        "- plain",
    ]


def test_hierarchy() -> None:
    assert issubclass(TrackerError, LinkedIssueError)
    assert issubclass(NoLinkedIssueError, LinkedIssueError)
    assert NoLinkedIssueError("x").errors == []
