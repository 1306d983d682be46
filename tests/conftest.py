"""Test configuration and fixtures."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from verify_linked_issue.action.config import ActionConfig
from verify_linked_issue.action.log import ActionLogger
from verify_linked_issue.action.runtime import ActionOutputs
from verify_linked_issue.errors import TemplateError, TrackerError
from verify_linked_issue.github_client.models import GitHubIssue, TimelineEvent
from verify_linked_issue.resolver import ActionEnvironment


class FakeTracker:
    """In-memory issue tracker recording every call."""

    def __init__(
        self,
        issues: dict[tuple[str, str, int], str] | None = None,
        events: list[str] | None = None,
        events_error: TrackerError | None = None,
        comment_error: TrackerError | None = None,
    ):
        self.issues = issues or {}
        self.events = events or []
        self.events_error = events_error
        self.comment_error = comment_error
        self.lookups: list[tuple[str, str, int]] = []
        self.event_calls: list[tuple[str, str, int]] = []
        self.comments: list[tuple[str, str, int, str]] = []

    def find_issue(self, org: str, repo: str, issue_number: int) -> GitHubIssue | None:
        self.lookups.append((org, repo, issue_number))
        title = self.issues.get((org, repo, issue_number))
        if title is None:
            return None
        return GitHubIssue(number=issue_number, title=title, state="open")

    def list_pull_request_events(
        self, org: str, repo: str, pr_number: int
    ) -> list[TimelineEvent]:
        self.event_calls.append((org, repo, pr_number))
        if self.events_error:
            raise self.events_error
        return [TimelineEvent(id=i, event=name) for i, name in enumerate(self.events)]

    def add_issue_comment(
        self, org: str, repo: str, issue_number: int, comment: str
    ) -> bool:
        if self.comment_error:
            raise self.comment_error
        self.comments.append((org, repo, issue_number, comment))
        return True


class FakeTemplates:
    """Template loader backed by a dict."""

    def __init__(self, templates: dict[str, str] | None = None):
        self.templates = templates or {}
        self.requested: list[str] = []

    def __call__(self, filename: str) -> str:
        self.requested.append(filename)
        if filename not in self.templates:
            raise TemplateError(f"Could not read template {filename}")
        return self.templates[filename]


@pytest.fixture
def console_output() -> io.StringIO:
    """Buffer capturing console output."""
    return io.StringIO()


@pytest.fixture
def log(console_output: io.StringIO) -> ActionLogger:
    """Logger writing to a buffer with debug enabled."""
    console = Console(file=console_output, width=200, color_system=None)
    return ActionLogger(console=console, debug=True)


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    """Empty GITHUB_OUTPUT file."""
    path = tmp_path / "github_output"
    path.write_text("")
    return path


@pytest.fixture
def outputs(log: ActionLogger, output_file: Path) -> ActionOutputs:
    """Outputs writing to a temporary GITHUB_OUTPUT file."""
    return ActionOutputs(log, output_path=output_file, environ={})


@pytest.fixture
def tracker() -> FakeTracker:
    """Tracker with no issues and no events."""
    return FakeTracker()


@pytest.fixture
def tracker_factory() -> type[FakeTracker]:
    """FakeTracker class, for tests that need custom issues or events."""
    return FakeTracker


@pytest.fixture
def templates() -> FakeTemplates:
    """Loader with no templates."""
    return FakeTemplates()


@pytest.fixture
def make_env(log: ActionLogger, outputs: ActionOutputs, templates: FakeTemplates):
    """Build an ActionEnvironment around a tracker and config."""

    def _make(tracker: FakeTracker, config: ActionConfig | None = None) -> ActionEnvironment:
        return ActionEnvironment(
            tracker=tracker,
            log=log,
            config=config or ActionConfig(),
            outputs=outputs,
            load_template=templates,
        )

    return _make
