"""Decide whether a pull request is linked to an issue.

A pull request is linked when its body references an issue that exists, or
when GitHub recorded a ``connected`` event on it (an issue linked through
the sidebar or by a closing keyword GitHub already processed).
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .action.config import DEFAULT_TEMPLATE_FILENAME, ActionConfig
from .action.context import PullRequestContext
from .action.log import ActionLogger
from .action.runtime import ActionOutputs
from .errors import FAILURE_SUMMARY, NoLinkedIssueError, format_failure
from .github_client.models import GitHubIssue, TimelineEvent
from .references import DEFAULT_HOSTS, IssueReference, parse_references

DEFAULT_MESSAGE = (
    "Build Error! No Linked Issue found. "
    "Please link an issue or mention it in the body using #<issue_id>"
)
OUTPUT_NAME = "has_linked_issue"


class IssueTracker(Protocol):
    """Issue tracker operations used during verification."""

    def find_issue(self, org: str, repo: str, issue_number: int) -> GitHubIssue | None:
        ...

    def list_pull_request_events(
        self, org: str, repo: str, pr_number: int
    ) -> list[TimelineEvent]:
        ...

    def add_issue_comment(
        self, org: str, repo: str, issue_number: int, comment: str
    ) -> bool:
        ...


class ResolutionResult(BaseModel):
    """Verdict for one pull request."""

    model_config = ConfigDict(frozen=True)

    has_linked_issue: bool = Field(..., description="Whether a linked issue exists")
    source: Literal["body", "timeline"] | None = Field(
        None, description="Where the linkage was found"
    )
    reference: IssueReference | None = Field(
        None, description="Body reference that resolved to an issue"
    )
    issue: GitHubIssue | None = Field(None, description="Issue the reference points to")


@dataclass(frozen=True)
class ActionEnvironment:
    """Everything a verification run talks to."""

    tracker: IssueTracker
    log: ActionLogger
    config: ActionConfig
    outputs: ActionOutputs
    load_template: Callable[[str], str]


def check_body_for_valid_issue(
    pr_body: str | None,
    owner: str,
    repo: str,
    tracker: IssueTracker,
    log: ActionLogger,
    hosts: tuple[str, ...] = DEFAULT_HOSTS,
) -> ResolutionResult | None:
    """Look up body references in order and stop at the first real issue."""
    log.debug(f'Checking PR Body: "{pr_body}"')
    references = parse_references(pr_body, hosts)
    log.debug(f"Found {len(references)} reference(s): {[r.raw for r in references]}")

    checked: set[tuple[str, str, int]] = set()
    for reference in references:
        target_owner, target_repo = reference.target(owner, repo)
        key = (target_owner.lower(), target_repo.lower(), reference.issue_number)
        if key in checked:
            continue
        checked.add(key)

        log.debug(
            f"Verifying match is a valid issue: "
            f"{target_owner}/{target_repo}#{reference.issue_number}"
        )
        issue = tracker.find_issue(target_owner, target_repo, reference.issue_number)
        if issue is None:
            log.debug(f"#{reference.issue_number} is not a valid issue.")
            continue

        log.debug(f"Found issue in PR Body {reference.raw}")
        return ResolutionResult(
            has_linked_issue=True, source="body", reference=reference, issue=issue
        )

    return None


def check_events_for_connected_event(
    owner: str, repo: str, pr_number: int, tracker: IssueTracker, log: ActionLogger
) -> bool:
    """Scan every event of the pull request for a ``connected`` event.

    Failures listing the events propagate to the caller.
    """
    events = tracker.list_pull_request_events(owner, repo, pr_number)
    log.debug(f"Checking {len(events)} event(s)")
    if any(event.is_connected for event in events):
        log.debug("Found connected event.")
        return True
    return False


def resolve_linked_issue(
    pr_body: str | None,
    owner: str,
    repo: str,
    pr_number: int,
    tracker: IssueTracker,
    log: ActionLogger,
    hosts: tuple[str, ...] = DEFAULT_HOSTS,
) -> ResolutionResult:
    """Decide whether a pull request has a linked issue.

    Body references are tried first, in order of appearance, and the first
    one naming an existing issue wins. Otherwise the pull request's events
    are scanned for a ``connected`` event.

    Args:
        pr_body: Pull request description
        owner: Owner of the pull request's repository
        repo: Name of the pull request's repository
        pr_number: Pull request number
        tracker: Issue tracker to verify references against
        log: Logger for progress detail
        hosts: Hosts whose issue URLs count as references

    Returns:
        The verdict, with the resolving reference when found in the body

    Raises:
        TrackerError: If the pull request's events cannot be listed
    """
    result = check_body_for_valid_issue(pr_body, owner, repo, tracker, log, hosts)
    if result is not None:
        return result

    if check_events_for_connected_event(owner, repo, pr_number, tracker, log):
        return ResolutionResult(has_linked_issue=True, source="timeline")

    return ResolutionResult(has_linked_issue=False)


def build_fallback_comment(
    message: str | None,
    filename: str | None,
    load_template: Callable[[str], str],
    log: ActionLogger,
) -> str:
    """Pick the comment posted when no linked issue is found.

    A configured message wins over the template file, which wins over the
    built-in message. Template problems are never fatal.
    """
    if message:
        return message

    try:
        template = load_template(filename or DEFAULT_TEMPLATE_FILENAME)
    except Exception as e:
        log.debug(e)
        return DEFAULT_MESSAGE

    if not template or not template.strip():
        log.debug(f"Template {filename} is empty, using default message")
        return DEFAULT_MESSAGE
    return template


def verify_linked_issue(
    pull_request: PullRequestContext, env: ActionEnvironment
) -> ResolutionResult:
    """Verify one pull request and report the verdict.

    Sets the ``has_linked_issue`` output, comments on unlinked pull requests
    unless comments are disabled, and raises when unlinked and not quiet.

    Raises:
        NoLinkedIssueError: If no linked issue was found and the run is not quiet
        TrackerError: If a required GitHub call failed
    """
    log, config = env.log, env.config

    result = resolve_linked_issue(
        pull_request.body,
        pull_request.owner,
        pull_request.repo,
        pull_request.number,
        env.tracker,
        log,
        config.hosts,
    )

    if result.has_linked_issue:
        log.success("Success! Linked Issue Found!")
        env.outputs.set_output(OUTPUT_NAME, "true")
        return result

    if not config.skip_comment:
        comment = build_fallback_comment(
            config.message, config.filename, env.load_template, log
        )
        log.debug(f"Adding comment to PR. Comment text: {comment}")
        env.tracker.add_issue_comment(
            pull_request.owner, pull_request.repo, pull_request.number, comment
        )
    else:
        log.error("No comment mode enabled, no comment added!")

    env.outputs.set_output(OUTPUT_NAME, "false")
    log.error("No Linked Issue Found!")
    if not config.quiet:
        raise NoLinkedIssueError("No Linked Issue Found!")
    return result


def run_action(
    event: Mapping[str, Any], env: ActionEnvironment, repository: str | None = None
) -> int:
    """Run verification for a workflow event.

    Args:
        event: Webhook payload of the triggering event
        env: Action environment
        repository: ``owner/repo`` fallback for payloads without a repository

    Returns:
        Process exit status
    """
    log = env.log
    try:
        pull_request = PullRequestContext.from_event(event, repository)
        if pull_request is None:
            log.warn("Not a pull request skipping verification!")
            return 0

        log.debug("Starting Linked Issue Verification!")
        verify_linked_issue(pull_request, env)
        return 0

    except NoLinkedIssueError as e:
        env.outputs.set_failed(e.message)
        return 1
    except Exception as e:
        log.error(FAILURE_SUMMARY)
        log.error(e)
        errors = getattr(e, "errors", None)
        if errors:
            log.error(errors)
        env.outputs.set_failed(format_failure(e))
        return 1
