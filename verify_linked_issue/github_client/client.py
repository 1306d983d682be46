"""GitHub API client using PyGitHub."""

import logging
import os
import time

import requests
from github import Auth, Github
from github.GithubException import GithubException, RateLimitExceededException
from github.Issue import Issue
from github.IssueEvent import IssueEvent
from github.NamedUser import NamedUser
from rich.console import Console

from ..errors import TrackerError
from .models import GitHubIssue, GitHubUser, TimelineEvent

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
RATE_LIMIT_WAIT = 60


def _api_errors(exc: GithubException) -> list:
    """Extract the nested ``errors`` list from a GitHub API error response."""
    data = exc.data if isinstance(exc.data, dict) else {}
    errors = data.get("errors") or []
    return errors if isinstance(errors, list) else [errors]


def _api_message(exc: GithubException) -> str:
    data = exc.data if isinstance(exc.data, dict) else {}
    return str(data.get("message") or exc)


class GitHubClient:
    """GitHub API client implementing the issue tracker operations."""

    def __init__(self, token: str | None = None, base_url: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub token. If None, reads from the GITHUB_TOKEN env var,
                then from the action's INPUT_GITHUB_TOKEN.
            base_url: API root for GitHub Enterprise. If None, reads from
                GITHUB_API_URL and falls back to api.github.com.
        """
        self.token = (
            token or os.getenv("GITHUB_TOKEN") or os.getenv("INPUT_GITHUB_TOKEN")
        )
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.base_url = base_url or os.getenv("GITHUB_API_URL") or DEFAULT_API_URL
        self.github = Github(auth=Auth.Token(self.token), base_url=self.base_url)

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        try:
            rate_limit = self.github.get_rate_limit()
            remaining = rate_limit.rate.remaining
            logger.debug("GitHub API rate limit: %s requests remaining", remaining)

            if remaining < 10:
                reset_time = rate_limit.rate.reset.timestamp()
                sleep_time = max(reset_time - time.time() + 1, 0)
                console.print(
                    f"Rate limit low, sleeping for {sleep_time:.1f} seconds..."
                )
                time.sleep(sleep_time)

        except Exception as e:
            # Rate limit reporting is best effort
            logger.debug("Could not check rate limit: %s", e)

    def _convert_user(self, github_user: NamedUser | None) -> GitHubUser | None:
        """Convert PyGitHub user to our model."""
        if github_user is None:
            return None
        return GitHubUser(login=github_user.login, id=github_user.id)

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        repository_name = None
        if hasattr(github_issue, "repository") and github_issue.repository:
            repository_name = github_issue.repository.full_name

        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            state=github_issue.state,
            html_url=github_issue.html_url,
            is_pull_request=github_issue.pull_request is not None,
            repository_name=repository_name,
        )

    def _convert_event(self, github_event: IssueEvent) -> TimelineEvent:
        """Convert PyGitHub issue event to our model."""
        return TimelineEvent(
            id=github_event.id,
            event=github_event.event,
            actor=self._convert_user(github_event.actor),
            created_at=github_event.created_at,
        )

    def find_issue(self, org: str, repo: str, issue_number: int) -> GitHubIssue | None:
        """Look up an issue, returning None when it cannot be fetched.

        Missing issues, missing repositories, permission errors and transport
        failures all mean the reference cannot be verified.
        """
        self._check_rate_limit()

        try:
            repository = self.github.get_repo(f"{org}/{repo}")
            github_issue = repository.get_issue(issue_number)
            return self._convert_issue(github_issue)
        except GithubException as e:
            logger.debug(
                "Lookup of %s/%s#%s failed with status %s: %s",
                org,
                repo,
                issue_number,
                e.status,
                _api_message(e),
            )
            return None
        except requests.RequestException as e:
            logger.debug("Lookup of %s/%s#%s failed: %s", org, repo, issue_number, e)
            return None

    def list_pull_request_events(
        self, org: str, repo: str, pr_number: int, retry: bool = True
    ) -> list[TimelineEvent]:
        """List every event recorded on a pull request.

        Args:
            org: Organization name
            repo: Repository name
            pr_number: Pull request number
            retry: Wait and try once more when the rate limit is exceeded

        Returns:
            All events, across every page of results

        Raises:
            TrackerError: If the events cannot be fetched
        """
        self._check_rate_limit()

        try:
            repository = self.github.get_repo(f"{org}/{repo}")
            github_issue = repository.get_issue(pr_number)
            return [self._convert_event(event) for event in github_issue.get_events()]
        except RateLimitExceededException as e:
            if not retry:
                raise TrackerError(
                    f"Could not list events for {org}/{repo}#{pr_number}: "
                    f"{_api_message(e)}",
                    errors=_api_errors(e),
                ) from e
            console.print("Rate limit exceeded during event listing, waiting...")
            time.sleep(RATE_LIMIT_WAIT)
            return self.list_pull_request_events(org, repo, pr_number, retry=False)
        except GithubException as e:
            raise TrackerError(
                f"Could not list events for {org}/{repo}#{pr_number}: "
                f"{_api_message(e)}",
                errors=_api_errors(e),
            ) from e
        except requests.RequestException as e:
            raise TrackerError(
                f"Could not list events for {org}/{repo}#{pr_number}: {e}"
            ) from e

    def get_pull_request_body(self, org: str, repo: str, pr_number: int) -> str:
        """Get the description body of a pull request.

        Raises:
            TrackerError: If the pull request cannot be fetched
        """
        self._check_rate_limit()

        try:
            repository = self.github.get_repo(f"{org}/{repo}")
            return repository.get_pull(pr_number).body or ""
        except GithubException as e:
            raise TrackerError(
                f"Could not fetch pull request {org}/{repo}#{pr_number}: "
                f"{_api_message(e)}",
                errors=_api_errors(e),
            ) from e
        except requests.RequestException as e:
            raise TrackerError(
                f"Could not fetch pull request {org}/{repo}#{pr_number}: {e}"
            ) from e

    def add_issue_comment(
        self, org: str, repo: str, issue_number: int, comment: str, retry: bool = True
    ) -> bool:
        """Add a comment to an issue or pull request.

        Args:
            org: Organization name
            repo: Repository name
            issue_number: Issue or pull request number
            comment: Comment text to add
            retry: Wait and try once more when the rate limit is exceeded

        Returns:
            True if successful

        Raises:
            TrackerError: If the comment cannot be created
        """
        self._check_rate_limit()

        try:
            repository = self.github.get_repo(f"{org}/{repo}")
            github_issue = repository.get_issue(issue_number)
            github_issue.create_comment(comment)

            logger.debug("Added comment to %s/%s#%s", org, repo, issue_number)
            return True

        except RateLimitExceededException as e:
            if not retry:
                raise TrackerError(
                    f"Could not comment on {org}/{repo}#{issue_number}: "
                    f"{_api_message(e)}",
                    errors=_api_errors(e),
                ) from e
            console.print("Rate limit exceeded during comment creation, waiting...")
            time.sleep(RATE_LIMIT_WAIT)
            return self.add_issue_comment(org, repo, issue_number, comment, retry=False)
        except GithubException as e:
            raise TrackerError(
                f"Could not comment on {org}/{repo}#{issue_number}: "
                f"{_api_message(e)}",
                errors=_api_errors(e),
            ) from e
        except requests.RequestException as e:
            raise TrackerError(
                f"Could not comment on {org}/{repo}#{issue_number}: {e}"
            ) from e
