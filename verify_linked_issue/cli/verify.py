"""CLI commands for verifying that pull requests are linked to issues."""

import logging
import os
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..action.config import ActionConfig
from ..action.context import PullRequestContext, load_event
from ..action.log import ActionLogger, debug_enabled
from ..action.runtime import ActionOutputs, WorkspaceTemplateLoader
from ..errors import LinkedIssueError, NoLinkedIssueError, format_failure
from ..github_client.client import GitHubClient
from ..references import parse_references, server_hosts
from ..resolver import (
    ActionEnvironment,
    ResolutionResult,
    run_action,
    verify_linked_issue,
)
from .options import (
    BODY_OPTION,
    DEBUG_OPTION,
    DRY_RUN_OPTION,
    EVENT_PATH_OPTION,
    FILENAME_OPTION,
    MESSAGE_OPTION,
    NO_COMMENT_OPTION,
    ORG_OPTION,
    PR_NUMBER_OPTION,
    QUIET_OPTION,
    REPO_OPTION,
    TOKEN_OPTION,
)

console = Console()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_config(
    quiet: bool | None,
    no_comment: bool | None,
    message: str | None,
    filename: str | None,
) -> ActionConfig:
    """Read the action inputs and apply command line overrides."""
    config = ActionConfig.from_env()
    overrides = {
        "quiet": quiet,
        "no_comment": no_comment,
        "message": message,
        "filename": filename,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return config.model_copy(update=overrides) if overrides else config


def run(
    quiet: bool | None = QUIET_OPTION,
    no_comment: bool | None = NO_COMMENT_OPTION,
    message: str | None = MESSAGE_OPTION,
    filename: str | None = FILENAME_OPTION,
    event_path: str | None = EVENT_PATH_OPTION,
    token: str | None = TOKEN_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Verify the pull request that triggered the current workflow run.

    Reads the action inputs (INPUT_QUIET, INPUT_NO_COMMENT, INPUT_MESSAGE,
    INPUT_FILENAME) and the event payload from the environment set up by the
    GitHub Actions runner. Command line options override the inputs.

    Examples:
        # Inside a workflow step
        verify-linked-issue run

        # Replay a saved event locally without failing the shell
        verify-linked-issue run --event-path event.json --quiet --debug
    """
    debug = debug or debug_enabled()
    _setup_logging(debug)
    log = ActionLogger(console=console, debug=debug)
    outputs = ActionOutputs(log)

    try:
        config = _build_config(quiet, no_comment, message, filename)
        event = load_event(event_path)
        env = ActionEnvironment(
            tracker=GitHubClient(token=token),
            log=log,
            config=config,
            outputs=outputs,
            load_template=WorkspaceTemplateLoader(),
        )
    except (LinkedIssueError, ValueError) as e:
        log.error(e)
        outputs.set_failed(format_failure(e))
        raise typer.Exit(1)

    status = run_action(event, env, repository=os.getenv("GITHUB_REPOSITORY"))
    if status:
        raise typer.Exit(status)


def _print_result(result: ResolutionResult, pull_request: PullRequestContext) -> None:
    table = Table(title=f"{pull_request.full_name}#{pull_request.number}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Linked issue", "yes" if result.has_linked_issue else "no")
    table.add_row("Found in", result.source or "-")
    if result.reference:
        table.add_row("Reference", result.reference.raw)
    if result.issue:
        table.add_row("Issue", f"#{result.issue.number} {result.issue.title}")
    console.print(table)


def check(
    org: str = ORG_OPTION,
    repo: str = REPO_OPTION,
    pr_number: int = PR_NUMBER_OPTION,
    body: str | None = BODY_OPTION,
    quiet: bool | None = QUIET_OPTION,
    no_comment: bool | None = NO_COMMENT_OPTION,
    message: str | None = MESSAGE_OPTION,
    filename: str | None = FILENAME_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    token: str | None = TOKEN_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Verify a single pull request from your terminal.

    Examples:
        # Check a pull request without commenting on it
        verify-linked-issue check --org myorg --repo myrepo --pr-number 12 --dry-run

        # Check a draft body before opening the pull request
        verify-linked-issue check -o myorg -r myrepo -p 12 -b "Fixes #3" -d
    """
    _setup_logging(debug)
    log = ActionLogger(console=console, debug=False)
    outputs = ActionOutputs(log, emit_commands=False)

    try:
        config = _build_config(quiet, no_comment, message, filename)
        if dry_run:
            config = config.model_copy(update={"quiet": True, "no_comment": True})
            console.print("🔍 [blue]Dry run - no comment will be posted[/blue]")

        client = GitHubClient(token=token)
        if body is None:
            body = client.get_pull_request_body(org, repo, pr_number)
        pull_request = PullRequestContext(
            owner=org, repo=repo, number=pr_number, body=body
        )
        env = ActionEnvironment(
            tracker=client,
            log=log,
            config=config,
            outputs=outputs,
            load_template=WorkspaceTemplateLoader(),
        )
        result = verify_linked_issue(pull_request, env)
    except NoLinkedIssueError:
        raise typer.Exit(1)
    except (LinkedIssueError, ValueError) as e:
        console.print(f"❌ [red]{escape(format_failure(e))}[/red]")
        raise typer.Exit(1)

    _print_result(result, pull_request)


def parse(body: str | None = BODY_OPTION) -> None:
    """Show the issue references found in a pull request body.

    Reads the body from standard input when --body is not given. URLs are
    matched against the host of GITHUB_SERVER_URL. No GitHub calls are made.
    """
    if body is None:
        body = sys.stdin.read()

    references = parse_references(body, server_hosts(os.getenv("GITHUB_SERVER_URL")))
    if not references:
        console.print("[yellow]No issue references found[/yellow]")
        return

    table = Table(title="Issue references")
    table.add_column("Reference", style="cyan")
    table.add_column("Repository")
    table.add_column("Keyword")
    table.add_column("Text")
    for reference in references:
        table.add_row(
            f"#{reference.issue_number}",
            reference.slug or "(current)",
            reference.action or "-",
            reference.raw,
        )
    console.print(table)
