"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

# Core options
ORG_OPTION = typer.Option(..., "--org", "-o", help="GitHub organization name")

REPO_OPTION = typer.Option(..., "--repo", "-r", help="GitHub repository name")

PR_NUMBER_OPTION = typer.Option(..., "--pr-number", "-p", help="Pull request number")

BODY_OPTION = typer.Option(
    None, "--body", "-b", help="Pull request body (defaults to the body on GitHub)"
)

# Action inputs - override the INPUT_* environment variables
QUIET_OPTION = typer.Option(
    None, "--quiet/--no-quiet", help="Do not fail when no issue is linked"
)

NO_COMMENT_OPTION = typer.Option(
    None,
    "--no-comment/--comment",
    help="Do not comment on the pull request when no issue is linked",
)

MESSAGE_OPTION = typer.Option(
    None, "--message", "-m", help="Comment text posted when no issue is linked"
)

FILENAME_OPTION = typer.Option(
    None,
    "--filename",
    help="Comment template path (defaults to .github/VERIFY_PR_COMMENT_TEMPLATE.md)",
)

# Behavior options
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Report the verdict without commenting or failing"
)

DEBUG_OPTION = typer.Option(False, "--debug", help="Show debug output")

EVENT_PATH_OPTION = typer.Option(
    None, "--event-path", help="Event payload path (defaults to GITHUB_EVENT_PATH)"
)

# Authentication options
TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)
