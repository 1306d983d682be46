"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .verify import check, parse, run

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="verify-linked-issue",
    help="Verify that pull requests are linked to an issue",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="run", context_settings={"help_option_names": ["-h", "--help"]})(run)
app.command(name="check", context_settings={"help_option_names": ["-h", "--help"]})(
    check
)
app.command(name="parse", context_settings={"help_option_names": ["-h", "--help"]})(
    parse
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from verify_linked_issue import __version__

    console.print(f"Verify Linked Issue v{__version__}")


if __name__ == "__main__":
    app()
