"""Allow running with ``python -m verify_linked_issue``."""

from .cli.main import app

if __name__ == "__main__":
    app()
