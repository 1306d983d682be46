"""Verify that pull requests reference a valid GitHub issue."""

__version__ = "0.1.0"
