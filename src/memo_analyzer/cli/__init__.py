"""Command-line interface."""

from memo_analyzer.cli.main import cli

__all__ = ["cli"]
