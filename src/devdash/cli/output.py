"""Output utilities for CLI commands with clear intent.

user_output is for people (stderr); machine_output is for pipes (stdout).
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write machine-readable output (JSON, bare names) to stdout."""
    click.echo(message, nl=nl)
