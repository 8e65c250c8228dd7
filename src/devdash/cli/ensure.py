"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

import logging
from typing import NoReturn, TypeVar

import click

from devdash.cli.output import user_output
from devdash.core.context import DevDashContext
from devdash.core.github.types import GitHubLookupFailure, LookupFailureKind
from devdash.core.remotes import (
    NoGitHubRemoteFound,
    NotAGitRepository,
    ResolvedRemote,
    resolve_workspace_repository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fail(error_message: str) -> NoReturn:
    """Print a red "Error:" message and exit with status 1."""
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


def github_failure_message(failure: GitHubLookupFailure, subject: str, repo_name: str) -> str:
    """Explain a failed GitHub request about `subject` (e.g. "PR #42") to the user."""
    if failure.kind == LookupFailureKind.NOT_FOUND:
        return f"Could not find {subject} in {repo_name}"
    if failure.kind == LookupFailureKind.RATE_LIMITED:
        return "GitHub API rate limit exceeded. Try again later."
    if failure.kind == LookupFailureKind.AUTH_REQUIRED:
        return (
            "GitHub authentication required.\n\n"
            "Run 'gh auth login' or set DEVDASH_GITHUB_TOKEN."
        )
    if failure.kind == LookupFailureKind.FORBIDDEN:
        return f"You do not have permission to access {subject} in {repo_name}"
    if failure.kind == LookupFailureKind.INVALID_REQUEST:
        return f"GitHub rejected the request for {subject}: {failure.message}"
    return f"Could not look up {subject}: {failure.message}"


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Provides type narrowing from `T | None` to `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            fail(error_message)
        return value

    @staticmethod
    def github_result(result: T | GitHubLookupFailure, subject: str, repo_name: str) -> T:
        """Ensure a GitHub request succeeded, otherwise explain the failure and exit.

        Provides type narrowing from `T | GitHubLookupFailure` to `T`.

        Raises:
            SystemExit: If result is a GitHubLookupFailure (with exit code 1)
        """
        if isinstance(result, GitHubLookupFailure):
            logger.error("GitHub request for %s failed: %s", subject, result.message)
            fail(github_failure_message(result, subject, repo_name))
        return result

    @staticmethod
    def github_repository(ctx: DevDashContext) -> ResolvedRemote:
        """Ensure the working directory resolves to a GitHub repository.

        Distinguishes "not a git repository" from "no GitHub remote", since the
        fixes differ.

        Raises:
            SystemExit: If the repository cannot be resolved
        """
        resolved = resolve_workspace_repository(ctx.git, ctx.cwd)
        if isinstance(resolved, NotAGitRepository):
            fail(f"{resolved.message}\n\nRun devdash from inside a git checkout.")
        if isinstance(resolved, NoGitHubRemoteFound):
            fail(
                f"{resolved.message} in {ctx.cwd}\n\n"
                "Add a remote pointing at github.com (or an SSH alias for it)."
            )
        assert isinstance(resolved, ResolvedRemote)
        return resolved
