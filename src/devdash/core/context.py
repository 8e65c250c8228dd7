"""Application context with dependency injection."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click

from devdash.cli.output import user_output
from devdash.core.config_store import (
    ConfigStore,
    DevDashConfig,
    FilesystemConfigStore,
    InMemoryConfigStore,
)
from devdash.core.git.abc import Git
from devdash.core.git.dry_run import DryRunGit
from devdash.core.git.real import RealGit
from devdash.core.github.abc import GitHub
from devdash.core.github.dry_run import DryRunGitHub
from devdash.core.github.real import RealGitHub
from devdash.core.github.types import GitHubSession
from devdash.core.workspace_locks import (
    FileWorkspaceLocks,
    InMemoryWorkspaceLocks,
    WorkspaceLocks,
)

DEBUG_ENV_VAR = "DEVDASH_DEBUG"
TOKEN_ENV_VAR = "DEVDASH_GITHUB_TOKEN"

_DEBUG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


@dataclass(frozen=True)
class DevDashContext:
    """Immutable context holding all dependencies for devdash operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    github: GitHub
    config_store: ConfigStore
    config: DevDashConfig
    locks: WorkspaceLocks
    cwd: Path  # Current working directory at CLI invocation
    dry_run: bool

    @staticmethod
    def for_test(
        git: Git | None = None,
        github: GitHub | None = None,
        config_store: ConfigStore | None = None,
        config: DevDashConfig | None = None,
        locks: WorkspaceLocks | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> "DevDashContext":
        """Create test context with optional pre-configured integration classes.

        Unspecified dependencies default to empty fakes; `cwd` defaults to
        Path("/test/repo").

        Example:
            >>> git = FakeGit(work_trees={Path("/repo")})
            >>> ctx = DevDashContext.for_test(git=git, cwd=Path("/repo"))
        """
        from devdash.core.git.fake import FakeGit
        from devdash.core.github.fake import FakeGitHub

        if git is None:
            git = FakeGit()

        if github is None:
            github = FakeGitHub()

        if config_store is None:
            config_store = InMemoryConfigStore(config=config)

        if config is None:
            config = config_store.load()

        if locks is None:
            locks = InMemoryWorkspaceLocks()

        # Apply dry-run wrappers if needed (matching production behavior)
        if dry_run:
            git = DryRunGit(git)
            github = DryRunGitHub(github)

        return DevDashContext(
            git=git,
            github=github,
            config_store=config_store,
            config=config,
            locks=locks,
            cwd=cwd or Path("/test/repo"),
            dry_run=dry_run,
        )


def configure_logging(*, debug: bool) -> None:
    """Send DEBUG records to stderr when debugging is on."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=_DEBUG_FORMAT)


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Note:
        This is an acceptable use of try/except since we're wrapping a third-party
        API (Path.cwd()) that provides no way to check the condition first.
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context(*, dry_run: bool, debug: bool = False) -> DevDashContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap git and GitHub so mutating calls are printed, not run
        debug: Force debug logging regardless of config and environment

    Returns:
        DevDashContext with real implementations
    """
    # 1. Capture cwd (no deps)
    cwd, error_msg = safe_cwd()
    if cwd is None:
        user_output(click.style("Error: ", fg="red") + str(error_msg))
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    # 2. Load config (defaults when the file does not exist)
    config_store = FilesystemConfigStore()
    try:
        config = config_store.load()
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None

    # 3. Logging: flag, environment, or config
    configure_logging(debug=debug or os.environ.get(DEBUG_ENV_VAR) == "1" or config.debug)

    # 4. Integration classes; credentials are handed to GitHub explicitly
    session = GitHubSession(token=os.environ.get(TOKEN_ENV_VAR) or None)
    git: Git = RealGit()
    github: GitHub = RealGitHub(session)

    if dry_run:
        git = DryRunGit(git)
        github = DryRunGitHub(github)

    return DevDashContext(
        git=git,
        github=github,
        config_store=config_store,
        config=config,
        locks=FileWorkspaceLocks(),
        cwd=cwd,
        dry_run=dry_run,
    )
