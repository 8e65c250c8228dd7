"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
codebase more testable and maintainable.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit: In-memory implementation for tests
- DryRunGit: Wrapper that prints mutations instead of running them
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

BranchCreateResult = Literal["created", "exists"]


@dataclass(frozen=True)
class StashEntry:
    """A single entry of `git stash list`."""

    ref: str  # "stash@{0}"
    message: str


@dataclass(frozen=True)
class StatusEntry:
    """A single uncommitted change from `git status --porcelain`."""

    code: str  # two-character porcelain status, e.g. " M", "??", "A "
    path: str


# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check whether `cwd` is inside a git work tree."""
        ...

    @abstractmethod
    def list_remotes(self, cwd: Path) -> str:
        """Return the raw output of `git remote -v`.

        Each line has the form `name<TAB>url (fetch|push)`.
        """
        ...

    @abstractmethod
    def list_remote_names(self, cwd: Path) -> list[str]:
        """List configured remote names."""
        ...

    @abstractmethod
    def upsert_remote(self, cwd: Path, name: str, url: str) -> None:
        """Register a remote, or point an existing remote of that name at `url`.

        Calling this repeatedly with the same arguments must not fail.

        Args:
            cwd: Working directory inside the repository
            name: Remote name (e.g. 'pr-42')
            url: Clone URL of the remote repository

        Raises:
            RuntimeError: If git refuses to add or update the remote
        """
        ...

    @abstractmethod
    def fetch_branch(self, cwd: Path, remote: str, branch: str) -> None:
        """Fetch a single branch from a remote.

        Raises:
            RuntimeError: If the fetch fails (unknown remote, missing ref, network)
        """
        ...

    @abstractmethod
    def list_local_branches(self, cwd: Path) -> list[str]:
        """List all local branch names in the repository."""
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch (None when HEAD is detached)."""
        ...

    @abstractmethod
    def is_valid_branch_name(self, cwd: Path, name: str) -> bool:
        """Check `name` against git's branch naming rules (`git check-ref-format --branch`)."""
        ...

    @abstractmethod
    def create_tracking_branch_and_checkout(
        self, cwd: Path, branch: str, remote_ref: str
    ) -> BranchCreateResult:
        """Create a local branch tracking `remote_ref` and check it out.

        A branch that already exists is an expected outcome, reported as
        "exists" without touching the branch.

        Args:
            cwd: Working directory inside the repository
            branch: Name for the local branch
            remote_ref: Remote-tracking ref to start from (e.g. 'pr-42/feature-x')

        Returns:
            "created" if the branch was created and checked out, "exists" if a
            local branch of that name was already present

        Raises:
            RuntimeError: If branch creation fails for any other reason
        """
        ...

    @abstractmethod
    def create_branch_and_checkout(self, cwd: Path, branch: str) -> BranchCreateResult:
        """Create a branch from HEAD and check it out.

        Returns "exists" without changes when the branch is already present.
        """
        ...

    @abstractmethod
    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout an existing local branch."""
        ...

    @abstractmethod
    def reset_hard(self, cwd: Path, ref: str) -> None:
        """Reset the checked-out branch and work tree to `ref`, discarding local commits."""
        ...

    @abstractmethod
    def list_stashes(self, cwd: Path) -> list[StashEntry]:
        """List stash entries, newest first."""
        ...

    @abstractmethod
    def get_status_entries(self, cwd: Path) -> list[StatusEntry]:
        """List uncommitted changes (staged, unstaged, and untracked)."""
        ...
