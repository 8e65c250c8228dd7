"""No-op Git wrapper for dry-run mode.

This module provides a Git wrapper that prevents execution of mutating
operations while delegating read-only operations to the wrapped implementation.
"""

from pathlib import Path

from devdash.cli.output import user_output
from devdash.core.git.abc import BranchCreateResult, Git, StashEntry, StatusEntry

# ============================================================================
# No-op Wrapper
# ============================================================================


class DryRunGit(Git):
    """No-op wrapper that prints mutating operations instead of running them.

    Read-only operations are delegated to the wrapped implementation, so a
    dry-run still reports whether a branch would be created or reset.

    Usage:
        real_ops = RealGit()
        noop_ops = DryRunGit(real_ops)

        # Prints message instead of fetching
        noop_ops.fetch_branch(cwd, "pr-42", "feature-x")
    """

    def __init__(self, wrapped: Git) -> None:
        """Create a dry-run wrapper around a Git implementation.

        Args:
            wrapped: The Git implementation to wrap (usually RealGit or FakeGit)
        """
        self._wrapped = wrapped

    # Read-only operations: delegate to wrapped implementation

    def is_inside_work_tree(self, cwd: Path) -> bool:
        return self._wrapped.is_inside_work_tree(cwd)

    def list_remotes(self, cwd: Path) -> str:
        return self._wrapped.list_remotes(cwd)

    def list_remote_names(self, cwd: Path) -> list[str]:
        return self._wrapped.list_remote_names(cwd)

    def list_local_branches(self, cwd: Path) -> list[str]:
        return self._wrapped.list_local_branches(cwd)

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._wrapped.get_current_branch(cwd)

    def is_valid_branch_name(self, cwd: Path, name: str) -> bool:
        return self._wrapped.is_valid_branch_name(cwd, name)

    def list_stashes(self, cwd: Path) -> list[StashEntry]:
        return self._wrapped.list_stashes(cwd)

    def get_status_entries(self, cwd: Path) -> list[StatusEntry]:
        return self._wrapped.get_status_entries(cwd)

    # Mutating operations: print dry-run message instead of executing

    def upsert_remote(self, cwd: Path, name: str, url: str) -> None:
        """Print dry-run message instead of adding or updating the remote."""
        if name in self._wrapped.list_remote_names(cwd):
            user_output(f"[DRY RUN] Would run: git remote set-url {name} {url}")
        else:
            user_output(f"[DRY RUN] Would run: git remote add {name} {url}")

    def fetch_branch(self, cwd: Path, remote: str, branch: str) -> None:
        """Print dry-run message instead of fetching."""
        user_output(f"[DRY RUN] Would run: git fetch {remote} {branch}")

    def create_tracking_branch_and_checkout(
        self, cwd: Path, branch: str, remote_ref: str
    ) -> BranchCreateResult:
        """Print dry-run message instead of creating the branch."""
        if branch in self._wrapped.list_local_branches(cwd):
            return "exists"
        user_output(f"[DRY RUN] Would run: git checkout -b {branch} --track {remote_ref}")
        return "created"

    def create_branch_and_checkout(self, cwd: Path, branch: str) -> BranchCreateResult:
        """Print dry-run message instead of creating the branch."""
        if branch in self._wrapped.list_local_branches(cwd):
            return "exists"
        user_output(f"[DRY RUN] Would run: git checkout -b {branch}")
        return "created"

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Print dry-run message instead of checking out."""
        user_output(f"[DRY RUN] Would run: git checkout {branch}")

    def reset_hard(self, cwd: Path, ref: str) -> None:
        """Print dry-run message instead of resetting."""
        user_output(f"[DRY RUN] Would run: git reset --hard {ref}")
