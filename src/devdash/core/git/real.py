"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from pathlib import Path

from devdash.core.git.abc import BranchCreateResult, Git, StashEntry, StatusEntry
from devdash.subprocess_utils import run_subprocess_with_context

# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check whether `cwd` is inside a git work tree."""
        if not cwd.is_dir():
            return False
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and result.stdout.strip() == "true"

    def list_remotes(self, cwd: Path) -> str:
        """Return the raw output of `git remote -v`."""
        result = run_subprocess_with_context(
            ["git", "remote", "-v"],
            operation_context="list remotes",
            cwd=cwd,
        )
        return result.stdout

    def list_remote_names(self, cwd: Path) -> list[str]:
        """List configured remote names."""
        result = run_subprocess_with_context(
            ["git", "remote"],
            operation_context="list remote names",
            cwd=cwd,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def upsert_remote(self, cwd: Path, name: str, url: str) -> None:
        """Add the remote, or update its URL if a remote of that name exists."""
        if name in self.list_remote_names(cwd):
            run_subprocess_with_context(
                ["git", "remote", "set-url", name, url],
                operation_context=f"update URL of remote '{name}'",
                cwd=cwd,
            )
            return

        run_subprocess_with_context(
            ["git", "remote", "add", name, url],
            operation_context=f"add remote '{name}'",
            cwd=cwd,
        )

    def fetch_branch(self, cwd: Path, remote: str, branch: str) -> None:
        """Fetch a single branch from a remote."""
        run_subprocess_with_context(
            ["git", "fetch", remote, branch],
            operation_context=f"fetch '{branch}' from '{remote}'",
            cwd=cwd,
        )

    def list_local_branches(self, cwd: Path) -> list[str]:
        """List all local branch names in the repository."""
        result = run_subprocess_with_context(
            ["git", "branch", "--format=%(refname:short)"],
            operation_context="list local branches",
            cwd=cwd,
        )
        return [line.strip() for line in result.stdout.strip().split("\n") if line.strip()]

    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch."""
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        branch = result.stdout.strip()
        if branch == "HEAD":
            return None

        return branch

    def is_valid_branch_name(self, cwd: Path, name: str) -> bool:
        result = subprocess.run(
            ["git", "check-ref-format", "--branch", name],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0

    def _local_branch_exists(self, cwd: Path, branch: str) -> bool:
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=cwd,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def create_tracking_branch_and_checkout(
        self, cwd: Path, branch: str, remote_ref: str
    ) -> BranchCreateResult:
        """Create a local tracking branch from `remote_ref` and check it out."""
        if self._local_branch_exists(cwd, branch):
            return "exists"

        run_subprocess_with_context(
            ["git", "checkout", "-b", branch, "--track", remote_ref],
            operation_context=f"create branch '{branch}' tracking '{remote_ref}'",
            cwd=cwd,
        )
        return "created"

    def create_branch_and_checkout(self, cwd: Path, branch: str) -> BranchCreateResult:
        """Create a branch from HEAD and check it out."""
        if self._local_branch_exists(cwd, branch):
            return "exists"

        run_subprocess_with_context(
            ["git", "checkout", "-b", branch],
            operation_context=f"create branch '{branch}'",
            cwd=cwd,
        )
        return "created"

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout an existing local branch."""
        run_subprocess_with_context(
            ["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=cwd,
        )

    def reset_hard(self, cwd: Path, ref: str) -> None:
        """Reset the checked-out branch to `ref`."""
        run_subprocess_with_context(
            ["git", "reset", "--hard", ref],
            operation_context=f"reset to '{ref}'",
            cwd=cwd,
        )

    def list_stashes(self, cwd: Path) -> list[StashEntry]:
        """List stash entries, newest first."""
        result = run_subprocess_with_context(
            ["git", "stash", "list", "--format=%gd%x00%gs"],
            operation_context="list stashes",
            cwd=cwd,
        )

        stashes: list[StashEntry] = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            ref, _, message = line.partition("\x00")
            stashes.append(StashEntry(ref=ref, message=message))
        return stashes

    def get_status_entries(self, cwd: Path) -> list[StatusEntry]:
        """List uncommitted changes from porcelain status output."""
        result = run_subprocess_with_context(
            ["git", "status", "--porcelain"],
            operation_context="get working tree status",
            cwd=cwd,
        )

        entries: list[StatusEntry] = []
        for line in result.stdout.splitlines():
            # Porcelain v1: "XY path" with a fixed two-character code
            if len(line) < 4:
                continue
            entries.append(StatusEntry(code=line[:2], path=line[3:]))
        return entries
