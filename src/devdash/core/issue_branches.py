"""Working branches for GitHub issues."""

import re
from dataclasses import dataclass
from pathlib import Path

from devdash.core.git.abc import Git
from devdash.core.workspace_locks import WorkspaceLocks

_BRANCH_NAME_RE = re.compile(r"^[a-zA-Z0-9_\-/]+$")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")

MAX_SLUG_LENGTH = 40


def is_valid_issue_branch_name(name: str) -> bool:
    return _BRANCH_NAME_RE.match(name) is not None


def suggest_issue_branch_name(issue_number: int, title: str | None) -> str:
    """Suggest `issue-<number>-<slug>` from the issue title.

    >>> suggest_issue_branch_name(12, "Fix: crash on empty remote list!")
    'issue-12-fix-crash-on-empty-remote-list'
    """
    slug = _SLUG_STRIP_RE.sub("-", (title or "").lower()).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    if not slug:
        return f"issue-{issue_number}"
    return f"issue-{issue_number}-{slug}"


@dataclass(frozen=True)
class IssueBranchResult:
    branch: str
    created: bool


class WorkspaceBusy(Exception):
    """Raised when another checkout holds the workspace."""


def checkout_issue_branch(
    git: Git, locks: WorkspaceLocks, cwd: Path, branch: str
) -> IssueBranchResult:
    """Create `branch` from HEAD and check it out, or check out the existing branch.

    Unlike PR checkouts an existing branch is never reset.

    Raises:
        ValueError: If the branch name contains characters outside [a-zA-Z0-9_-/]
        WorkspaceBusy: If another checkout is running in `cwd`
        RuntimeError: If git fails
    """
    if not is_valid_issue_branch_name(branch):
        msg = (
            f"Invalid branch name '{branch}': use only letters, digits, "
            "'_', '-' and '/'"
        )
        raise ValueError(msg)

    with locks.try_acquire(cwd) as acquired:
        if not acquired:
            raise WorkspaceBusy(f"Another checkout is already running in {cwd}")

        outcome = git.create_branch_and_checkout(cwd, branch)
        if outcome == "exists":
            git.checkout_branch(cwd, branch)
            return IssueBranchResult(branch=branch, created=False)
        return IssueBranchResult(branch=branch, created=True)
