"""Decide how a pull request should be checked out locally.

The planner is pure: it compares the pull request's head repository against
the local repository identity and names the remote, fetch ref, and local
branch. Running git is left to CheckoutExecutor.

Naming, by mode:

                  same-repo PR     fork PR
    standard      <head_ref>       pr-<number>-<head_ref>
    github-style  <head_ref>       <head_owner>:<head_ref>

Fork PRs always fetch through a dedicated remote named pr-<number>.

github-style fork names mirror GitHub's "owner:branch" label. git refuses
the colon in a branch name, so such plans are rejected by CheckoutExecutor
before any git step runs.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from devdash.core.github.types import PullRequestRef
from devdash.core.remotes import RepositoryIdentity

logger = logging.getLogger(__name__)

NamingMode = Literal["standard", "github-style"]

NAMING_MODES: tuple[NamingMode, ...] = ("standard", "github-style")

DEFAULT_REMOTE_NAME = "origin"


@dataclass(frozen=True)
class CheckoutPlan:
    """What the executor must do to check out a pull request.

    remote_url is set exactly when is_fork is True: only fork PRs need a
    remote registered for them. may_overwrite is True when local_branch_name
    already exists locally and will be reset to the fetched ref.
    """

    pr_number: int
    naming_mode: NamingMode
    is_fork: bool
    remote_name: str
    remote_url: str | None
    local_branch_name: str
    fetch_ref: str
    may_overwrite: bool = False

    def __post_init__(self) -> None:
        if self.is_fork != (self.remote_url is not None):
            msg = "CheckoutPlan.remote_url must be set if and only if is_fork is True"
            raise ValueError(msg)

    @property
    def remote_tracking_ref(self) -> str:
        return f"{self.remote_name}/{self.fetch_ref}"


@dataclass(frozen=True)
class MissingForkCloneUrl:
    """Sentinel: a fork PR whose source repository has no accessible clone URL."""

    pr_number: int
    head_repo_full_name: str | None

    @property
    def message(self) -> str:
        source = self.head_repo_full_name or "unknown repository"
        return (
            f"PR #{self.pr_number} comes from {source}, "
            "which has no accessible clone URL (was the fork deleted?)"
        )


def is_same_repo(pr: PullRequestRef, local: RepositoryIdentity) -> bool:
    """A PR is same-repo when its head repository is exactly the local one."""
    return pr.head_repo_full_name == local.full_name


def fork_remote_name(pr_number: int) -> str:
    return f"pr-{pr_number}"


def _fork_owner(pr: PullRequestRef) -> str:
    if pr.head_owner_login:
        return pr.head_owner_login
    if pr.head_repo_full_name and "/" in pr.head_repo_full_name:
        return pr.head_repo_full_name.split("/", 1)[0]
    return fork_remote_name(pr.number)


def fork_branch_name(pr: PullRequestRef, mode: NamingMode) -> str:
    if mode == "github-style":
        return f"{_fork_owner(pr)}:{pr.head_ref}"
    return f"pr-{pr.number}-{pr.head_ref}"


def plan_checkout(
    pr: PullRequestRef,
    local: RepositoryIdentity,
    mode: NamingMode,
    *,
    base_remote: str = DEFAULT_REMOTE_NAME,
    existing_local_branches: frozenset[str] = frozenset(),
) -> CheckoutPlan | MissingForkCloneUrl:
    """Plan the checkout of `pr` into the repository identified by `local`.

    Args:
        pr: Pull request metadata from GitHub
        local: Identity of the repository the checkout happens in
        mode: Branch naming mode for fork PRs
        base_remote: Local remote that points at `local` (used for same-repo PRs)
        existing_local_branches: Local branch names, used to flag plans that
            will overwrite an existing branch

    Returns:
        CheckoutPlan, or MissingForkCloneUrl for a fork PR without a clone URL
    """
    if pr.base != local:
        # Fork classification only looks at the head repository
        logger.debug(
            "PR #%d targets %s, not the local repository %s",
            pr.number,
            pr.base.full_name,
            local.full_name,
        )

    if is_same_repo(pr, local):
        plan = CheckoutPlan(
            pr_number=pr.number,
            naming_mode=mode,
            is_fork=False,
            remote_name=base_remote,
            remote_url=None,
            local_branch_name=pr.head_ref,
            fetch_ref=pr.head_ref,
            may_overwrite=pr.head_ref in existing_local_branches,
        )
        logger.debug("Planned same-repo checkout for PR #%d: %s", pr.number, plan)
        return plan

    if pr.head_clone_url is None:
        logger.debug("PR #%d is a fork without a clone URL", pr.number)
        return MissingForkCloneUrl(pr_number=pr.number, head_repo_full_name=pr.head_repo_full_name)

    local_branch_name = fork_branch_name(pr, mode)
    plan = CheckoutPlan(
        pr_number=pr.number,
        naming_mode=mode,
        is_fork=True,
        remote_name=fork_remote_name(pr.number),
        remote_url=pr.head_clone_url,
        local_branch_name=local_branch_name,
        fetch_ref=pr.head_ref,
        may_overwrite=local_branch_name in existing_local_branches,
    )
    logger.debug("Planned fork checkout for PR #%d: %s", pr.number, plan)
    return plan
