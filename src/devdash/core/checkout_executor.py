"""Carry out a CheckoutPlan against a git repository.

A checkout moves through four states:

    IDLE -> REMOTE_ENSURED -> FETCHED -> BRANCH_READY

Each transition is one git step. A failing step stops the sequence and is
reported with the state that was reached before it; nothing is rolled back,
so a remote registered for a fork PR stays registered and is reused on retry.
The planned branch name is checked with git before the first step, so a name
git would reject fails without side effects.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from devdash.core.checkout_planner import CheckoutPlan
from devdash.core.git.abc import Git
from devdash.core.workspace_locks import WorkspaceLocks

logger = logging.getLogger(__name__)


class CheckoutState(Enum):
    IDLE = "idle"
    REMOTE_ENSURED = "remote_ensured"
    FETCHED = "fetched"
    BRANCH_READY = "branch_ready"


class CheckoutStep(Enum):
    REMOTE = "remote"
    FETCH = "fetch"
    BRANCH = "branch"


class CheckoutErrorKind(Enum):
    REMOTE_UPSERT_FAILED = "remote_upsert_failed"
    FETCH_FAILED = "fetch_failed"
    CHECKOUT_FAILED = "checkout_failed"
    CHECKOUT_BUSY = "checkout_busy"


@dataclass(frozen=True)
class CheckoutSuccess:
    plan: CheckoutPlan
    created_branch: bool
    reset_existing: bool


@dataclass(frozen=True)
class CheckoutFailure:
    """A checkout that stopped before BRANCH_READY.

    branch_exists distinguishes "the branch is already there and overwriting it
    was not acknowledged" from other branch step failures. invalid_branch_name
    marks a planned name git would refuse; it is caught before any git state
    changes, so reached is IDLE.
    """

    plan: CheckoutPlan
    kind: CheckoutErrorKind
    step: CheckoutStep | None
    reached: CheckoutState
    message: str
    branch_exists: bool = False
    invalid_branch_name: bool = False


CheckoutResult = CheckoutSuccess | CheckoutFailure

_STEP_ERROR_KINDS = {
    CheckoutStep.REMOTE: CheckoutErrorKind.REMOTE_UPSERT_FAILED,
    CheckoutStep.FETCH: CheckoutErrorKind.FETCH_FAILED,
    CheckoutStep.BRANCH: CheckoutErrorKind.CHECKOUT_FAILED,
}


class CheckoutExecutor:
    """Runs checkout plans, at most one per workspace at a time."""

    def __init__(self, git: Git, locks: WorkspaceLocks) -> None:
        self._git = git
        self._locks = locks

    def execute(self, cwd: Path, plan: CheckoutPlan, *, allow_overwrite: bool) -> CheckoutResult:
        """Ensure the remote, fetch, and create or reset the local branch.

        Args:
            cwd: Working directory inside the repository
            plan: Plan produced by plan_checkout()
            allow_overwrite: Acknowledges that an existing local branch of the
                planned name may be hard-reset to the fetched ref

        Returns:
            CheckoutSuccess, or CheckoutFailure naming the step that failed
        """
        with self._locks.try_acquire(cwd) as acquired:
            if not acquired:
                logger.debug("Checkout of PR #%d rejected: %s is busy", plan.pr_number, cwd)
                return CheckoutFailure(
                    plan=plan,
                    kind=CheckoutErrorKind.CHECKOUT_BUSY,
                    step=None,
                    reached=CheckoutState.IDLE,
                    message=f"Another checkout is already running in {cwd}",
                )
            return self._run(cwd, plan, allow_overwrite=allow_overwrite)

    def _fail(
        self,
        plan: CheckoutPlan,
        step: CheckoutStep,
        reached: CheckoutState,
        message: str,
        *,
        branch_exists: bool = False,
        invalid_branch_name: bool = False,
    ) -> CheckoutFailure:
        logger.error(
            "Checkout of PR #%d failed at %s step (remote=%s, branch=%s): %s",
            plan.pr_number,
            step.value,
            plan.remote_name,
            plan.local_branch_name,
            message,
        )
        return CheckoutFailure(
            plan=plan,
            kind=_STEP_ERROR_KINDS[step],
            step=step,
            reached=reached,
            message=message,
            branch_exists=branch_exists,
            invalid_branch_name=invalid_branch_name,
        )

    def _run(self, cwd: Path, plan: CheckoutPlan, *, allow_overwrite: bool) -> CheckoutResult:
        state = CheckoutState.IDLE

        if not self._git.is_valid_branch_name(cwd, plan.local_branch_name):
            return self._fail(
                plan,
                CheckoutStep.BRANCH,
                state,
                f"'{plan.local_branch_name}' is not a valid git branch name",
                invalid_branch_name=True,
            )

        if plan.remote_url is not None:
            try:
                self._git.upsert_remote(cwd, plan.remote_name, plan.remote_url)
            except RuntimeError as e:
                return self._fail(plan, CheckoutStep.REMOTE, state, str(e))
        state = CheckoutState.REMOTE_ENSURED

        try:
            self._git.fetch_branch(cwd, plan.remote_name, plan.fetch_ref)
        except RuntimeError as e:
            return self._fail(plan, CheckoutStep.FETCH, state, str(e))
        state = CheckoutState.FETCHED

        try:
            outcome = self._git.create_tracking_branch_and_checkout(
                cwd, plan.local_branch_name, plan.remote_tracking_ref
            )
        except RuntimeError as e:
            return self._fail(plan, CheckoutStep.BRANCH, state, str(e))

        if outcome == "created":
            logger.debug(
                "Created branch %s tracking %s", plan.local_branch_name, plan.remote_tracking_ref
            )
            return CheckoutSuccess(plan=plan, created_branch=True, reset_existing=False)

        # The branch already exists: it is upstream-authoritative and gets reset
        if not allow_overwrite:
            return self._fail(
                plan,
                CheckoutStep.BRANCH,
                state,
                f"Local branch '{plan.local_branch_name}' already exists "
                f"and would be reset to {plan.remote_tracking_ref}",
                branch_exists=True,
            )

        try:
            self._git.checkout_branch(cwd, plan.local_branch_name)
            self._git.reset_hard(cwd, plan.remote_tracking_ref)
        except RuntimeError as e:
            return self._fail(plan, CheckoutStep.BRANCH, state, str(e), branch_exists=True)

        logger.debug(
            "Reset existing branch %s to %s", plan.local_branch_name, plan.remote_tracking_ref
        )
        return CheckoutSuccess(plan=plan, created_branch=False, reset_existing=True)
