"""Helpers shared by the pr subcommands."""

import logging

import click

from devdash.cli.ensure import Ensure, fail
from devdash.core.checkout_planner import (
    NAMING_MODES,
    CheckoutPlan,
    MissingForkCloneUrl,
    NamingMode,
    plan_checkout,
)
from devdash.core.context import DevDashContext
from devdash.core.github.types import PullRequestRef
from devdash.core.remotes import ResolvedRemote

logger = logging.getLogger(__name__)

naming_mode_option = click.option(
    "--mode",
    "naming_mode",
    type=click.Choice(NAMING_MODES),
    default=None,
    help="Local branch naming for fork PRs (default: naming_mode from config).",
)


def fetch_pull_request(
    ctx: DevDashContext, resolved: ResolvedRemote, number: int
) -> PullRequestRef:
    """Look up PR `number`, exiting with a styled error on failure."""
    result = ctx.github.get_pull_request(ctx.cwd, resolved.identity, number)
    return Ensure.github_result(result, f"PR #{number}", resolved.identity.full_name)


def choose_base_remote(ctx: DevDashContext, resolved: ResolvedRemote) -> str:
    """Pick the local remote that same-repo PRs are fetched from.

    The configured remote_name wins when such a remote exists; otherwise the
    remote the repository identity was resolved from is used.
    """
    if ctx.config.remote_name in ctx.git.list_remote_names(ctx.cwd):
        return ctx.config.remote_name
    return resolved.remote.name


def build_plan(
    ctx: DevDashContext, pr_number: int, naming_mode: NamingMode | None
) -> tuple[PullRequestRef, CheckoutPlan]:
    """Resolve the repository, look up the PR, and plan its checkout.

    Raises:
        SystemExit: If any step cannot proceed
    """
    resolved = Ensure.github_repository(ctx)
    pr = fetch_pull_request(ctx, resolved, pr_number)

    mode: NamingMode = naming_mode if naming_mode is not None else ctx.config.naming_mode
    plan = plan_checkout(
        pr,
        resolved.identity,
        mode,
        base_remote=choose_base_remote(ctx, resolved),
        existing_local_branches=frozenset(ctx.git.list_local_branches(ctx.cwd)),
    )
    if isinstance(plan, MissingForkCloneUrl):
        logger.error("Cannot plan PR #%d: %s", pr_number, plan.message)
        fail(plan.message)
    return pr, plan
