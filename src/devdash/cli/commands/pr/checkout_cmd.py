"""Checkout a pull request into the current repository.

This command fetches the PR's head branch and checks it out locally, adding a
dedicated remote for PRs that come from forks.
"""

import logging

import click

from devdash.cli.commands.pr.parse_pr_reference import parse_pr_reference
from devdash.cli.commands.pr.shared import build_plan, naming_mode_option
from devdash.cli.ensure import fail
from devdash.cli.output import user_output
from devdash.core.checkout_executor import (
    CheckoutErrorKind,
    CheckoutExecutor,
    CheckoutFailure,
)
from devdash.core.checkout_planner import NamingMode
from devdash.core.context import DevDashContext

logger = logging.getLogger(__name__)


@click.command("checkout")
@click.argument("pr_reference")
@naming_mode_option
@click.option(
    "--no-reset",
    is_flag=True,
    help="Refuse to reset a local branch that already exists instead of overwriting it.",
)
@click.pass_obj
def pr_checkout(
    ctx: DevDashContext, pr_reference: str, naming_mode: NamingMode | None, no_reset: bool
) -> None:
    """Checkout a pull request as a local branch.

    PR_REFERENCE can be a plain number (123) or GitHub URL
    (https://github.com/owner/repo/pull/123).

    An existing local branch of the same name is reset to the PR's head,
    discarding local commits on it, unless --no-reset is given.

    Examples:

        # Checkout by PR number
        devdash pr checkout 123

        # Checkout from a full URL
        devdash pr checkout https://github.com/owner/repo/pull/123
    """
    pr_number = parse_pr_reference(pr_reference)
    pr, plan = build_plan(ctx, pr_number, naming_mode)

    if pr.state is not None and pr.state != "open":
        user_output(click.style("Warning: ", fg="yellow") + f"PR #{pr_number} is {pr.state}")

    logger.debug("Executing checkout plan %s", plan)
    result = CheckoutExecutor(ctx.git, ctx.locks).execute(
        ctx.cwd, plan, allow_overwrite=not no_reset
    )

    if isinstance(result, CheckoutFailure):
        if result.kind == CheckoutErrorKind.CHECKOUT_BUSY:
            fail(result.message)
        if result.invalid_branch_name:
            fail(
                f"{result.message}\n\n"
                f"git does not allow this name for PR #{plan.pr_number}. "
                "Re-run with --mode standard to use a pr-<number>-<branch> name."
            )
        if result.branch_exists and no_reset:
            fail(f"{result.message}\n\nRe-run without --no-reset to overwrite it.")
        step = result.step.value if result.step is not None else "start"
        fail(
            f"Checkout of PR #{plan.pr_number} failed at the {step} step "
            f"(remote '{plan.remote_name}', branch '{plan.local_branch_name}')\n\n"
            f"{result.message}"
        )

    if result.reset_existing:
        user_output(
            f"Reset '{plan.local_branch_name}' to {plan.remote_tracking_ref} "
            f"and checked out PR #{plan.pr_number}"
        )
    else:
        user_output(f"Checked out PR #{plan.pr_number} as '{plan.local_branch_name}'")
