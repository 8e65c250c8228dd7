"""Show how a pull request would be checked out, without touching git."""

import json

import click

from devdash.cli.commands.pr.parse_pr_reference import parse_pr_reference
from devdash.cli.commands.pr.shared import build_plan, naming_mode_option
from devdash.cli.output import machine_output, user_output
from devdash.core.checkout_planner import CheckoutPlan, NamingMode
from devdash.core.context import DevDashContext


def plan_as_dict(plan: CheckoutPlan) -> dict[str, object]:
    return {
        "pr_number": plan.pr_number,
        "naming_mode": plan.naming_mode,
        "is_fork": plan.is_fork,
        "remote_name": plan.remote_name,
        "remote_url": plan.remote_url,
        "local_branch_name": plan.local_branch_name,
        "fetch_ref": plan.fetch_ref,
        "may_overwrite": plan.may_overwrite,
    }


@click.command("plan")
@click.argument("pr_reference")
@naming_mode_option
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON.")
@click.pass_obj
def pr_plan(
    ctx: DevDashContext, pr_reference: str, naming_mode: NamingMode | None, as_json: bool
) -> None:
    """Show the remote, fetch ref, and branch a checkout would use.

    PR_REFERENCE can be a plain number (123) or GitHub URL
    (https://github.com/owner/repo/pull/123).
    """
    pr_number = parse_pr_reference(pr_reference)
    pr, plan = build_plan(ctx, pr_number, naming_mode)

    if as_json:
        machine_output(json.dumps(plan_as_dict(plan), indent=2))
        return

    kind = "fork" if plan.is_fork else "same-repo"
    title = f" {pr.title}" if pr.title else ""
    user_output(click.style(f"PR #{plan.pr_number}", bold=True) + f"{title} ({kind})")
    if plan.remote_url is not None:
        user_output(f"  remote: {plan.remote_name} -> {plan.remote_url}")
    else:
        user_output(f"  remote: {plan.remote_name}")
    user_output(f"  fetch:  {plan.remote_tracking_ref}")
    user_output(f"  branch: {plan.local_branch_name}")
    if plan.may_overwrite:
        user_output(
            click.style("Warning: ", fg="yellow")
            + f"local branch '{plan.local_branch_name}' exists and will be reset"
        )
    if not ctx.git.is_valid_branch_name(ctx.cwd, plan.local_branch_name):
        user_output(
            click.style("Warning: ", fg="yellow")
            + f"git does not accept '{plan.local_branch_name}' as a branch name; "
            "checkout will fail (use --mode standard)"
        )
