"""Create or switch to a working branch for an issue."""

import click

from devdash.cli.ensure import Ensure, fail
from devdash.cli.output import user_output
from devdash.core.context import DevDashContext
from devdash.core.issue_branches import (
    WorkspaceBusy,
    checkout_issue_branch,
    is_valid_issue_branch_name,
    suggest_issue_branch_name,
)


@click.command("checkout")
@click.argument("issue_number", type=click.IntRange(min=1))
@click.argument("branch", required=False)
@click.pass_obj
def issue_checkout(ctx: DevDashContext, issue_number: int, branch: str | None) -> None:
    """Create a branch for ISSUE_NUMBER from HEAD, or check it out if it exists.

    BRANCH defaults to issue-<number>-<title-slug>, built from the issue's
    title on GitHub.
    """
    Ensure.invariant(ctx.git.is_inside_work_tree(ctx.cwd), f"Not a git repository: {ctx.cwd}")

    if branch is None:
        resolved = Ensure.github_repository(ctx)
        lookup = ctx.github.get_issue(ctx.cwd, resolved.identity, issue_number)
        issue = Ensure.github_result(
            lookup, f"issue #{issue_number}", resolved.identity.full_name
        )
        branch = suggest_issue_branch_name(issue_number, issue.title)

    Ensure.invariant(
        is_valid_issue_branch_name(branch),
        f"Invalid branch name '{branch}': use only letters, digits, '_', '-' and '/'",
    )

    try:
        result = checkout_issue_branch(ctx.git, ctx.locks, ctx.cwd, branch)
    except WorkspaceBusy as e:
        fail(str(e))
    except RuntimeError as e:
        fail(f"Could not check out branch '{branch}' for issue #{issue_number}\n\n{e}")

    if result.created:
        user_output(f"Created and checked out '{result.branch}' for issue #{issue_number}")
    else:
        user_output(f"Checked out existing branch '{result.branch}' for issue #{issue_number}")
