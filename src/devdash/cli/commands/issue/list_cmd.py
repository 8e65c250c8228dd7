"""List open issues."""

import click
from rich.markup import escape
from rich.table import Table

from devdash.cli.ensure import Ensure
from devdash.cli.output import user_output
from devdash.cli.rendering import linked_number, print_table, truncate_title
from devdash.core.context import DevDashContext
from devdash.core.issue_branches import suggest_issue_branch_name


@click.command("list")
@click.option("--limit", type=click.IntRange(1, 100), default=None, help="Maximum rows to show.")
@click.pass_obj
def issue_list(ctx: DevDashContext, limit: int | None) -> None:
    """List open issues with a suggested working branch for each."""
    resolved = Ensure.github_repository(ctx)
    effective_limit = limit if limit is not None else ctx.config.list_limit

    result = ctx.github.list_issues(ctx.cwd, resolved.identity, limit=effective_limit)
    issues = Ensure.github_result(result, "open issues", resolved.identity.full_name)
    if not issues:
        user_output(f"No open issues in {resolved.identity.full_name}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("issue", style="cyan", no_wrap=True)
    table.add_column("title", no_wrap=True)
    table.add_column("labels", no_wrap=True)
    table.add_column("assignees", no_wrap=True)
    table.add_column("branch", style="dim", no_wrap=True)

    for issue in issues:
        table.add_row(
            linked_number(issue.number, issue.url),
            escape(truncate_title(issue.title)),
            escape(", ".join(issue.labels)) or "-",
            escape(", ".join(issue.assignees)) or "-",
            suggest_issue_branch_name(issue.number, issue.title),
        )

    print_table(table)
