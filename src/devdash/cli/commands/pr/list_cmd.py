"""List open pull requests."""

import click
from rich.markup import escape
from rich.table import Table

from devdash.cli.ensure import Ensure
from devdash.cli.output import user_output
from devdash.cli.rendering import linked_number, print_table, truncate_title
from devdash.core.context import DevDashContext


@click.command("list")
@click.option("--limit", type=click.IntRange(1, 100), default=None, help="Maximum rows to show.")
@click.pass_obj
def pr_list(ctx: DevDashContext, limit: int | None) -> None:
    """List open pull requests, most recently updated first."""
    resolved = Ensure.github_repository(ctx)
    effective_limit = limit if limit is not None else ctx.config.list_limit

    result = ctx.github.list_pull_requests(ctx.cwd, resolved.identity, limit=effective_limit)
    pull_requests = Ensure.github_result(
        result, "open pull requests", resolved.identity.full_name
    )
    if not pull_requests:
        user_output(f"No open pull requests in {resolved.identity.full_name}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("pr", style="cyan", no_wrap=True)
    table.add_column("title", no_wrap=True)
    table.add_column("author", no_wrap=True)
    table.add_column("branch", no_wrap=True)
    table.add_column("updated", no_wrap=True)

    for pr in pull_requests:
        title = escape(truncate_title(pr.title))
        if pr.is_draft:
            title = f"[dim]{title} (draft)[/dim]"
        table.add_row(
            linked_number(pr.number, pr.url),
            title,
            escape(pr.author or "-"),
            escape(pr.head_ref),
            pr.updated_at[:10] or "-",
        )

    print_table(table)
