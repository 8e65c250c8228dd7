"""Show recent commits and repository events."""

import click
from rich.markup import escape
from rich.table import Table

from devdash.cli.ensure import Ensure
from devdash.cli.output import user_output
from devdash.cli.rendering import print_table, truncate_title
from devdash.core.context import DevDashContext


@click.command("activity")
@click.option("--limit", type=click.IntRange(1, 100), default=None, help="Maximum rows to show.")
@click.pass_obj
def repo_activity(ctx: DevDashContext, limit: int | None) -> None:
    """Show recent commits and repository events, newest first."""
    resolved = Ensure.github_repository(ctx)
    effective_limit = limit if limit is not None else ctx.config.list_limit

    activity = Ensure.github_result(
        ctx.github.list_recent_activity(ctx.cwd, resolved.identity, limit=effective_limit),
        "recent activity",
        resolved.identity.full_name,
    )
    if not activity:
        user_output(f"No recent activity in {resolved.identity.full_name}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("when", no_wrap=True)
    table.add_column("who", style="cyan", no_wrap=True)
    table.add_column("what", no_wrap=True)
    table.add_column("commit", style="dim", no_wrap=True)

    for item in activity:
        table.add_row(
            item.created_at[:16].replace("T", " ") or "-",
            escape(item.actor or "unknown"),
            escape(truncate_title(item.summary)),
            item.sha[:7] if item.sha else "",
        )

    print_table(table)
