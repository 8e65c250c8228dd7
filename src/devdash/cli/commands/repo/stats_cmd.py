"""Show repository statistics from GitHub."""

import json

import click

from devdash.cli.ensure import Ensure
from devdash.cli.output import machine_output, user_output
from devdash.core.context import DevDashContext


@click.command("stats")
@click.option("--json", "as_json", is_flag=True, help="Print the counts as JSON.")
@click.pass_obj
def repo_stats(ctx: DevDashContext, as_json: bool) -> None:
    """Show repository statistics from GitHub."""
    resolved = Ensure.github_repository(ctx)
    stats = Ensure.github_result(
        ctx.github.get_repository_stats(ctx.cwd, resolved.identity),
        "repository statistics",
        resolved.identity.full_name,
    )

    if as_json:
        payload = {
            "full_name": stats.full_name,
            "stars": stats.stars,
            "forks": stats.forks,
            "watchers": stats.watchers,
            "open_issues": stats.open_issues,
            "default_branch": stats.default_branch,
        }
        machine_output(json.dumps(payload, indent=2))
        return

    user_output(click.style(stats.full_name, bold=True))
    if stats.description:
        user_output(click.style(f"  {stats.description}", dim=True))
    user_output(f"  stars:          {stats.stars}")
    user_output(f"  forks:          {stats.forks}")
    user_output(f"  watchers:       {stats.watchers}")
    user_output(f"  open issues:    {stats.open_issues}")
    user_output(f"  default branch: {stats.default_branch or '-'}")
