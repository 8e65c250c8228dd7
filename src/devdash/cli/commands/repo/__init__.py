"""Repository commands."""

import json

import click

from devdash.cli.commands.repo.activity_cmd import repo_activity
from devdash.cli.commands.repo.stats_cmd import repo_stats
from devdash.cli.ensure import Ensure
from devdash.cli.output import machine_output, user_output
from devdash.core.context import DevDashContext


@click.group("repo", invoke_without_command=True)
@click.option("--json", "as_json", is_flag=True, help="Print owner, repo, and remote as JSON.")
@click.pass_context
def repo_group(ctx: click.Context, as_json: bool) -> None:
    """Show the GitHub owner/repo resolved from the git remotes."""
    if ctx.invoked_subcommand is not None:
        return

    devdash_ctx: DevDashContext = ctx.obj
    resolved = Ensure.github_repository(devdash_ctx)

    if as_json:
        payload = {
            "owner": resolved.identity.owner,
            "repo": resolved.identity.repo,
            "remote": resolved.remote.name,
            "url": resolved.remote.url,
        }
        machine_output(json.dumps(payload, indent=2))
        return

    machine_output(resolved.identity.full_name)
    remote = resolved.remote
    user_output(click.style(f"  from remote '{remote.name}' ({remote.url})", dim=True))


repo_group.add_command(repo_activity, name="activity")
repo_group.add_command(repo_stats, name="stats")
