import click

from devdash.cli.commands.config import config_group
from devdash.cli.commands.issue import issue_group
from devdash.cli.commands.local import local_cmd
from devdash.cli.commands.pr import pr_group
from devdash.cli.commands.repo import repo_group
from devdash.core.context import configure_logging, create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="devdash")
@click.option("--debug", is_flag=True, help="Log git and GitHub calls to stderr.")
@click.option(
    "--dry-run", is_flag=True, help="Print git commands that change state instead of running them."
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, dry_run: bool) -> None:
    """Check out pull requests and issues of the GitHub repository you are in."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run, debug=debug)
    elif debug:
        configure_logging(debug=True)


cli.add_command(config_group)
cli.add_command(issue_group)
cli.add_command(local_cmd)
cli.add_command(pr_group)
cli.add_command(repo_group)


def main() -> None:
    """CLI entry point used by the `devdash` console script."""
    cli()
