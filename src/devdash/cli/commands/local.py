"""Show local work that is not on any branch yet."""

import click
from rich.markup import escape
from rich.table import Table

from devdash.cli.ensure import Ensure
from devdash.cli.output import user_output
from devdash.cli.rendering import print_table
from devdash.core.context import DevDashContext

_STATUS_LABELS = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "U": "conflict",
    "?": "untracked",
}


def describe_status(code: str) -> str:
    """Turn a porcelain status code such as " M" or "??" into a word."""
    for char in code:
        if char in _STATUS_LABELS:
            return _STATUS_LABELS[char]
    return code.strip() or "changed"


@click.command("local")
@click.pass_obj
def local_cmd(ctx: DevDashContext) -> None:
    """List stashes and uncommitted changes in the working directory."""
    Ensure.invariant(ctx.git.is_inside_work_tree(ctx.cwd), f"Not a git repository: {ctx.cwd}")

    branch = ctx.git.get_current_branch(ctx.cwd)
    user_output(click.style("Branch: ", bold=True) + (branch or "(detached HEAD)"))

    stashes = ctx.git.list_stashes(ctx.cwd)
    if stashes:
        table = Table(show_header=True, header_style="bold", title="Stashes")
        table.add_column("ref", style="cyan", no_wrap=True)
        table.add_column("message", no_wrap=True)
        for stash in stashes:
            table.add_row(escape(stash.ref), escape(stash.message))
        print_table(table)
    else:
        user_output("No stashes")

    entries = ctx.git.get_status_entries(ctx.cwd)
    if entries:
        table = Table(show_header=True, header_style="bold", title="Changes")
        table.add_column("status", no_wrap=True)
        table.add_column("path", no_wrap=True)
        for entry in entries:
            table.add_row(describe_status(entry.code), escape(entry.path))
        print_table(table)
    else:
        user_output("Working tree clean")
