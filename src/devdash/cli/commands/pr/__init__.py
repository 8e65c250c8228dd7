"""PR management commands."""

import click

from devdash.cli.commands.pr.checkout_cmd import pr_checkout
from devdash.cli.commands.pr.comment_cmd import pr_comment
from devdash.cli.commands.pr.list_cmd import pr_list
from devdash.cli.commands.pr.plan_cmd import pr_plan
from devdash.cli.commands.pr.view_cmd import pr_view


@click.group("pr")
def pr_group() -> None:
    """Work with the pull requests of the current repository."""
    pass


pr_group.add_command(pr_checkout, name="checkout")
pr_group.add_command(pr_comment, name="comment")
pr_group.add_command(pr_list, name="list")
pr_group.add_command(pr_plan, name="plan")
pr_group.add_command(pr_view, name="view")
