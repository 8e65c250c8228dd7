"""Issue commands."""

import click

from devdash.cli.commands.issue.checkout_cmd import issue_checkout
from devdash.cli.commands.issue.create_cmd import issue_collaborators, issue_create
from devdash.cli.commands.issue.list_cmd import issue_list


@click.group("issue")
def issue_group() -> None:
    """Work with the issues of the current repository."""
    pass


issue_group.add_command(issue_checkout, name="checkout")
issue_group.add_command(issue_collaborators, name="collaborators")
issue_group.add_command(issue_create, name="create")
issue_group.add_command(issue_list, name="list")
