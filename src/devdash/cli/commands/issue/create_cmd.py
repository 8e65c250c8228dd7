"""Open a new issue in the current repository."""

import logging

import click

from devdash.cli.ensure import Ensure, fail
from devdash.cli.output import machine_output, user_output
from devdash.core.context import DevDashContext
from devdash.core.github.types import GitHubLookupFailure, LookupFailureKind

logger = logging.getLogger(__name__)


@click.command("create")
@click.argument("title")
@click.option("--body", default="", help='Issue description ("-" reads it from stdin).')
@click.option("--label", "labels", multiple=True, help="Label to apply (repeatable).")
@click.option("--assignee", "assignees", multiple=True, help="Login to assign (repeatable).")
@click.pass_obj
def issue_create(
    ctx: DevDashContext,
    title: str,
    body: str,
    labels: tuple[str, ...],
    assignees: tuple[str, ...],
) -> None:
    """Open an issue titled TITLE and print its number.

    Assignees are checked against the repository's collaborators first when
    the collaborator list is readable.

    Examples:

        devdash issue create "Crash on empty remote list" --label bug --assignee carol
    """
    Ensure.invariant(bool(title.strip()), "Issue title must not be empty")
    if body == "-":
        body = click.get_text_stream("stdin").read()

    resolved = Ensure.github_repository(ctx)
    repo_name = resolved.identity.full_name

    if assignees:
        collaborators = ctx.github.list_collaborators(ctx.cwd, resolved.identity)
        if isinstance(collaborators, GitHubLookupFailure):
            # Reading collaborators needs push access; GitHub still validates on create
            logger.debug("Skipping assignee check: %s", collaborators.message)
        else:
            unknown = [login for login in assignees if login not in collaborators]
            if unknown:
                fail(
                    f"Cannot assign {', '.join(unknown)}: not a collaborator of {repo_name}\n\n"
                    "Run 'devdash issue collaborators' to see who can be assigned."
                )

    result = ctx.github.create_issue(
        ctx.cwd,
        resolved.identity,
        title=title.strip(),
        body=body,
        labels=list(labels),
        assignees=list(assignees),
    )
    if isinstance(result, GitHubLookupFailure) and result.kind == LookupFailureKind.FORBIDDEN:
        fail(f"You do not have permission to create issues in {repo_name}")
    created = Ensure.github_result(result, "the new issue", repo_name)

    if ctx.dry_run:
        return
    machine_output(str(created.number))
    user_output(f"Created issue #{created.number}: {created.url}")


@click.command("collaborators")
@click.pass_obj
def issue_collaborators(ctx: DevDashContext) -> None:
    """List logins that issues can be assigned to."""
    resolved = Ensure.github_repository(ctx)
    logins = Ensure.github_result(
        ctx.github.list_collaborators(ctx.cwd, resolved.identity),
        "collaborators",
        resolved.identity.full_name,
    )
    for login in sorted(logins, key=str.lower):
        machine_output(login)
