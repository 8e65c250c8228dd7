"""Post a comment on a pull request."""

import click

from devdash.cli.commands.pr.parse_pr_reference import parse_pr_reference
from devdash.cli.ensure import Ensure
from devdash.cli.output import user_output
from devdash.core.context import DevDashContext


@click.command("comment")
@click.argument("pr_reference")
@click.argument("body")
@click.pass_obj
def pr_comment(ctx: DevDashContext, pr_reference: str, body: str) -> None:
    """Add BODY as a comment on a pull request.

    Use "-" as BODY to read the comment from stdin.
    """
    if body == "-":
        body = click.get_text_stream("stdin").read()
    Ensure.invariant(bool(body.strip()), "Comment body must not be empty")

    pr_number = parse_pr_reference(pr_reference)
    resolved = Ensure.github_repository(ctx)

    comment = Ensure.github_result(
        ctx.github.add_pull_request_comment(ctx.cwd, resolved.identity, pr_number, body),
        f"PR #{pr_number}",
        resolved.identity.full_name,
    )

    if ctx.dry_run:
        return
    user_output(f"Commented on PR #{pr_number}: {comment.url}")
