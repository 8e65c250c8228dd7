"""Show a pull request's description, statistics, and discussion."""

import click

from devdash.cli.commands.pr.parse_pr_reference import parse_pr_reference
from devdash.cli.ensure import Ensure
from devdash.cli.output import machine_output, user_output
from devdash.core.context import DevDashContext
from devdash.core.github.types import PullRequestComment
from devdash.core.pr_content import generate_copyable_content, pr_state_label


def _print_comment(comment: PullRequestComment) -> None:
    author = comment.author or "unknown"
    where = ""
    if comment.kind == "review" and comment.path is not None:
        where = f" on {comment.path}" + (f":{comment.line}" if comment.line is not None else "")
    heading = click.style(f"@{author}", bold=True)
    user_output(heading + click.style(f"{where} {comment.created_at}", dim=True))
    for line in comment.body.strip().splitlines() or [""]:
        user_output(f"  {line}")
    user_output()


@click.command("view")
@click.argument("pr_reference")
@click.option("--comments", "show_comments", is_flag=True, help="Also show the discussion.")
@click.option(
    "--markdown",
    is_flag=True,
    help="Print the PR and all comments as one markdown document on stdout.",
)
@click.pass_obj
def pr_view(ctx: DevDashContext, pr_reference: str, show_comments: bool, markdown: bool) -> None:
    """Show title, description, and change statistics of a pull request.

    PR_REFERENCE can be a plain number (123) or GitHub URL
    (https://github.com/owner/repo/pull/123).

    Examples:

        # Copy a PR with its review thread to the clipboard (macOS)
        devdash pr view 123 --markdown | pbcopy
    """
    pr_number = parse_pr_reference(pr_reference)
    resolved = Ensure.github_repository(ctx)
    repo_name = resolved.identity.full_name
    subject = f"PR #{pr_number}"

    details = Ensure.github_result(
        ctx.github.get_pull_request_details(ctx.cwd, resolved.identity, pr_number),
        subject,
        repo_name,
    )

    comments: list[PullRequestComment] = []
    if show_comments or markdown:
        comments = Ensure.github_result(
            ctx.github.list_pull_request_comments(ctx.cwd, resolved.identity, pr_number),
            f"comments of {subject}",
            repo_name,
        )

    if markdown:
        machine_output(generate_copyable_content(details, comments), nl=False)
        return

    user_output(
        click.style(f"PR #{details.number}", bold=True)
        + f" {details.title} "
        + click.style(f"[{pr_state_label(details)}]", fg="cyan")
    )
    user_output(f"  author:  {details.author or '-'}")
    user_output(f"  branch:  {details.head_label} -> {details.base_ref}")
    user_output(
        f"  changes: +{details.additions} -{details.deletions} "
        f"in {details.changed_files} file(s), {details.commits} commit(s)"
    )
    user_output(f"  url:     {details.url}")
    user_output()
    user_output(details.body.strip() or click.style("No description provided.", dim=True))

    if show_comments:
        user_output()
        user_output(click.style(f"Comments ({len(comments)})", bold=True))
        user_output()
        for comment in comments:
            _print_comment(comment)
