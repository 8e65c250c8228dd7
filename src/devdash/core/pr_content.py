"""Render a pull request and its discussion as a markdown document."""

from devdash.core.github.types import PullRequestComment, PullRequestDetails


def _comment_heading(comment: PullRequestComment) -> str:
    author = f"@{comment.author}" if comment.author else "unknown"
    if comment.kind == "review" and comment.path is not None:
        location = comment.path if comment.line is None else f"{comment.path}:{comment.line}"
        return f"### {author} on {location} ({comment.created_at})"
    return f"### {author} ({comment.created_at})"


def generate_copyable_content(
    details: PullRequestDetails, comments: list[PullRequestComment]
) -> str:
    """Build a self-contained markdown summary for pasting into chats or prompts.

    Comments keep the order given; callers pass them oldest first.
    """
    lines = [
        f"# PR #{details.number}: {details.title}",
        "",
        f"- Author: @{details.author}" if details.author else "- Author: unknown",
        f"- State: {pr_state_label(details)}",
        f"- Branch: {details.head_label} into {details.base_ref}",
        f"- Changes: +{details.additions} -{details.deletions} "
        f"in {details.changed_files} file(s), {details.commits} commit(s)",
        f"- URL: {details.url}",
        "",
        "## Description",
        "",
        details.body.strip() or "_No description provided._",
    ]

    if comments:
        lines += ["", f"## Comments ({len(comments)})"]
        for comment in comments:
            lines += ["", _comment_heading(comment), "", comment.body.strip()]

    return "\n".join(lines) + "\n"


def pr_state_label(details: PullRequestDetails) -> str:
    if details.merged:
        return "merged"
    if details.is_draft and details.state == "open":
        return "draft"
    return details.state
