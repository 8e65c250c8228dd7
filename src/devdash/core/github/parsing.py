"""Parsing helpers for GitHub REST responses returned by `gh api`."""

import re
from typing import Any

from devdash.core.github.types import (
    ActivityItem,
    CommentKind,
    IssueSummary,
    LookupFailureKind,
    PullRequestComment,
    PullRequestDetails,
    PullRequestRef,
    PullRequestSummary,
    RepositoryStats,
)
from devdash.core.remotes import RepositoryIdentity

_HTTP_STATUS_RE = re.compile(r"\(HTTP (\d{3})\)")


def classify_gh_api_error(stderr: str) -> LookupFailureKind:
    """Map `gh api` stderr to a lookup failure kind.

    gh reports HTTP errors as e.g. "gh: Not Found (HTTP 404)". Missing logins
    are reported without a status, pointing at `gh auth login`.
    """
    lowered = stderr.lower()
    match = _HTTP_STATUS_RE.search(stderr)
    status = int(match.group(1)) if match else None

    if status == 404:
        return LookupFailureKind.NOT_FOUND
    if status == 429 or "rate limit" in lowered:
        return LookupFailureKind.RATE_LIMITED
    if status == 403:
        return LookupFailureKind.FORBIDDEN
    if status == 422:
        return LookupFailureKind.INVALID_REQUEST
    if status == 401 or "gh auth login" in lowered or "authentication" in lowered:
        return LookupFailureKind.AUTH_REQUIRED
    return LookupFailureKind.UNAVAILABLE


def _login(user: Any) -> str | None:
    if isinstance(user, dict):
        login = user.get("login")
        if isinstance(login, str):
            return login
    return None


def parse_pull_request(data: dict[str, Any], base: RepositoryIdentity) -> PullRequestRef | None:
    """Build a PullRequestRef from a `GET /repos/{owner}/{repo}/pulls/{n}` payload.

    Returns None when required fields are missing. A deleted head repository
    comes back as `"repo": null` and yields None clone URL and full name.
    """
    head = data.get("head")
    number = data.get("number")
    if not isinstance(head, dict) or not isinstance(number, int):
        return None
    head_ref = head.get("ref")
    if not isinstance(head_ref, str) or not head_ref:
        return None

    head_repo = head.get("repo")
    head_repo_full_name: str | None = None
    head_clone_url: str | None = None
    head_owner_login: str | None = None
    if isinstance(head_repo, dict):
        head_repo_full_name = head_repo.get("full_name")
        head_clone_url = head_repo.get("clone_url")
        head_owner_login = _login(head_repo.get("owner"))
    if head_owner_login is None:
        head_owner_login = _login(head.get("user"))

    return PullRequestRef(
        number=number,
        head_ref=head_ref,
        head_repo_full_name=head_repo_full_name,
        head_clone_url=head_clone_url,
        head_owner_login=head_owner_login,
        base=base,
        title=data.get("title"),
        state=data.get("state"),
        author=_login(data.get("user")),
    )


def parse_pull_request_list(data: list[dict[str, Any]]) -> list[PullRequestSummary]:
    """Parse `GET /repos/{owner}/{repo}/pulls`, skipping malformed entries."""
    summaries: list[PullRequestSummary] = []
    for item in data:
        head = item.get("head")
        if not isinstance(item.get("number"), int) or not isinstance(head, dict):
            continue
        summaries.append(
            PullRequestSummary(
                number=item["number"],
                title=item.get("title") or "",
                author=_login(item.get("user")),
                head_ref=head.get("ref") or "",
                is_draft=bool(item.get("draft", False)),
                updated_at=item.get("updated_at") or "",
                url=item.get("html_url") or "",
            )
        )
    return summaries


def parse_issue(item: dict[str, Any]) -> IssueSummary | None:
    """Parse one `GET /repos/{owner}/{repo}/issues/{n}` payload.

    Returns None for malformed entries and for pull requests, which the
    issues endpoints also return (they carry a `pull_request` key).
    """
    if "pull_request" in item or not isinstance(item.get("number"), int):
        return None
    labels = tuple(
        label["name"]
        for label in item.get("labels") or []
        if isinstance(label, dict) and isinstance(label.get("name"), str)
    )
    assignees = tuple(
        login
        for login in (_login(user) for user in item.get("assignees") or [])
        if login is not None
    )
    return IssueSummary(
        number=item["number"],
        title=item.get("title") or "",
        author=_login(item.get("user")),
        labels=labels,
        assignees=assignees,
        updated_at=item.get("updated_at") or "",
        url=item.get("html_url") or "",
    )


def parse_issue_list(data: list[dict[str, Any]]) -> list[IssueSummary]:
    """Parse `GET /repos/{owner}/{repo}/issues`, dropping pull requests."""
    summaries: list[IssueSummary] = []
    for item in data:
        issue = parse_issue(item)
        if issue is not None:
            summaries.append(issue)
    return summaries


def _count(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def parse_pull_request_details(data: dict[str, Any]) -> PullRequestDetails | None:
    """Parse the full `GET /repos/{owner}/{repo}/pulls/{n}` payload for display."""
    number = data.get("number")
    head = data.get("head")
    base = data.get("base")
    if not isinstance(number, int) or not isinstance(head, dict) or not isinstance(base, dict):
        return None
    return PullRequestDetails(
        number=number,
        title=data.get("title") or "",
        body=data.get("body") or "",
        state=data.get("state") or "",
        author=_login(data.get("user")),
        base_ref=base.get("ref") or "",
        head_ref=head.get("ref") or "",
        head_label=head.get("label") or head.get("ref") or "",
        is_draft=bool(data.get("draft", False)),
        merged=bool(data.get("merged", False)),
        additions=_count(data, "additions"),
        deletions=_count(data, "deletions"),
        changed_files=_count(data, "changed_files"),
        commits=_count(data, "commits"),
        comments=_count(data, "comments"),
        review_comments=_count(data, "review_comments"),
        created_at=data.get("created_at") or "",
        url=data.get("html_url") or "",
    )


def parse_comment(item: dict[str, Any], kind: CommentKind) -> PullRequestComment | None:
    """Parse an issue comment or a pull request review comment."""
    comment_id = item.get("id")
    if not isinstance(comment_id, int):
        return None
    line = item.get("line")
    return PullRequestComment(
        id=comment_id,
        kind=kind,
        author=_login(item.get("user")),
        body=item.get("body") or "",
        created_at=item.get("created_at") or "",
        url=item.get("html_url") or "",
        path=item.get("path") if kind == "review" else None,
        line=line if kind == "review" and isinstance(line, int) else None,
    )


def parse_comment_list(data: list[dict[str, Any]], kind: CommentKind) -> list[PullRequestComment]:
    comments: list[PullRequestComment] = []
    for item in data:
        comment = parse_comment(item, kind)
        if comment is not None:
            comments.append(comment)
    return comments


def parse_repository_stats(data: dict[str, Any]) -> RepositoryStats | None:
    """Parse `GET /repos/{owner}/{repo}`.

    GitHub's `watchers_count` mirrors stargazers; people watching the
    repository are counted in `subscribers_count`.
    """
    full_name = data.get("full_name")
    if not isinstance(full_name, str):
        return None
    return RepositoryStats(
        full_name=full_name,
        description=data.get("description"),
        stars=_count(data, "stargazers_count"),
        forks=_count(data, "forks_count"),
        watchers=_count(data, "subscribers_count"),
        open_issues=_count(data, "open_issues_count"),
        default_branch=data.get("default_branch") or "",
        url=data.get("html_url") or "",
    )


def parse_collaborators(data: list[dict[str, Any]]) -> list[str]:
    return [login for login in (_login(user) for user in data) if login is not None]


def parse_commit_activity(data: list[dict[str, Any]]) -> list[ActivityItem]:
    """Turn `GET /repos/{owner}/{repo}/commits` into feed items (first message line)."""
    items: list[ActivityItem] = []
    for entry in data:
        commit = entry.get("commit")
        sha = entry.get("sha")
        if not isinstance(commit, dict) or not isinstance(sha, str):
            continue
        git_author = commit.get("author") if isinstance(commit.get("author"), dict) else {}
        message = commit.get("message") or ""
        items.append(
            ActivityItem(
                kind="commit",
                actor=_login(entry.get("author")) or git_author.get("name"),
                summary=message.splitlines()[0] if message else "",
                created_at=git_author.get("date") or "",
                sha=sha,
            )
        )
    return items


def summarize_event(event_type: str, payload: dict[str, Any]) -> str:
    """One-line description of a repository event.

    >>> summarize_event("IssuesEvent", {"action": "opened", "issue": {"number": 12}})
    'opened issue #12'
    """
    if event_type == "PushEvent":
        commits = payload.get("commits")
        count = len(commits) if isinstance(commits, list) else payload.get("size", 0)
        return f"pushed {count} commit(s)"
    if event_type == "IssuesEvent":
        issue = payload.get("issue") or {}
        return f"{payload.get('action')} issue #{issue.get('number')}"
    if event_type == "PullRequestEvent":
        pull_request = payload.get("pull_request") or {}
        return f"{payload.get('action')} pull request #{pull_request.get('number')}"
    if event_type == "CreateEvent":
        ref = payload.get("ref")
        return f"created {payload.get('ref_type')}" + (f" {ref}" if ref else "")
    if event_type == "WatchEvent":
        return "starred the repository"
    return event_type.removesuffix("Event")


def parse_event_activity(data: list[dict[str, Any]]) -> list[ActivityItem]:
    """Turn `GET /repos/{owner}/{repo}/events` into feed items."""
    items: list[ActivityItem] = []
    for event in data:
        event_type = event.get("type")
        if not isinstance(event_type, str):
            continue
        payload = event.get("payload") if isinstance(event.get("payload"), dict) else {}
        items.append(
            ActivityItem(
                kind="event",
                actor=_login(event.get("actor")),
                summary=summarize_event(event_type, payload),
                created_at=event.get("created_at") or "",
            )
        )
    return items


def merge_activity(
    commits: list[ActivityItem], events: list[ActivityItem], *, limit: int
) -> list[ActivityItem]:
    """Newest first across both sources, truncated to `limit`.

    ISO 8601 timestamps from the API sort correctly as strings.
    """
    merged = sorted([*commits, *events], key=lambda item: item.created_at, reverse=True)
    return merged[:limit]
