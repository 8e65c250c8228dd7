"""Tests for gh api response parsing and error classification."""

import pytest

from devdash.core.github.parsing import (
    classify_gh_api_error,
    merge_activity,
    parse_commit_activity,
    parse_event_activity,
    parse_issue,
    parse_issue_list,
    parse_pull_request,
    parse_pull_request_details,
    parse_pull_request_list,
    parse_repository_stats,
    summarize_event,
)
from devdash.core.github.types import LookupFailureKind
from tests.test_utils import ACME_WIDGETS


def _pr_payload(**head_overrides) -> dict:
    head = {
        "ref": "feature-x",
        "user": {"login": "contributor"},
        "repo": {
            "full_name": "contributor/widgets",
            "clone_url": "https://github.com/contributor/widgets.git",
            "owner": {"login": "contributor"},
        },
    }
    head.update(head_overrides)
    return {
        "number": 42,
        "title": "Add feature x",
        "state": "open",
        "user": {"login": "contributor"},
        "head": head,
    }


@pytest.mark.parametrize(
    ("stderr", "kind"),
    [
        ("gh: Not Found (HTTP 404)", LookupFailureKind.NOT_FOUND),
        ("gh: API rate limit exceeded for user (HTTP 403)", LookupFailureKind.RATE_LIMITED),
        ("gh: Too Many Requests (HTTP 429)", LookupFailureKind.RATE_LIMITED),
        ("gh: Bad credentials (HTTP 401)", LookupFailureKind.AUTH_REQUIRED),
        (
            "To get started with GitHub CLI, please run:  gh auth login",
            LookupFailureKind.AUTH_REQUIRED,
        ),
        ("gh: Resource not accessible by integration (HTTP 403)", LookupFailureKind.FORBIDDEN),
        ("gh: Validation Failed (HTTP 422)", LookupFailureKind.INVALID_REQUEST),
        ("error connecting to api.github.com", LookupFailureKind.UNAVAILABLE),
    ],
)
def test_classify_gh_api_error(stderr: str, kind: LookupFailureKind) -> None:
    assert classify_gh_api_error(stderr) == kind


def test_parse_fork_pull_request() -> None:
    pr = parse_pull_request(_pr_payload(), base=ACME_WIDGETS)

    assert pr is not None
    assert pr.number == 42
    assert pr.head_ref == "feature-x"
    assert pr.head_repo_full_name == "contributor/widgets"
    assert pr.head_clone_url == "https://github.com/contributor/widgets.git"
    assert pr.head_owner_login == "contributor"
    assert pr.base == ACME_WIDGETS
    assert pr.state == "open"


def test_deleted_fork_has_no_clone_url() -> None:
    pr = parse_pull_request(_pr_payload(repo=None), base=ACME_WIDGETS)

    assert pr is not None
    assert pr.head_repo_full_name is None
    assert pr.head_clone_url is None
    assert pr.head_owner_login == "contributor"


def test_missing_head_ref_is_unparseable() -> None:
    assert parse_pull_request(_pr_payload(ref=""), base=ACME_WIDGETS) is None
    assert parse_pull_request({"number": 1}, base=ACME_WIDGETS) is None


def test_parse_pull_request_list_skips_malformed() -> None:
    data = [
        {
            "number": 1,
            "title": "First",
            "user": {"login": "alice"},
            "head": {"ref": "a"},
            "draft": True,
            "updated_at": "2024-05-01T10:00:00Z",
            "html_url": "https://github.com/acme/widgets/pull/1",
        },
        {"title": "no number"},
    ]

    summaries = parse_pull_request_list(data)

    assert len(summaries) == 1
    assert summaries[0].is_draft is True
    assert summaries[0].author == "alice"


def test_parse_issue_list_drops_pull_requests() -> None:
    data = [
        {
            "number": 3,
            "title": "Crash",
            "user": {"login": "bob"},
            "labels": [{"name": "bug"}, "not-a-label"],
            "assignees": [{"login": "carol"}],
            "updated_at": "2024-05-02T10:00:00Z",
            "html_url": "https://github.com/acme/widgets/issues/3",
        },
        {"number": 4, "title": "A PR", "pull_request": {"url": "..."}},
    ]

    issues = parse_issue_list(data)

    assert [issue.number for issue in issues] == [3]
    assert issues[0].labels == ("bug",)
    assert issues[0].assignees == ("carol",)


def test_parse_issue_skips_pull_requests() -> None:
    assert parse_issue({"number": 7, "title": "PR", "pull_request": {"url": "x"}}) is None


def test_parse_issue() -> None:
    issue = parse_issue(
        {
            "number": 12,
            "title": "Crash",
            "user": {"login": "bob"},
            "labels": [{"name": "bug"}, "not-a-dict"],
            "assignees": [{"login": "carol"}],
        }
    )

    assert issue is not None
    assert (issue.number, issue.title, issue.author) == (12, "Crash", "bob")
    assert issue.labels == ("bug",)
    assert issue.assignees == ("carol",)


def test_parse_pull_request_details_defaults_missing_counts() -> None:
    details = parse_pull_request_details(
        {"number": 42, "title": "T", "head": {"ref": "x"}, "base": {"ref": "main"}, "body": None}
    )

    assert details is not None
    assert details.body == ""
    assert details.head_label == "x"
    assert (details.additions, details.commits) == (0, 0)


def test_parse_pull_request_details_requires_base() -> None:
    assert parse_pull_request_details({"number": 42, "head": {"ref": "x"}}) is None


def test_repository_watchers_are_subscribers() -> None:
    stats = parse_repository_stats(
        {"full_name": "acme/widgets", "watchers_count": 120, "subscribers_count": 8}
    )

    assert stats is not None
    assert stats.watchers == 8


@pytest.mark.parametrize(
    ("event_type", "payload", "summary"),
    [
        ("PushEvent", {"commits": [{}, {}]}, "pushed 2 commit(s)"),
        ("PushEvent", {"size": 3}, "pushed 3 commit(s)"),
        ("IssuesEvent", {"action": "closed", "issue": {"number": 5}}, "closed issue #5"),
        (
            "PullRequestEvent",
            {"action": "opened", "pull_request": {"number": 9}},
            "opened pull request #9",
        ),
        ("CreateEvent", {"ref_type": "branch", "ref": "feature-x"}, "created branch feature-x"),
        ("CreateEvent", {"ref_type": "repository", "ref": None}, "created repository"),
        ("WatchEvent", {"action": "started"}, "starred the repository"),
        ("ForkEvent", {}, "Fork"),
    ],
)
def test_summarize_event(event_type: str, payload: dict, summary: str) -> None:
    assert summarize_event(event_type, payload) == summary


def test_commit_activity_uses_first_message_line_and_falls_back_to_git_author() -> None:
    items = parse_commit_activity(
        [
            {
                "sha": "abc",
                "author": None,
                "commit": {"message": "Subject\n\nBody", "author": {"name": "Dana", "date": "d"}},
            }
        ]
    )

    assert [(i.actor, i.summary, i.created_at) for i in items] == [("Dana", "Subject", "d")]


def test_merge_activity_orders_newest_first_and_limits() -> None:
    commits = parse_commit_activity(
        [{"sha": "a", "commit": {"message": "old", "author": {"date": "2024-05-01T00:00:00Z"}}}]
    )
    events = parse_event_activity(
        [
            {"type": "WatchEvent", "payload": {}, "created_at": "2024-05-03T00:00:00Z"},
            {"type": "PushEvent", "payload": {"size": 1}, "created_at": "2024-05-02T00:00:00Z"},
        ]
    )

    merged = merge_activity(commits, events, limit=2)

    assert [item.summary for item in merged] == ["starred the repository", "pushed 1 commit(s)"]
