"""Fake GitHub operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from dataclasses import dataclass
from pathlib import Path

from devdash.core.github.abc import GitHub
from devdash.core.github.types import (
    ActivityItem,
    CreatedIssue,
    GitHubLookupFailure,
    IssueSummary,
    LookupFailureKind,
    PullRequestComment,
    PullRequestDetails,
    PullRequestRef,
    PullRequestSummary,
    RepositoryStats,
)
from devdash.core.remotes import RepositoryIdentity


@dataclass(frozen=True)
class IssueRequest:
    """An issue FakeGitHub was asked to create."""

    repo: RepositoryIdentity
    title: str
    body: str
    labels: tuple[str, ...]
    assignees: tuple[str, ...]


def _not_found() -> GitHubLookupFailure:
    return GitHubLookupFailure(kind=LookupFailureKind.NOT_FOUND, message="gh: Not Found (HTTP 404)")


def _failure(kind: LookupFailureKind, what: str) -> GitHubLookupFailure:
    return GitHubLookupFailure(kind=kind, message=f"{what}: {kind.value}")


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).
    """

    def __init__(
        self,
        *,
        pull_requests: dict[int, PullRequestRef] | None = None,
        lookup_failures: dict[int, LookupFailureKind] | None = None,
        pull_request_list: list[PullRequestSummary] | None = None,
        issues: list[IssueSummary] | None = None,
        list_failure: LookupFailureKind | None = None,
        pull_request_details: dict[int, PullRequestDetails] | None = None,
        pull_request_comments: dict[int, list[PullRequestComment]] | None = None,
        collaborators: list[str] | None = None,
        collaborators_failure: LookupFailureKind | None = None,
        repository_stats: RepositoryStats | None = None,
        activity: list[ActivityItem] | None = None,
        write_failure: LookupFailureKind | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            pull_requests: Mapping of PR number -> PullRequestRef
            lookup_failures: Mapping of PR or issue number -> failure kind to
                return instead of the configured value
            pull_request_list: Open pull requests returned by list_pull_requests
            issues: Open issues returned by list_issues and get_issue
            list_failure: If set, every list_* operation fails with this kind
            pull_request_details: Mapping of PR number -> details for `pr view`
            pull_request_comments: Mapping of PR number -> existing comments
            collaborators: Logins returned by list_collaborators
            collaborators_failure: If set, list_collaborators fails with this kind
            repository_stats: Returned by get_repository_stats (None: NOT_FOUND)
            activity: Feed returned by list_recent_activity
            write_failure: If set, create_issue and add_pull_request_comment fail
        """
        self._pull_requests = pull_requests or {}
        self._lookup_failures = lookup_failures or {}
        self._pull_request_list = pull_request_list or []
        self._issues = issues or []
        self._list_failure = list_failure
        self._pull_request_details = pull_request_details or {}
        self._pull_request_comments = {
            number: list(comments) for number, comments in (pull_request_comments or {}).items()
        }
        self._collaborators = collaborators or []
        self._collaborators_failure = collaborators_failure
        self._repository_stats = repository_stats
        self._activity = activity or []
        self._write_failure = write_failure

        self._get_pull_request_calls: list[tuple[RepositoryIdentity, int]] = []
        self._get_issue_calls: list[int] = []
        self._created_issues: list[IssueRequest] = []
        self._added_comments: list[tuple[int, str]] = []

    @property
    def get_pull_request_calls(self) -> list[tuple[RepositoryIdentity, int]]:
        """Read-only access to tracked get_pull_request() calls for test assertions."""
        return self._get_pull_request_calls

    @property
    def get_issue_calls(self) -> list[int]:
        """Issue numbers passed to get_issue()."""
        return self._get_issue_calls

    @property
    def created_issues(self) -> list[IssueRequest]:
        return self._created_issues

    @property
    def added_comments(self) -> list[tuple[int, str]]:
        """(PR number, body) pairs posted via add_pull_request_comment()."""
        return self._added_comments

    def get_pull_request(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestRef | GitHubLookupFailure:
        self._get_pull_request_calls.append((repo, number))
        kind = self._lookup_failures.get(number)
        if kind is not None:
            return _failure(kind, f"PR #{number}")
        pr = self._pull_requests.get(number)
        if pr is None:
            return _not_found()
        return pr

    def get_pull_request_details(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestDetails | GitHubLookupFailure:
        kind = self._lookup_failures.get(number)
        if kind is not None:
            return _failure(kind, f"PR #{number}")
        details = self._pull_request_details.get(number)
        if details is None:
            return _not_found()
        return details

    def list_pull_request_comments(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> list[PullRequestComment] | GitHubLookupFailure:
        if number not in self._pull_request_details:
            return _not_found()
        comments = self._pull_request_comments.get(number, [])
        return sorted(comments, key=lambda comment: comment.created_at)

    def add_pull_request_comment(
        self, cwd: Path, repo: RepositoryIdentity, number: int, body: str
    ) -> PullRequestComment | GitHubLookupFailure:
        if self._write_failure is not None:
            return _failure(self._write_failure, f"comment on PR #{number}")
        if number not in self._pull_request_details and number not in self._pull_requests:
            return _not_found()
        self._added_comments.append((number, body))
        comment_id = len(self._added_comments)
        comment = PullRequestComment(
            id=comment_id,
            kind="comment",
            author="fake-user",
            body=body,
            created_at="2099-01-01T00:00:00Z",
            url=f"https://github.com/{repo.full_name}/pull/{number}#issuecomment-{comment_id}",
        )
        self._pull_request_comments.setdefault(number, []).append(comment)
        return comment

    def list_pull_requests(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[PullRequestSummary] | GitHubLookupFailure:
        if self._list_failure is not None:
            return _failure(self._list_failure, "list pull requests")
        return self._pull_request_list[:limit]

    def list_issues(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[IssueSummary] | GitHubLookupFailure:
        if self._list_failure is not None:
            return _failure(self._list_failure, "list issues")
        return self._issues[:limit]

    def get_issue(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> IssueSummary | GitHubLookupFailure:
        self._get_issue_calls.append(number)
        kind = self._lookup_failures.get(number)
        if kind is not None:
            return _failure(kind, f"issue #{number}")
        for issue in self._issues:
            if issue.number == number:
                return issue
        return _not_found()

    def create_issue(
        self,
        cwd: Path,
        repo: RepositoryIdentity,
        *,
        title: str,
        body: str,
        labels: list[str],
        assignees: list[str],
    ) -> CreatedIssue | GitHubLookupFailure:
        if self._write_failure is not None:
            return _failure(self._write_failure, "create issue")
        self._created_issues.append(
            IssueRequest(
                repo=repo,
                title=title,
                body=body,
                labels=tuple(labels),
                assignees=tuple(assignees),
            )
        )
        number = max([issue.number for issue in self._issues], default=0) + len(
            self._created_issues
        )
        url = f"https://github.com/{repo.full_name}/issues/{number}"
        return CreatedIssue(number=number, url=url)

    def list_collaborators(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> list[str] | GitHubLookupFailure:
        if self._collaborators_failure is not None:
            return _failure(self._collaborators_failure, "list collaborators")
        return list(self._collaborators)

    def get_repository_stats(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> RepositoryStats | GitHubLookupFailure:
        if self._repository_stats is None:
            return _not_found()
        return self._repository_stats

    def list_recent_activity(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[ActivityItem] | GitHubLookupFailure:
        if self._list_failure is not None:
            return _failure(self._list_failure, "list activity")
        return self._activity[:limit]
