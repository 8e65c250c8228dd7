"""No-op wrapper for GitHub operations."""

from pathlib import Path

from devdash.cli.output import user_output
from devdash.core.github.abc import GitHub
from devdash.core.github.types import (
    ActivityItem,
    CreatedIssue,
    GitHubLookupFailure,
    IssueSummary,
    PullRequestComment,
    PullRequestDetails,
    PullRequestRef,
    PullRequestSummary,
    RepositoryStats,
)
from devdash.core.remotes import RepositoryIdentity


class DryRunGitHub(GitHub):
    """No-op wrapper for GitHub operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what they would do and return a placeholder
    result numbered -1.
    """

    def __init__(self, wrapped: GitHub) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real GitHub operations implementation to wrap
        """
        self._wrapped = wrapped

    def get_pull_request(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestRef | GitHubLookupFailure:
        return self._wrapped.get_pull_request(cwd, repo, number)

    def get_pull_request_details(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestDetails | GitHubLookupFailure:
        return self._wrapped.get_pull_request_details(cwd, repo, number)

    def list_pull_request_comments(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> list[PullRequestComment] | GitHubLookupFailure:
        return self._wrapped.list_pull_request_comments(cwd, repo, number)

    def list_pull_requests(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[PullRequestSummary] | GitHubLookupFailure:
        return self._wrapped.list_pull_requests(cwd, repo, limit=limit)

    def list_issues(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[IssueSummary] | GitHubLookupFailure:
        return self._wrapped.list_issues(cwd, repo, limit=limit)

    def get_issue(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> IssueSummary | GitHubLookupFailure:
        return self._wrapped.get_issue(cwd, repo, number)

    def list_collaborators(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> list[str] | GitHubLookupFailure:
        return self._wrapped.list_collaborators(cwd, repo)

    def get_repository_stats(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> RepositoryStats | GitHubLookupFailure:
        return self._wrapped.get_repository_stats(cwd, repo)

    def list_recent_activity(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[ActivityItem] | GitHubLookupFailure:
        return self._wrapped.list_recent_activity(cwd, repo, limit=limit)

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
        """Print dry-run message instead of creating the issue."""
        user_output(f"[DRY RUN] Would create issue in {repo.full_name}: {title}")
        return CreatedIssue(number=-1, url="")

    def add_pull_request_comment(
        self, cwd: Path, repo: RepositoryIdentity, number: int, body: str
    ) -> PullRequestComment | GitHubLookupFailure:
        """Print dry-run message instead of posting the comment."""
        user_output(f"[DRY RUN] Would comment on PR #{number} in {repo.full_name}")
        return PullRequestComment(
            id=-1, kind="comment", author=None, body=body, created_at="", url=""
        )
