"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod
from pathlib import Path

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


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real and fake) must implement this interface.
    Every operation reports failure as a GitHubLookupFailure value rather than
    raising, so callers decide how a missing PR or an expired login is shown.
    """

    @abstractmethod
    def get_pull_request(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestRef | GitHubLookupFailure:
        """Look up the head of a pull request.

        Args:
            cwd: Working directory to run gh in
            repo: Repository the pull request belongs to
            number: Pull request number

        Returns:
            PullRequestRef, or GitHubLookupFailure whose kind says whether the
            PR does not exist, the API is rate limited, or a login is required
        """
        ...

    @abstractmethod
    def get_pull_request_details(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestDetails | GitHubLookupFailure:
        """Look up title, description, and change statistics of a pull request."""
        ...

    @abstractmethod
    def list_pull_request_comments(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> list[PullRequestComment] | GitHubLookupFailure:
        """List conversation and inline review comments, oldest first."""
        ...

    @abstractmethod
    def add_pull_request_comment(
        self, cwd: Path, repo: RepositoryIdentity, number: int, body: str
    ) -> PullRequestComment | GitHubLookupFailure:
        """Post a conversation comment on a pull request."""
        ...

    @abstractmethod
    def list_pull_requests(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[PullRequestSummary] | GitHubLookupFailure:
        """List open pull requests, most recently updated first.

        Returns:
            Up to `limit` pull requests, or GitHubLookupFailure
        """
        ...

    @abstractmethod
    def list_issues(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[IssueSummary] | GitHubLookupFailure:
        """List open issues (excluding pull requests), most recently updated first.

        Returns:
            Up to `limit` issues, or GitHubLookupFailure
        """
        ...

    @abstractmethod
    def get_issue(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> IssueSummary | GitHubLookupFailure:
        """Look up a single issue. A pull request number is reported as NOT_FOUND."""
        ...

    @abstractmethod
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
        """Open a new issue.

        Returns:
            CreatedIssue, or GitHubLookupFailure (FORBIDDEN without write access,
            INVALID_REQUEST when GitHub rejects a label or assignee)
        """
        ...

    @abstractmethod
    def list_collaborators(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> list[str] | GitHubLookupFailure:
        """List logins that can be assigned to issues."""
        ...

    @abstractmethod
    def get_repository_stats(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> RepositoryStats | GitHubLookupFailure:
        """Look up stars, forks, watchers, and open issue counts."""
        ...

    @abstractmethod
    def list_recent_activity(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[ActivityItem] | GitHubLookupFailure:
        """Recent commits and repository events merged into one feed, newest first."""
        ...
