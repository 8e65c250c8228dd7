"""GitHub operations subpackage."""

from devdash.core.github.abc import GitHub
from devdash.core.github.real import RealGitHub
from devdash.core.github.types import (
    ActivityItem,
    CreatedIssue,
    GitHubLookupFailure,
    GitHubSession,
    IssueSummary,
    LookupFailureKind,
    PullRequestComment,
    PullRequestDetails,
    PullRequestRef,
    PullRequestSummary,
    RepositoryStats,
)

__all__ = [
    "ActivityItem",
    "CreatedIssue",
    "GitHub",
    "GitHubLookupFailure",
    "GitHubSession",
    "IssueSummary",
    "LookupFailureKind",
    "PullRequestComment",
    "PullRequestDetails",
    "PullRequestRef",
    "PullRequestSummary",
    "RealGitHub",
    "RepositoryStats",
]
