"""Type definitions for GitHub operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from devdash.core.remotes import RepositoryIdentity


@dataclass(frozen=True)
class PullRequestRef:
    """Pull request metadata needed to plan a local checkout.

    head_repo_full_name and head_clone_url are None when the source repository
    is no longer accessible (e.g. the fork was deleted).
    """

    number: int
    head_ref: str
    head_repo_full_name: str | None
    head_clone_url: str | None
    head_owner_login: str | None
    base: RepositoryIdentity
    title: str | None = None
    state: str | None = None  # "open", "closed"
    author: str | None = None


@dataclass(frozen=True)
class PullRequestSummary:
    """One row of the open pull request listing."""

    number: int
    title: str
    author: str | None
    head_ref: str
    is_draft: bool
    updated_at: str
    url: str


@dataclass(frozen=True)
class IssueSummary:
    """One row of the open issue listing."""

    number: int
    title: str
    author: str | None
    labels: tuple[str, ...]
    assignees: tuple[str, ...]
    updated_at: str
    url: str


@dataclass(frozen=True)
class PullRequestDetails:
    """Everything `pr view` shows about one pull request."""

    number: int
    title: str
    body: str
    state: str
    author: str | None
    base_ref: str
    head_ref: str
    head_label: str
    is_draft: bool
    merged: bool
    additions: int
    deletions: int
    changed_files: int
    commits: int
    comments: int
    review_comments: int
    created_at: str
    url: str


CommentKind = Literal["comment", "review"]


@dataclass(frozen=True)
class PullRequestComment:
    """A conversation comment or an inline review comment on a pull request.

    path and line are only set for review comments.
    """

    id: int
    kind: CommentKind
    author: str | None
    body: str
    created_at: str
    url: str
    path: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class CreatedIssue:
    number: int
    url: str


@dataclass(frozen=True)
class RepositoryStats:
    full_name: str
    description: str | None
    stars: int
    forks: int
    watchers: int
    open_issues: int
    default_branch: str
    url: str


ActivityKind = Literal["commit", "event"]


@dataclass(frozen=True)
class ActivityItem:
    """One line of the repository activity feed.

    Commits and events are merged into a single feed ordered by created_at.
    sha is only set for commits.
    """

    kind: ActivityKind
    actor: str | None
    summary: str
    created_at: str
    sha: str | None = None


class LookupFailureKind(Enum):
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    AUTH_REQUIRED = "auth_required"
    FORBIDDEN = "forbidden"
    INVALID_REQUEST = "invalid_request"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class GitHubLookupFailure:
    """Sentinel: a GitHub request did not produce a result."""

    kind: LookupFailureKind
    message: str


@dataclass(frozen=True)
class GitHubSession:
    """Credentials handed to the GitHub gateway by whoever owns the login.

    token=None means "use whatever gh is already logged in as".
    """

    token: str | None = None
    hostname: str = "github.com"
