"""Builders shared across the test suite."""

from pathlib import Path

from devdash.core.git.fake import FakeGit
from devdash.core.github.types import PullRequestComment, PullRequestDetails, PullRequestRef
from devdash.core.remotes import RepositoryIdentity

REPO = Path("/test/repo")
ACME_WIDGETS = RepositoryIdentity(owner="acme", repo="widgets")


def same_repo_pr(number: int = 7, head_ref: str = "fix-123", **overrides) -> PullRequestRef:
    fields = dict(
        number=number,
        head_ref=head_ref,
        head_repo_full_name="acme/widgets",
        head_clone_url="https://github.com/acme/widgets.git",
        head_owner_login="acme",
        base=ACME_WIDGETS,
        title="Fix the thing",
        state="open",
        author="alice",
    )
    fields.update(overrides)
    return PullRequestRef(**fields)


def fork_pr(number: int = 42, head_ref: str = "feature-x", **overrides) -> PullRequestRef:
    fields = dict(
        number=number,
        head_ref=head_ref,
        head_repo_full_name="contributor/widgets",
        head_clone_url="https://github.com/contributor/widgets.git",
        head_owner_login="contributor",
        base=ACME_WIDGETS,
        title="Add feature x",
        state="open",
        author="contributor",
    )
    fields.update(overrides)
    return PullRequestRef(**fields)


def github_checkout_git(**kwargs) -> FakeGit:
    """FakeGit for REPO, a work tree whose origin is acme/widgets on GitHub."""
    kwargs.setdefault("remotes", {REPO: {"origin": "https://github.com/acme/widgets.git"}})
    return FakeGit(work_trees={REPO}, **kwargs)


def pr_details(number: int = 42, **overrides) -> PullRequestDetails:
    fields = dict(
        number=number,
        title="Add feature x",
        body="Adds the x feature.\n\nCloses #12.",
        state="open",
        author="contributor",
        base_ref="main",
        head_ref="feature-x",
        head_label="contributor:feature-x",
        is_draft=False,
        merged=False,
        additions=10,
        deletions=2,
        changed_files=3,
        commits=1,
        comments=1,
        review_comments=1,
        created_at="2024-05-01T10:00:00Z",
        url=f"https://github.com/acme/widgets/pull/{number}",
    )
    fields.update(overrides)
    return PullRequestDetails(**fields)


def review_thread() -> list[PullRequestComment]:
    """One inline review comment followed by a conversation comment."""
    return [
        PullRequestComment(
            id=2,
            kind="comment",
            author="bob",
            body="LGTM once the nit is fixed",
            created_at="2024-05-03T09:00:00Z",
            url="https://github.com/acme/widgets/pull/42#issuecomment-2",
        ),
        PullRequestComment(
            id=1,
            kind="review",
            author="carol",
            body="nit: rename this",
            created_at="2024-05-02T09:00:00Z",
            url="https://github.com/acme/widgets/pull/42#discussion_r1",
            path="src/widgets/x.py",
            line=12,
        ),
    ]
