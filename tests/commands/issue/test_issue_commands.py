"""Tests for devdash issue list and issue checkout."""

from click.testing import CliRunner

from devdash.cli.commands.issue import issue_group
from devdash.core.context import DevDashContext
from devdash.core.github.fake import FakeGitHub
from devdash.core.github.types import IssueSummary, LookupFailureKind
from devdash.core.workspace_locks import InMemoryWorkspaceLocks
from tests.test_utils import REPO, github_checkout_git

CRASH_ISSUE = IssueSummary(
    number=12,
    title="Crash on empty remote list",
    author="bob",
    labels=("bug", "good first issue"),
    assignees=("carol",),
    updated_at="2024-05-02T10:00:00Z",
    url="https://github.com/acme/widgets/issues/12",
)


def test_issue_list_shows_suggested_branch() -> None:
    runner = CliRunner()
    github = FakeGitHub(issues=[CRASH_ISSUE])
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(issue_group, ["list"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Crash on empty remote list" in result.output
    assert "bug, good first issue" in result.output
    assert "issue-12-crash-on-empty-remote-list" in result.output


def test_issue_list_reports_github_failure() -> None:
    runner = CliRunner()
    github = FakeGitHub(issues=[CRASH_ISSUE], list_failure=LookupFailureKind.AUTH_REQUIRED)
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(issue_group, ["list"], obj=ctx)

    assert result.exit_code == 1
    assert "GitHub authentication required" in result.output
    assert "No open issues" not in result.output


def test_issue_list_empty() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(issue_group, ["list"], obj=ctx)

    assert result.exit_code == 0
    assert "No open issues in acme/widgets" in result.output


def test_issue_checkout_suggests_branch_from_title() -> None:
    runner = CliRunner()
    git = github_checkout_git(local_branches={REPO: ["main"]})
    github = FakeGitHub(issues=[CRASH_ISSUE])
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "12"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Created and checked out 'issue-12-crash-on-empty-remote-list'" in result.output
    assert git.created_branches == [("issue-12-crash-on-empty-remote-list", None)]


def test_issue_checkout_unknown_issue_fails_without_creating_a_branch() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    ctx = DevDashContext.for_test(git=git, github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "99"], obj=ctx)

    assert result.exit_code == 1
    assert "Could not find issue #99 in acme/widgets" in result.output
    assert git.created_branches == []


def test_issue_checkout_looks_up_the_single_issue() -> None:
    """The title comes from the issue itself, not from a page of open issues."""
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(issues=[CRASH_ISSUE], list_failure=LookupFailureKind.UNAVAILABLE)
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "12"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert github.get_issue_calls == [12]
    assert git.created_branches == [("issue-12-crash-on-empty-remote-list", None)]


def test_issue_checkout_explicit_branch_skips_lookup() -> None:
    runner = CliRunner()
    github = FakeGitHub()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "99", "issue-99"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert github.get_issue_calls == []


def test_issue_checkout_explicit_branch_existing() -> None:
    runner = CliRunner()
    git = github_checkout_git(local_branches={REPO: ["main", "fix/crash"]})
    ctx = DevDashContext.for_test(git=git, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "12", "fix/crash"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Checked out existing branch 'fix/crash' for issue #12" in result.output
    assert git.checked_out_branches == ["fix/crash"]
    assert git.resets == []


def test_issue_checkout_rejects_invalid_branch_name() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    ctx = DevDashContext.for_test(git=git, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "12", "bad name!"], obj=ctx)

    assert result.exit_code == 1
    assert "Invalid branch name" in result.output
    assert git.created_branches == []


def test_issue_checkout_git_failure() -> None:
    runner = CliRunner()
    git = github_checkout_git(create_branch_error="fatal: cannot lock ref")
    ctx = DevDashContext.for_test(git=git, cwd=REPO)

    result = runner.invoke(issue_group, ["checkout", "12", "issue-12"], obj=ctx)

    assert result.exit_code == 1
    assert "cannot lock ref" in result.output


def test_issue_checkout_busy_workspace() -> None:
    runner = CliRunner()
    locks = InMemoryWorkspaceLocks()
    ctx = DevDashContext.for_test(git=github_checkout_git(), locks=locks, cwd=REPO)

    with locks.try_acquire(REPO):
        result = runner.invoke(issue_group, ["checkout", "12", "issue-12"], obj=ctx)

    assert result.exit_code == 1
    assert "Another checkout is already running" in result.output
