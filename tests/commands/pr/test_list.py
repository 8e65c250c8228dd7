"""Tests for devdash pr list command."""

from click.testing import CliRunner

from devdash.cli.commands.pr import pr_group
from devdash.core.config_store import DevDashConfig
from devdash.core.context import DevDashContext
from devdash.core.github.fake import FakeGitHub
from devdash.core.github.types import LookupFailureKind, PullRequestSummary
from tests.test_utils import REPO, github_checkout_git


def _summary(number: int, *, is_draft: bool = False) -> PullRequestSummary:
    return PullRequestSummary(
        number=number,
        title=f"Change number {number}",
        author="alice",
        head_ref=f"branch-{number}",
        is_draft=is_draft,
        updated_at="2024-05-01T10:00:00Z",
        url=f"https://github.com/acme/widgets/pull/{number}",
    )


def test_pr_list_shows_table() -> None:
    runner = CliRunner()
    github = FakeGitHub(pull_request_list=[_summary(2), _summary(1, is_draft=True)])
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["list"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Change number 2" in result.output
    assert "branch-1" in result.output
    assert "(draft)" in result.output
    assert "2024-05-01" in result.output


def test_pr_list_limit_defaults_to_config() -> None:
    runner = CliRunner()
    github = FakeGitHub(pull_request_list=[_summary(n) for n in (3, 2, 1)])
    ctx = DevDashContext.for_test(
        git=github_checkout_git(), github=github, config=DevDashConfig(list_limit=1), cwd=REPO
    )

    result = runner.invoke(pr_group, ["list"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Change number 3" in result.output
    assert "Change number 2" not in result.output


def test_pr_list_empty() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(pr_group, ["list"], obj=ctx)

    assert result.exit_code == 0
    assert "No open pull requests in acme/widgets" in result.output


def test_pr_list_rejects_out_of_range_limit() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), cwd=REPO)

    result = runner.invoke(pr_group, ["list", "--limit", "0"], obj=ctx)

    assert result.exit_code == 2


def test_pr_list_reports_rate_limit_instead_of_empty_list() -> None:
    runner = CliRunner()
    github = FakeGitHub(
        pull_request_list=[_summary(1)], list_failure=LookupFailureKind.RATE_LIMITED
    )
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["list"], obj=ctx)

    assert result.exit_code == 1
    assert "GitHub API rate limit exceeded" in result.output
    assert "No open pull requests" not in result.output
