"""Tests for devdash repo stats and repo activity."""

import json

from click.testing import CliRunner

from devdash.cli.commands.repo import repo_group
from devdash.core.config_store import DevDashConfig
from devdash.core.context import DevDashContext
from devdash.core.github.fake import FakeGitHub
from devdash.core.github.types import ActivityItem, LookupFailureKind, RepositoryStats
from tests.test_utils import REPO, github_checkout_git

STATS = RepositoryStats(
    full_name="acme/widgets",
    description="Widgets for everyone",
    stars=120,
    forks=14,
    watchers=8,
    open_issues=5,
    default_branch="main",
    url="https://github.com/acme/widgets",
)

ACTIVITY = [
    ActivityItem(
        kind="event",
        actor="bob",
        summary="opened issue #12",
        created_at="2024-05-03T09:00:00Z",
    ),
    ActivityItem(
        kind="commit",
        actor="alice",
        summary="Fix crash on empty remote list",
        created_at="2024-05-02T09:00:00Z",
        sha="abc1234def5678",
    ),
]


def test_repo_stats_human_output() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(
        git=github_checkout_git(), github=FakeGitHub(repository_stats=STATS), cwd=REPO
    )

    result = runner.invoke(repo_group, ["stats"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Widgets for everyone" in result.output
    assert "stars:          120" in result.output
    assert "open issues:    5" in result.output
    assert result.stdout == ""


def test_repo_stats_json() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(
        git=github_checkout_git(), github=FakeGitHub(repository_stats=STATS), cwd=REPO
    )

    result = runner.invoke(repo_group, ["stats", "--json"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "full_name": "acme/widgets",
        "stars": 120,
        "forks": 14,
        "watchers": 8,
        "open_issues": 5,
        "default_branch": "main",
    }


def test_repo_stats_not_found() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(repo_group, ["stats"], obj=ctx)

    assert result.exit_code == 1
    assert "Could not find repository statistics in acme/widgets" in result.output


def test_repo_activity_table() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(
        git=github_checkout_git(), github=FakeGitHub(activity=ACTIVITY), cwd=REPO
    )

    result = runner.invoke(repo_group, ["activity"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "opened issue #12" in result.output
    assert "Fix crash on empty remote list" in result.output
    assert "abc1234" in result.output
    assert "abc1234d" not in result.output
    assert result.output.index("opened issue #12") < result.output.index("Fix crash")


def test_repo_activity_limit_defaults_to_config() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(
        git=github_checkout_git(),
        github=FakeGitHub(activity=ACTIVITY),
        config=DevDashConfig(list_limit=1),
        cwd=REPO,
    )

    result = runner.invoke(repo_group, ["activity"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "opened issue #12" in result.output
    assert "Fix crash" not in result.output


def test_repo_activity_failure() -> None:
    runner = CliRunner()
    github = FakeGitHub(activity=ACTIVITY, list_failure=LookupFailureKind.RATE_LIMITED)
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(repo_group, ["activity"], obj=ctx)

    assert result.exit_code == 1
    assert "rate limit" in result.output


def test_repo_activity_empty() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(repo_group, ["activity"], obj=ctx)

    assert result.exit_code == 0
    assert "No recent activity in acme/widgets" in result.output
