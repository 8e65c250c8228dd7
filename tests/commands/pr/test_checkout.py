"""Tests for devdash pr checkout command."""

from click.testing import CliRunner

from devdash.cli.commands.pr import pr_group
from devdash.core.config_store import DevDashConfig
from devdash.core.context import DevDashContext
from devdash.core.github.fake import FakeGitHub
from devdash.core.github.types import LookupFailureKind
from tests.test_utils import REPO, fork_pr, github_checkout_git, same_repo_pr


def test_pr_checkout_same_repo() -> None:
    """Same-repo PRs are fetched from origin under their upstream name."""
    runner = CliRunner()
    git = github_checkout_git(local_branches={REPO: ["main"]})
    github = FakeGitHub(pull_requests={7: same_repo_pr(number=7, head_ref="fix-123")})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Checked out PR #7 as 'fix-123'" in result.output
    assert git.added_remotes == []
    assert git.fetched_branches == [("origin", "fix-123")]
    assert git.created_branches == [("fix-123", "origin/fix-123")]


def test_pr_checkout_fork_standard_naming() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={42: fork_pr()})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "#42"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Checked out PR #42 as 'pr-42-feature-x'" in result.output
    assert git.added_remotes == [("pr-42", "https://github.com/contributor/widgets.git")]
    assert git.fetched_branches == [("pr-42", "feature-x")]


def test_pr_checkout_mode_from_config() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={7: same_repo_pr()})
    ctx = DevDashContext.for_test(
        git=git, github=github, config=DevDashConfig(naming_mode="github-style"), cwd=REPO
    )

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.created_branches == [("fix-123", "origin/fix-123")]


def test_pr_checkout_github_style_fork_is_refused_before_touching_git() -> None:
    """owner:branch is not a legal git branch name, so nothing may be added or fetched."""
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={42: fork_pr()})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "42", "--mode", "github-style"], obj=ctx)

    assert result.exit_code == 1
    assert "'contributor:feature-x' is not a valid git branch name" in result.output
    assert "--mode standard" in result.output
    assert git.added_remotes == []
    assert git.updated_remotes == []
    assert git.fetched_branches == []
    assert git.created_branches == []


def test_pr_checkout_mode_flag_overrides_config() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={42: fork_pr()})
    ctx = DevDashContext.for_test(
        git=git, github=github, config=DevDashConfig(naming_mode="github-style"), cwd=REPO
    )

    result = runner.invoke(pr_group, ["checkout", "42", "--mode", "standard"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.created_branches == [("pr-42-feature-x", "pr-42/feature-x")]


def test_pr_checkout_by_url() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={42: fork_pr()})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(
        pr_group, ["checkout", "https://github.com/acme/widgets/pull/42"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert github.get_pull_request_calls[0][1] == 42


def test_pr_checkout_resets_existing_branch() -> None:
    runner = CliRunner()
    git = github_checkout_git(local_branches={REPO: ["main", "fix-123"]})
    github = FakeGitHub(pull_requests={7: same_repo_pr()})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Reset 'fix-123' to origin/fix-123" in result.output
    assert git.resets == ["origin/fix-123"]


def test_pr_checkout_no_reset_refuses_existing_branch() -> None:
    runner = CliRunner()
    git = github_checkout_git(local_branches={REPO: ["main", "fix-123"]})
    github = FakeGitHub(pull_requests={7: same_repo_pr()})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "7", "--no-reset"], obj=ctx)

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert "Re-run without --no-reset" in result.output
    assert git.resets == []


def test_pr_checkout_not_found() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=FakeGitHub(), cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "999"], obj=ctx)

    assert result.exit_code == 1
    assert "Could not find PR #999 in acme/widgets" in result.output


def test_pr_checkout_rate_limited() -> None:
    runner = CliRunner()
    github = FakeGitHub(lookup_failures={5: LookupFailureKind.RATE_LIMITED})
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "5"], obj=ctx)

    assert result.exit_code == 1
    assert "rate limit" in result.output


def test_pr_checkout_auth_required() -> None:
    runner = CliRunner()
    github = FakeGitHub(lookup_failures={5: LookupFailureKind.AUTH_REQUIRED})
    ctx = DevDashContext.for_test(git=github_checkout_git(), github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "5"], obj=ctx)

    assert result.exit_code == 1
    assert "gh auth login" in result.output


def test_pr_checkout_deleted_fork() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    pr = fork_pr(head_repo_full_name=None, head_clone_url=None)
    ctx = DevDashContext.for_test(git=git, github=FakeGitHub(pull_requests={42: pr}), cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "42"], obj=ctx)

    assert result.exit_code == 1
    assert "no accessible clone URL" in result.output
    assert git.added_remotes == []


def test_pr_checkout_fetch_failure_names_step() -> None:
    runner = CliRunner()
    git = github_checkout_git(fetch_error="fatal: couldn't find remote ref feature-x")
    ctx = DevDashContext.for_test(
        git=git, github=FakeGitHub(pull_requests={42: fork_pr()}), cwd=REPO
    )

    result = runner.invoke(pr_group, ["checkout", "42"], obj=ctx)

    assert result.exit_code == 1
    assert "failed at the fetch step" in result.output
    assert "remote 'pr-42'" in result.output
    assert "couldn't find remote ref" in result.output


def test_pr_checkout_closed_pr_warns() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    github = FakeGitHub(pull_requests={7: same_repo_pr(state="closed")})
    ctx = DevDashContext.for_test(git=git, github=github, cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "PR #7 is closed" in result.output


def test_pr_checkout_uses_configured_remote_for_same_repo() -> None:
    runner = CliRunner()
    git = github_checkout_git(
        remotes={
            REPO: {
                "upstream": "https://github.com/acme/widgets.git",
                "origin": "https://github.com/me/widgets-fork.git",
            }
        }
    )
    ctx = DevDashContext.for_test(
        git=git,
        github=FakeGitHub(pull_requests={7: same_repo_pr()}),
        config=DevDashConfig(remote_name="origin"),
        cwd=REPO,
    )

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.fetched_branches == [("origin", "fix-123")]


def test_pr_checkout_falls_back_to_resolved_remote() -> None:
    runner = CliRunner()
    git = github_checkout_git(remotes={REPO: {"upstream": "https://github.com/acme/widgets.git"}})
    ctx = DevDashContext.for_test(
        git=git, github=FakeGitHub(pull_requests={7: same_repo_pr()}), cwd=REPO
    )

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.fetched_branches == [("upstream", "fix-123")]


def test_pr_checkout_outside_repository() -> None:
    runner = CliRunner()
    ctx = DevDashContext.for_test(cwd=REPO)

    result = runner.invoke(pr_group, ["checkout", "7"], obj=ctx)

    assert result.exit_code == 1
    assert "Not a git repository" in result.output


def test_pr_checkout_dry_run_changes_nothing() -> None:
    runner = CliRunner()
    git = github_checkout_git()
    ctx = DevDashContext.for_test(
        git=git, github=FakeGitHub(pull_requests={42: fork_pr()}), cwd=REPO, dry_run=True
    )

    result = runner.invoke(pr_group, ["checkout", "42"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[DRY RUN] Would run: git remote add pr-42" in result.output
    assert "[DRY RUN] Would run: git fetch pr-42 feature-x" in result.output
    assert git.added_remotes == []
    assert git.fetched_branches == []
