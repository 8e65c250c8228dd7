"""Tests for FakeGit's branch name rules."""

from pathlib import Path

import pytest

from devdash.core.git.fake import FakeGit


@pytest.mark.parametrize(
    "name",
    ["main", "pr-42-feature-x", "users/alice/fix", "issue-12-crash", "v1.2"],
)
def test_accepts_names_git_accepts(name: str) -> None:
    assert FakeGit().is_valid_branch_name(Path("/repo"), name) is True


@pytest.mark.parametrize(
    "name",
    [
        "contributor:feature-x",
        "has space",
        "double..dot",
        "-leading-dash",
        "trailing/",
        "topic.lock",
        ".hidden",
        "a//b",
        "",
    ],
)
def test_rejects_names_git_rejects(name: str) -> None:
    assert FakeGit().is_valid_branch_name(Path("/repo"), name) is False
