"""Tests for DryRunGitHub."""

from pathlib import Path

import pytest

from devdash.core.github.dry_run import DryRunGitHub
from devdash.core.github.fake import FakeGitHub
from tests.test_utils import ACME_WIDGETS, pr_details

REPO = Path("/repo")


def test_writes_are_printed_not_sent(capsys: pytest.CaptureFixture[str]) -> None:
    fake = FakeGitHub(pull_request_details={42: pr_details()})
    github = DryRunGitHub(fake)

    created = github.create_issue(
        REPO, ACME_WIDGETS, title="Bug", body="", labels=["bug"], assignees=[]
    )
    comment = github.add_pull_request_comment(REPO, ACME_WIDGETS, 42, "hi")

    err = capsys.readouterr().err
    assert "[DRY RUN] Would create issue in acme/widgets: Bug" in err
    assert "[DRY RUN] Would comment on PR #42 in acme/widgets" in err
    assert created.number == -1
    assert comment.id == -1
    assert fake.created_issues == []
    assert fake.added_comments == []


def test_reads_are_delegated() -> None:
    github = DryRunGitHub(FakeGitHub(pull_request_details={42: pr_details()}))

    assert github.get_pull_request_details(REPO, ACME_WIDGETS, 42) == pr_details()
