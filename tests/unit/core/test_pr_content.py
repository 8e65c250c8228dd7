"""Tests for the markdown rendering of a pull request."""

from devdash.core.pr_content import generate_copyable_content, pr_state_label
from tests.test_utils import pr_details, review_thread


def test_markdown_has_header_description_and_comments_in_given_order() -> None:
    comments = list(reversed(review_thread()))

    content = generate_copyable_content(pr_details(), comments)

    assert content.startswith("# PR #42: Add feature x\n\n- Author: @contributor\n")
    assert "- Branch: contributor:feature-x into main" in content
    assert "- Changes: +10 -2 in 3 file(s), 1 commit(s)" in content
    assert "## Description\n\nAdds the x feature.\n\nCloses #12." in content
    assert "## Comments (2)" in content
    assert content.index("### @carol on src/widgets/x.py:12") < content.index("### @bob")
    assert content.endswith("LGTM once the nit is fixed\n")


def test_markdown_without_body_or_comments() -> None:
    content = generate_copyable_content(pr_details(body="  "), [])

    assert "_No description provided._" in content
    assert "## Comments" not in content


def test_state_label() -> None:
    assert pr_state_label(pr_details()) == "open"
    assert pr_state_label(pr_details(is_draft=True)) == "draft"
    assert pr_state_label(pr_details(state="closed", merged=True)) == "merged"
    assert pr_state_label(pr_details(state="closed")) == "closed"
