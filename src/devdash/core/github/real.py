"""Production implementation of GitHub operations."""

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from devdash.core.github.abc import GitHub
from devdash.core.github.parsing import (
    classify_gh_api_error,
    merge_activity,
    parse_collaborators,
    parse_comment,
    parse_comment_list,
    parse_commit_activity,
    parse_event_activity,
    parse_issue,
    parse_issue_list,
    parse_pull_request,
    parse_pull_request_details,
    parse_pull_request_list,
    parse_repository_stats,
)
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
from devdash.core.remotes import RepositoryIdentity
from devdash.subprocess_utils import execute_gh_command

logger = logging.getLogger(__name__)


def _unexpected(what: str) -> GitHubLookupFailure:
    return GitHubLookupFailure(
        kind=LookupFailureKind.UNAVAILABLE, message=f"Unexpected response for {what}"
    )


class RealGitHub(GitHub):
    """Production implementation using gh CLI.

    All GitHub operations execute `gh api` REST calls via subprocess.
    """

    def __init__(self, session: GitHubSession) -> None:
        """Initialize RealGitHub.

        Args:
            session: Credentials to run gh with. A token is passed to gh as
                GH_TOKEN; without one gh uses its own stored login.
        """
        self._session = session

    def _env(self) -> dict[str, str] | None:
        if self._session.token is None:
            return None
        return {**os.environ, "GH_TOKEN": self._session.token}

    def _api_command(
        self, path: str, *, method: str = "GET", fields: Sequence[tuple[str, str]] = ()
    ) -> list[str]:
        cmd = ["gh", "api"]
        if self._session.hostname != "github.com":
            cmd += ["--hostname", self._session.hostname]
        if method != "GET":
            cmd += ["--method", method]
        cmd.append(path)
        # -f sends raw strings; -F would read "@file" values from disk
        for key, value in fields:
            cmd += ["-f", f"{key}={value}"]
        return cmd

    def _api_json(
        self,
        cwd: Path,
        path: str,
        *,
        method: str = "GET",
        fields: Sequence[tuple[str, str]] = (),
    ) -> Any | GitHubLookupFailure:
        """Run `gh api <path>` and decode the JSON body.

        Note: gh not being installed surfaces as RuntimeError from the
        subprocess helper; it is reported as UNAVAILABLE like any other failure
        we cannot classify.
        """
        cmd = self._api_command(path, method=method, fields=fields)
        try:
            result = execute_gh_command(cmd, cwd, env=self._env())
        except RuntimeError as e:
            return GitHubLookupFailure(kind=LookupFailureKind.UNAVAILABLE, message=str(e))

        if result.returncode != 0:
            stderr = result.stderr.strip()
            kind = classify_gh_api_error(stderr)
            logger.debug("gh api %s %s failed (%s): %s", method, path, kind.value, stderr)
            return GitHubLookupFailure(kind=kind, message=stderr or f"gh api {path} failed")

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            return GitHubLookupFailure(
                kind=LookupFailureKind.UNAVAILABLE,
                message=f"Malformed JSON from gh api {path}: {e}",
            )

    def _api_list(self, cwd: Path, path: str) -> list[dict[str, Any]] | GitHubLookupFailure:
        data = self._api_json(cwd, path)
        if isinstance(data, GitHubLookupFailure):
            return data
        if not isinstance(data, list):
            return _unexpected(path)
        return [item for item in data if isinstance(item, dict)]

    def get_pull_request(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestRef | GitHubLookupFailure:
        """Get the pull request head via `GET /repos/{owner}/{repo}/pulls/{n}`."""
        path = f"repos/{repo.owner}/{repo.repo}/pulls/{number}"
        data = self._api_json(cwd, path)
        if isinstance(data, GitHubLookupFailure):
            return data

        # LBYL: Validate shape before accessing
        if not isinstance(data, dict):
            return _unexpected(f"PR #{number}")
        pr = parse_pull_request(data, base=repo)
        if pr is None:
            return GitHubLookupFailure(
                kind=LookupFailureKind.UNAVAILABLE,
                message=f"PR #{number} response is missing head information",
            )
        return pr

    def get_pull_request_details(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> PullRequestDetails | GitHubLookupFailure:
        data = self._api_json(cwd, f"repos/{repo.owner}/{repo.repo}/pulls/{number}")
        if isinstance(data, GitHubLookupFailure):
            return data
        details = parse_pull_request_details(data) if isinstance(data, dict) else None
        if details is None:
            return _unexpected(f"PR #{number}")
        return details

    def list_pull_request_comments(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> list[PullRequestComment] | GitHubLookupFailure:
        """Merge `issues/{n}/comments` with the inline `pulls/{n}/comments`."""
        base = f"repos/{repo.owner}/{repo.repo}"
        conversation = self._api_list(cwd, f"{base}/issues/{number}/comments?per_page=100")
        if isinstance(conversation, GitHubLookupFailure):
            return conversation
        review = self._api_list(cwd, f"{base}/pulls/{number}/comments?per_page=100")
        if isinstance(review, GitHubLookupFailure):
            return review

        comments = parse_comment_list(conversation, "comment") + parse_comment_list(
            review, "review"
        )
        return sorted(comments, key=lambda comment: comment.created_at)

    def add_pull_request_comment(
        self, cwd: Path, repo: RepositoryIdentity, number: int, body: str
    ) -> PullRequestComment | GitHubLookupFailure:
        """Pull request conversation comments are issue comments in the REST API."""
        data = self._api_json(
            cwd,
            f"repos/{repo.owner}/{repo.repo}/issues/{number}/comments",
            method="POST",
            fields=[("body", body)],
        )
        if isinstance(data, GitHubLookupFailure):
            return data
        comment = parse_comment(data, "comment") if isinstance(data, dict) else None
        if comment is None:
            return _unexpected(f"new comment on PR #{number}")
        logger.debug("Added comment %d to PR #%d", comment.id, number)
        return comment

    def list_pull_requests(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[PullRequestSummary] | GitHubLookupFailure:
        path = (
            f"repos/{repo.owner}/{repo.repo}/pulls"
            f"?state=open&sort=updated&direction=desc&per_page={limit}"
        )
        data = self._api_list(cwd, path)
        if isinstance(data, GitHubLookupFailure):
            return data
        return parse_pull_request_list(data)[:limit]

    def list_issues(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[IssueSummary] | GitHubLookupFailure:
        path = (
            f"repos/{repo.owner}/{repo.repo}/issues"
            f"?state=open&sort=updated&direction=desc&per_page={limit}"
        )
        data = self._api_list(cwd, path)
        if isinstance(data, GitHubLookupFailure):
            return data
        return parse_issue_list(data)[:limit]

    def get_issue(
        self, cwd: Path, repo: RepositoryIdentity, number: int
    ) -> IssueSummary | GitHubLookupFailure:
        data = self._api_json(cwd, f"repos/{repo.owner}/{repo.repo}/issues/{number}")
        if isinstance(data, GitHubLookupFailure):
            return data
        if not isinstance(data, dict):
            return _unexpected(f"issue #{number}")
        if "pull_request" in data:
            return GitHubLookupFailure(
                kind=LookupFailureKind.NOT_FOUND, message=f"#{number} is a pull request"
            )
        issue = parse_issue(data)
        if issue is None:
            return _unexpected(f"issue #{number}")
        return issue

    def create_issue(
        self,
        cwd: Path,
        repo: RepositoryIdentity,
        *,
        title: str,
        body: str,
        labels: list[str],
        assignees: list[str],
    ) -> CreatedIssue | GitHubLookupFailure:
        fields = [("title", title), ("body", body)]
        fields += [("labels[]", label) for label in labels]
        fields += [("assignees[]", login) for login in assignees]
        data = self._api_json(
            cwd, f"repos/{repo.owner}/{repo.repo}/issues", method="POST", fields=fields
        )
        if isinstance(data, GitHubLookupFailure):
            return data
        if not isinstance(data, dict) or not isinstance(data.get("number"), int):
            return _unexpected("new issue")
        logger.debug("Created issue #%d in %s", data["number"], repo.full_name)
        return CreatedIssue(number=data["number"], url=data.get("html_url") or "")

    def list_collaborators(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> list[str] | GitHubLookupFailure:
        data = self._api_list(cwd, f"repos/{repo.owner}/{repo.repo}/collaborators?per_page=100")
        if isinstance(data, GitHubLookupFailure):
            return data
        return parse_collaborators(data)

    def get_repository_stats(
        self, cwd: Path, repo: RepositoryIdentity
    ) -> RepositoryStats | GitHubLookupFailure:
        data = self._api_json(cwd, f"repos/{repo.owner}/{repo.repo}")
        if isinstance(data, GitHubLookupFailure):
            return data
        stats = parse_repository_stats(data) if isinstance(data, dict) else None
        if stats is None:
            return _unexpected(repo.full_name)
        return stats

    def list_recent_activity(
        self, cwd: Path, repo: RepositoryIdentity, *, limit: int
    ) -> list[ActivityItem] | GitHubLookupFailure:
        base = f"repos/{repo.owner}/{repo.repo}"
        commits = self._api_list(cwd, f"{base}/commits?per_page={limit}")
        if isinstance(commits, GitHubLookupFailure):
            return commits
        events = self._api_list(cwd, f"{base}/events?per_page={limit}")
        if isinstance(events, GitHubLookupFailure):
            return events
        return merge_activity(
            parse_commit_activity(commits), parse_event_activity(events), limit=limit
        )
