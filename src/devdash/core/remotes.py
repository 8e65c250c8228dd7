"""Resolve the GitHub repository behind a local checkout's remotes.

The parsing functions here are pure: they take the text printed by
`git remote -v` and classify it. `resolve_workspace_repository` is the only
entry point that talks to git, through the Git gateway.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from devdash.core.git.abc import Git

logger = logging.getLogger(__name__)

RemoteDirection = Literal["fetch", "push"]

# name<whitespace>url<whitespace>(fetch|push)
_REMOTE_LINE_RE = re.compile(r"^(\S+)\s+(\S+)\s+\((fetch|push)\)$")

_GITHUB_HOST_RE = re.compile(r"(?i:github\.com)[:/]([^/]+)/([^/\s]+?)(?:\.git)?$")

# alias[@:]segment/repo, where segment may itself be "host:owner"
_SSH_ALIAS_RE = re.compile(r"([^@\s]+)[@:]([^/]+)/([^/\s]+?)(?:\.git)?$")

_NON_GITHUB_ALIAS_MARKERS = ("gitlab", "bitbucket")


@dataclass(frozen=True)
class RemoteRecord:
    """One line of `git remote -v` output."""

    name: str
    url: str
    direction: RemoteDirection


@dataclass(frozen=True)
class RepositoryIdentity:
    """Canonical owner/repo pair of a GitHub-hosted repository."""

    owner: str
    repo: str

    def __post_init__(self) -> None:
        if not self.owner or not self.repo:
            msg = f"RepositoryIdentity requires non-empty owner and repo, got {self!r}"
            raise ValueError(msg)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class ResolvedRemote:
    """A repository identity together with the remote it was read from."""

    remote: RemoteRecord
    identity: RepositoryIdentity


@dataclass(frozen=True)
class NotAGitRepository:
    """Sentinel: the working directory is not inside a git work tree."""

    message: str = "Not a git repository"


@dataclass(frozen=True)
class NoGitHubRemoteFound:
    """Sentinel: no fetch remote points at GitHub."""

    message: str = "No GitHub remote found"


RepositoryUnresolved = NotAGitRepository | NoGitHubRemoteFound


def parse_remote_lines(output: str) -> list[RemoteRecord]:
    """Parse `git remote -v` output into records, preserving listed order.

    Lines that do not look like `name<TAB>url (direction)` are skipped.
    """
    records: list[RemoteRecord] = []
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        match = _REMOTE_LINE_RE.match(line)
        if match is None:
            logger.debug("Skipping unparseable remote line: %r", raw_line)
            continue
        name, url, direction = match.groups()
        records.append(
            RemoteRecord(name=name, url=url, direction=direction)  # type: ignore[arg-type]
        )
    return records


def _match_github_host(url: str) -> RepositoryIdentity | None:
    match = _GITHUB_HOST_RE.search(url)
    if match is None:
        return None
    owner, repo = match.groups()
    return RepositoryIdentity(owner=owner, repo=repo)


def _is_github_alias(alias: str) -> bool:
    if "." in alias:
        return False
    return not any(marker in alias for marker in _NON_GITHUB_ALIAS_MARKERS)


def _match_ssh_alias(url: str) -> RepositoryIdentity | None:
    """Match `alias:owner/repo` and `user@alias:owner/repo` style URLs.

    For `user@host:owner/repo` the regex captures `user` as the first group and
    `host:owner` as the segment; the host is what gets checked, and the owner is
    the last colon-delimited token of the segment.
    """
    match = _SSH_ALIAS_RE.search(url)
    if match is None:
        return None

    prefix, segment, repo = match.groups()
    if ":" in segment:
        alias, owner = segment.rsplit(":", 1)
    else:
        alias, owner = prefix, segment

    if not _is_github_alias(alias):
        logger.debug("Rejecting non-GitHub alias %r in %s", alias, url)
        return None
    if not owner:
        return None
    return RepositoryIdentity(owner=owner, repo=repo)


def resolve_from_remotes(
    remotes: list[RemoteRecord],
) -> ResolvedRemote | NoGitHubRemoteFound:
    """Return the first fetch remote that identifies a GitHub repository.

    Each remote is tried against the direct github.com pattern and then the SSH
    alias pattern before moving to the next remote, so listed order decides
    which remote wins, not the remote's name.
    """
    for remote in remotes:
        if remote.direction != "fetch":
            continue

        identity = _match_github_host(remote.url)
        if identity is not None:
            logger.debug("Remote %s matched github.com: %s", remote.name, identity.full_name)
            return ResolvedRemote(remote=remote, identity=identity)

        identity = _match_ssh_alias(remote.url)
        if identity is not None:
            logger.debug("Remote %s matched SSH alias: %s", remote.name, identity.full_name)
            return ResolvedRemote(remote=remote, identity=identity)

    return NoGitHubRemoteFound()


def resolve_repository_identity(
    remote_output: str,
) -> RepositoryIdentity | NoGitHubRemoteFound:
    """Resolve `git remote -v` text to an owner/repo pair."""
    resolved = resolve_from_remotes(parse_remote_lines(remote_output))
    if isinstance(resolved, NoGitHubRemoteFound):
        return resolved
    return resolved.identity


def resolve_workspace_repository(git: Git, cwd: Path) -> ResolvedRemote | RepositoryUnresolved:
    """Check `cwd` for a git work tree, then resolve its GitHub remote.

    Remotes are not listed at all when that check fails.
    """
    if not git.is_inside_work_tree(cwd):
        logger.debug("Not a git repository: %s", cwd)
        return NotAGitRepository(message=f"Not a git repository: {cwd}")

    resolved = resolve_from_remotes(parse_remote_lines(git.list_remotes(cwd)))
    if isinstance(resolved, NoGitHubRemoteFound):
        logger.debug("No GitHub remote found in %s", cwd)
    return resolved
