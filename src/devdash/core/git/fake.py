"""Fake git operations for testing.

FakeGit is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path

from devdash.core.git.abc import BranchCreateResult, Git, StashEntry, StatusEntry

_FORBIDDEN_REF_CHARS = frozenset(" ~^:?*[\\\x7f")


def _follows_ref_format(name: str) -> bool:
    """The subset of `git check-ref-format --branch` rules the tests rely on."""
    if not name or name.startswith("-") or name == "@":
        return False
    if any(ch in _FORBIDDEN_REF_CHARS or ord(ch) < 32 for ch in name):
        return False
    if ".." in name or "@{" in name or "//" in name:
        return False
    if name.endswith((".", "/", ".lock")):
        return False
    return all(part and not part.startswith(".") for part in name.split("/"))


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts). Mutating calls
    update the in-memory state and are recorded for test assertions.
    """

    def __init__(
        self,
        *,
        work_trees: set[Path] | None = None,
        remotes: dict[Path, dict[str, str]] | None = None,
        local_branches: dict[Path, list[str]] | None = None,
        current_branches: dict[Path, str | None] | None = None,
        stashes: dict[Path, list[StashEntry]] | None = None,
        status_entries: dict[Path, list[StatusEntry]] | None = None,
        upsert_remote_error: str | None = None,
        fetch_error: str | None = None,
        create_branch_error: str | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            work_trees: Paths treated as inside a git work tree
            remotes: Mapping of cwd -> {remote name: url}, in `git remote -v` order
            local_branches: Mapping of cwd -> local branch names
            current_branches: Mapping of cwd -> checked-out branch
            stashes: Mapping of cwd -> stash entries
            status_entries: Mapping of cwd -> uncommitted changes
            upsert_remote_error: If set, upsert_remote raises RuntimeError with this text
            fetch_error: If set, fetch_branch raises RuntimeError with this text
            create_branch_error: If set, branch creation raises RuntimeError with this text
        """
        self._work_trees = work_trees or set()
        self._remotes = {cwd: dict(r) for cwd, r in (remotes or {}).items()}
        self._local_branches = {cwd: list(b) for cwd, b in (local_branches or {}).items()}
        self._current_branches = dict(current_branches or {})
        self._stashes = stashes or {}
        self._status_entries = status_entries or {}
        self._upsert_remote_error = upsert_remote_error
        self._fetch_error = fetch_error
        self._create_branch_error = create_branch_error

        self._list_remotes_calls: list[Path] = []
        self._added_remotes: list[tuple[str, str]] = []
        self._updated_remotes: list[tuple[str, str]] = []
        self._fetched_branches: list[tuple[str, str]] = []
        self._created_branches: list[tuple[str, str | None]] = []
        self._checked_out_branches: list[str] = []
        self._resets: list[str] = []

    @property
    def list_remotes_calls(self) -> list[Path]:
        """Directories list_remotes() was called for."""
        return self._list_remotes_calls

    @property
    def added_remotes(self) -> list[tuple[str, str]]:
        """(name, url) pairs for remotes that were newly added."""
        return self._added_remotes

    @property
    def updated_remotes(self) -> list[tuple[str, str]]:
        """(name, url) pairs for remotes whose URL was updated."""
        return self._updated_remotes

    @property
    def fetched_branches(self) -> list[tuple[str, str]]:
        """(remote, branch) pairs that were fetched."""
        return self._fetched_branches

    @property
    def created_branches(self) -> list[tuple[str, str | None]]:
        """(branch, start point) pairs; start point is None for branches made from HEAD."""
        return self._created_branches

    @property
    def checked_out_branches(self) -> list[str]:
        """Existing branches checked out via checkout_branch()."""
        return self._checked_out_branches

    @property
    def resets(self) -> list[str]:
        """Refs passed to reset_hard()."""
        return self._resets

    def is_inside_work_tree(self, cwd: Path) -> bool:
        return cwd in self._work_trees

    def list_remotes(self, cwd: Path) -> str:
        self._list_remotes_calls.append(cwd)
        lines: list[str] = []
        for name, url in self._remotes.get(cwd, {}).items():
            lines.append(f"{name}\t{url} (fetch)")
            lines.append(f"{name}\t{url} (push)")
        return "\n".join(lines) + ("\n" if lines else "")

    def list_remote_names(self, cwd: Path) -> list[str]:
        return list(self._remotes.get(cwd, {}))

    def upsert_remote(self, cwd: Path, name: str, url: str) -> None:
        if self._upsert_remote_error is not None:
            raise RuntimeError(self._upsert_remote_error)

        remotes = self._remotes.setdefault(cwd, {})
        if name in remotes:
            self._updated_remotes.append((name, url))
        else:
            self._added_remotes.append((name, url))
        remotes[name] = url

    def fetch_branch(self, cwd: Path, remote: str, branch: str) -> None:
        if self._fetch_error is not None:
            raise RuntimeError(self._fetch_error)
        if remote not in self._remotes.get(cwd, {}):
            msg = f"Failed to fetch '{branch}' from '{remote}'\nstderr: no such remote"
            raise RuntimeError(msg)
        self._fetched_branches.append((remote, branch))

    def list_local_branches(self, cwd: Path) -> list[str]:
        return list(self._local_branches.get(cwd, []))

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._current_branches.get(cwd)

    def is_valid_branch_name(self, cwd: Path, name: str) -> bool:
        return _follows_ref_format(name)

    def _create(self, cwd: Path, branch: str, start_point: str | None) -> BranchCreateResult:
        branches = self._local_branches.setdefault(cwd, [])
        if branch in branches:
            return "exists"
        if self._create_branch_error is not None:
            raise RuntimeError(self._create_branch_error)

        branches.append(branch)
        self._created_branches.append((branch, start_point))
        self._current_branches[cwd] = branch
        return "created"

    def create_tracking_branch_and_checkout(
        self, cwd: Path, branch: str, remote_ref: str
    ) -> BranchCreateResult:
        return self._create(cwd, branch, remote_ref)

    def create_branch_and_checkout(self, cwd: Path, branch: str) -> BranchCreateResult:
        return self._create(cwd, branch, None)

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        if branch not in self._local_branches.get(cwd, []):
            msg = f"Failed to checkout branch '{branch}'\nstderr: pathspec did not match"
            raise RuntimeError(msg)
        self._checked_out_branches.append(branch)
        self._current_branches[cwd] = branch

    def reset_hard(self, cwd: Path, ref: str) -> None:
        self._resets.append(ref)

    def list_stashes(self, cwd: Path) -> list[StashEntry]:
        return list(self._stashes.get(cwd, []))

    def get_status_entries(self, cwd: Path) -> list[StatusEntry]:
        return list(self._status_entries.get(cwd, []))
