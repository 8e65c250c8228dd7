"""Single-flight guard for operations that mutate a workspace's git state.

Acquisition never blocks: a caller that finds the workspace busy is told so
and must report it, rather than queueing behind the running operation.
"""

import fcntl
import hashlib
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkspaceLocks(ABC):
    """Registry of one lock per workspace path."""

    @abstractmethod
    def try_acquire(self, workspace: Path) -> AbstractContextManager[bool]:
        """Context manager yielding True while holding the lock, False if it is taken."""
        ...

    @abstractmethod
    def is_busy(self, workspace: Path) -> bool:
        """Return True if some holder currently owns the workspace's lock."""
        ...


class FileWorkspaceLocks(WorkspaceLocks):
    """Production locks shared by every devdash process on the machine.

    Each workspace maps to a lock file under `lock_dir`, named after a hash of
    its resolved path, held with a non-blocking `flock`. The kernel drops the
    lock when the holding process exits, so a crashed checkout never leaves
    the workspace busy.
    """

    def __init__(self, lock_dir: Path | None = None) -> None:
        if lock_dir is None:
            lock_dir = Path.home() / ".devdash" / "locks"
        self._lock_dir = lock_dir

    def lock_path(self, workspace: Path) -> Path:
        digest = hashlib.sha1(str(workspace.resolve()).encode()).hexdigest()
        return self._lock_dir / f"{digest}.lock"

    @contextmanager
    def try_acquire(self, workspace: Path) -> Iterator[bool]:
        path = self.lock_path(workspace)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as handle:
            try:
                fcntl.flock(handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except OSError:
                logger.debug("Workspace lock %s is held elsewhere", path)
                yield False
                return
            try:
                handle.write(str(workspace.resolve()))
                handle.flush()
                yield True
            finally:
                fcntl.flock(handle, fcntl.LOCK_UN)

    def is_busy(self, workspace: Path) -> bool:
        path = self.lock_path(workspace)
        if not path.exists():
            return False
        with self.try_acquire(workspace) as acquired:
            return not acquired


class InMemoryWorkspaceLocks(WorkspaceLocks):
    """Locks confined to one registry instance, for tests."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def _lock_for(self, workspace: Path) -> threading.Lock:
        key = workspace.resolve()
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def is_busy(self, workspace: Path) -> bool:
        return self._lock_for(workspace).locked()

    @contextmanager
    def try_acquire(self, workspace: Path) -> Iterator[bool]:
        lock = self._lock_for(workspace)
        acquired = lock.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                lock.release()
