"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes and dry-run via wrappers.
"""

from devdash.core.git.abc import BranchCreateResult, Git, StashEntry, StatusEntry
from devdash.core.git.real import RealGit

__all__ = [
    "BranchCreateResult",
    "Git",
    "RealGit",
    "StashEntry",
    "StatusEntry",
]
