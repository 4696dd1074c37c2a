"""Git operations used by the release pipeline.

Usage:
    from nexrel.git import Repository

    repo = Repository(Path("."))
    repo.commit_all("[nexrel] release 1.0.0")
"""

from nexrel.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]
