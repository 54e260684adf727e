"""Git-related services for git-branch-cleanup."""

from .operations import GitOperations

__all__ = [
    "GitOperations",
]
