"""Custom exceptions for git-branch-cleanup"""

from typing import Optional


class BranchCleanupError(Exception):
    """Base exception for all git-branch-cleanup errors."""
    pass


class InvalidInputError(BranchCleanupError, ValueError):
    """Exception raised for malformed engine or configuration input."""
    pass


class InvalidPatternError(InvalidInputError):
    """Exception raised when a protection rule pattern cannot be compiled."""

    def __init__(self, pattern: object):
        self.pattern = pattern
        super().__init__(f"Invalid branch pattern: {pattern!r}")


class ProtectedBranchSelectionError(BranchCleanupError):
    """Exception raised when a protected branch is added to a selection."""

    def __init__(self, branch: str, reason: Optional[str] = None):
        self.branch = branch
        self.reason = reason

        error_msg = f"Branch '{branch}' is protected and cannot be selected"
        if reason:
            error_msg += f" ({reason})"

        super().__init__(error_msg)


class OperationInProgressError(BranchCleanupError):
    """Exception raised when a deletion run starts while another is in flight."""

    def __init__(self):
        super().__init__("A cleanup operation is already in progress")


class GitOperationError(BranchCleanupError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class RepositoryError(GitOperationError):
    """Exception raised when the repository cannot be opened."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__("open_repository", message=f"{path}: {message}" if message else path)


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        super().__init__("find_branch", branch, "Branch not found")


class BranchDeletionError(GitOperationError):
    """Exception raised when the backend refuses to delete a branch."""

    def __init__(self, branch: str, message: Optional[str] = None):
        super().__init__("delete_branch", branch, message)


class PruneError(GitOperationError):
    """Exception raised when pruning remote-tracking branches fails."""

    def __init__(self, remote: Optional[str] = None, message: Optional[str] = None):
        self.remote = remote
        operation = f"prune {remote}" if remote else "prune"
        super().__init__(operation, message=message)
