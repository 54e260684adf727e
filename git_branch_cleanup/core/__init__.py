"""Cleanup orchestration for git-branch-cleanup."""

from .branch_cleanup import BranchCleanup

__all__ = ["BranchCleanup"]
