"""Data models for git-branch-cleanup."""

from .branch import (
    AheadBehind,
    Branch,
    BranchRule,
    Category,
    CleanupCandidate,
    CleanupCandidates,
    RiskAssessment,
    RiskLevel,
    TrackingInfo,
)
from .deletion import DeletionFailure, DeletionResult, DeletionStep, PruneResult
from .selection import Selection

__all__ = [
    "AheadBehind",
    "Branch",
    "BranchRule",
    "Category",
    "CleanupCandidate",
    "CleanupCandidates",
    "RiskAssessment",
    "RiskLevel",
    "TrackingInfo",
    "DeletionFailure",
    "DeletionResult",
    "DeletionStep",
    "PruneResult",
    "Selection",
]
