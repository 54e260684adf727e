"""Deletion plan and result models"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class DeletionStep:
    """One branch deletion, forced when the branch is not fully merged."""
    name: str
    force: bool


@dataclass(frozen=True)
class DeletionFailure:
    """The deletion that stopped a cleanup run."""
    name: str
    message: str


@dataclass
class PruneResult:
    """Remote-tracking refs removed by a prune."""
    branches_pruned: List[str] = field(default_factory=list)


@dataclass
class DeletionResult:
    """Aggregate outcome of executing a deletion plan."""
    deleted: List[str] = field(default_factory=list)
    failed: Optional[DeletionFailure] = None
    skipped: List[str] = field(default_factory=list)  # never attempted after a failure
    pruned: Optional[List[str]] = None  # None when no prune ran
    prune_error: Optional[str] = None

    @property
    def has_failure(self) -> bool:
        return self.failed is not None

    @property
    def succeeded(self) -> bool:
        return self.failed is None and self.prune_error is None
