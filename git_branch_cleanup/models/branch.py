"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class RiskLevel(Enum):
    """How likely deleting a branch is to lose work."""
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


class Category(Enum):
    """Cleanup category a candidate was found in."""
    MERGED = "merged"
    STALE = "stale"
    GONE = "gone"


@dataclass(frozen=True)
class AheadBehind:
    """Commits the branch has that HEAD lacks (ahead) and vice versa (behind)."""
    ahead: int
    behind: int


@dataclass(frozen=True)
class Branch:
    """Snapshot of a branch as reported by the branch source."""
    name: str
    shorthand: str
    is_head: bool = False
    is_remote: bool = False
    upstream: Optional[str] = None
    target_oid: str = ""
    ahead_behind: Optional[AheadBehind] = None
    last_commit_timestamp: Optional[int] = None  # unix seconds
    is_stale: bool = False  # hint from the source, recomputed by the categorizer


@dataclass(frozen=True)
class BranchRule:
    """User-defined branch protection rule.

    Only ``prevent_deletion`` is used by the cleanup engine; the other flags
    are carried so stored rules round-trip unchanged.
    """
    pattern: str
    prevent_deletion: bool = False
    prevent_force_push: bool = False
    require_pull_request: bool = False
    prevent_direct_push: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to the stored JSON shape."""
        return {
            "pattern": self.pattern,
            "preventDeletion": self.prevent_deletion,
            "preventForcePush": self.prevent_force_push,
            "requirePullRequest": self.require_pull_request,
            "preventDirectPush": self.prevent_direct_push,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BranchRule":
        """Create a rule from a dict using camelCase or snake_case keys."""
        def flag(snake: str, camel: str) -> bool:
            return bool(data.get(snake, data.get(camel, False)))

        return cls(
            pattern=data["pattern"],
            prevent_deletion=flag("prevent_deletion", "preventDeletion"),
            prevent_force_push=flag("prevent_force_push", "preventForcePush"),
            require_pull_request=flag("require_pull_request", "requirePullRequest"),
            prevent_direct_push=flag("prevent_direct_push", "preventDirectPush"),
        )


@dataclass(frozen=True)
class TrackingInfo:
    """Upstream tracking state of a local branch."""
    local_branch: str
    upstream: Optional[str] = None  # e.g. "refs/remotes/origin/main"
    ahead: int = 0
    behind: int = 0
    remote: Optional[str] = None
    remote_branch: Optional[str] = None
    is_gone: bool = False  # upstream ref was deleted on the remote


@dataclass(frozen=True)
class RiskAssessment:
    """Risk level of deleting one branch, with a human-readable reason."""
    risk: RiskLevel
    risk_reason: str


@dataclass(frozen=True)
class CleanupCandidate:
    """A branch proposed for deletion in one cleanup category."""
    branch: Branch
    risk: RiskLevel
    risk_reason: str
    is_protected: bool
    protected_reason: Optional[str] = None
    tracking_info: Optional[TrackingInfo] = None

    @property
    def name(self) -> str:
        return self.branch.name

    @property
    def is_risky(self) -> bool:
        """True when deleting loses unpushed work (warning or danger)."""
        return self.risk in (RiskLevel.WARNING, RiskLevel.DANGER)


@dataclass
class CleanupCandidates:
    """Result of a categorization pass.

    A branch may appear in more than one list (e.g. merged and gone), but a
    merged branch is never listed as stale.
    """
    merged: List[CleanupCandidate] = field(default_factory=list)
    stale: List[CleanupCandidate] = field(default_factory=list)
    gone: List[CleanupCandidate] = field(default_factory=list)

    def for_category(self, category: Category) -> List[CleanupCandidate]:
        """Get the candidate list of one category."""
        if category == Category.MERGED:
            return self.merged
        if category == Category.STALE:
            return self.stale
        return self.gone

    def all_candidates(self) -> List[CleanupCandidate]:
        """All candidates in merged, stale, gone order, first occurrence per name."""
        seen = set()
        result = []
        for candidate in self.merged + self.stale + self.gone:
            if candidate.name not in seen:
                seen.add(candidate.name)
                result.append(candidate)
        return result

    def find(self, name: str) -> Optional[CleanupCandidate]:
        """Find the first candidate with the given branch name."""
        for candidate in self.merged + self.stale + self.gone:
            if candidate.name == name:
                return candidate
        return None

    def counts(self) -> Dict[Category, int]:
        return {
            Category.MERGED: len(self.merged),
            Category.STALE: len(self.stale),
            Category.GONE: len(self.gone),
        }

    @property
    def is_empty(self) -> bool:
        return not (self.merged or self.stale or self.gone)

    def first_non_empty_category(self) -> Category:
        """Category a host should show first (merged when everything is empty)."""
        for category in (Category.MERGED, Category.STALE, Category.GONE):
            if self.for_category(category):
                return category
        return Category.MERGED
