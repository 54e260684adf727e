"""Configuration handling for git-branch-cleanup"""

from dataclasses import dataclass, field
from typing import List, Optional

from git_branch_cleanup.constants import DEFAULT_STALE_BRANCH_DAYS
from git_branch_cleanup.exceptions import InvalidInputError, InvalidPatternError
from git_branch_cleanup.models.branch import BranchRule
from git_branch_cleanup.services.glob_matcher import compile_pattern

CATEGORY_FILTERS = ["all", "merged", "stale", "gone"]


@dataclass
class CleanupConfig:
    """Configuration for git-branch-cleanup with validation."""

    # Candidate detection
    stale_branch_days: int = DEFAULT_STALE_BRANCH_DAYS  # 0 disables stale detection
    protection_rules: List[BranchRule] = field(default_factory=list)
    category: str = "all"  # all, merged, stale, gone

    # Deletion
    prune_remotes: bool = True
    remote: Optional[str] = None  # None prunes every remote

    # Execution modes
    interactive: bool = True
    dry_run: bool = False
    force: bool = False  # Skip confirmation prompts
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_stale_branch_days()
        self._validate_category()
        self._validate_protection_rules()

    def _validate_stale_branch_days(self):
        """Validate stale_branch_days is not negative."""
        if not isinstance(self.stale_branch_days, int) or self.stale_branch_days < 0:
            raise InvalidInputError(
                f"stale_branch_days must be a non-negative integer, got {self.stale_branch_days!r}"
            )

    def _validate_category(self):
        """Validate category is one of allowed values."""
        if self.category not in CATEGORY_FILTERS:
            raise InvalidInputError(
                f"category must be one of {CATEGORY_FILTERS}, got '{self.category}'"
            )

    def _validate_protection_rules(self):
        """Validate rules, accepting dicts in the stored rule format."""
        if not isinstance(self.protection_rules, list):
            raise InvalidInputError("protection_rules must be a list")

        rules = []
        for rule in self.protection_rules:
            if isinstance(rule, dict):
                try:
                    rule = BranchRule.from_dict(rule)
                except KeyError as e:
                    raise InvalidInputError(f"protection rule is missing {e}") from e
            if not isinstance(rule, BranchRule):
                raise InvalidInputError(f"invalid protection rule: {rule!r}")
            try:
                compile_pattern(rule.pattern)
            except InvalidPatternError as e:
                raise InvalidInputError(f"invalid protection rule: {e}") from e
            rules.append(rule)
        self.protection_rules = rules

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "stale_branch_days": self.stale_branch_days,
            "protection_rules": [rule.to_dict() for rule in self.protection_rules],
            "category": self.category,
            "prune_remotes": self.prune_remotes,
            "remote": self.remote,
            "interactive": self.interactive,
            "dry_run": self.dry_run,
            "force": self.force,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CleanupConfig":
        """Create CleanupConfig from dictionary, ignoring unknown keys."""
        known_fields = {
            "stale_branch_days",
            "protection_rules",
            "category",
            "prune_remotes",
            "remote",
            "interactive",
            "dry_run",
            "force",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
