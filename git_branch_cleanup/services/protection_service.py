"""Service for deciding which branches may never be deleted"""

from typing import Iterable, Optional

from git_branch_cleanup.constants import (
    BUILTIN_PROTECTED_BRANCHES,
    PROTECTED_BUILTIN,
    PROTECTED_BY_RULE,
    PROTECTED_CURRENT_BRANCH,
)
from git_branch_cleanup.exceptions import InvalidPatternError
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import Branch, BranchRule
from git_branch_cleanup.services import glob_matcher

logger = get_logger(__name__)


class ProtectionEvaluator:
    """Evaluates branch protection from HEAD status, built-in names and rules."""

    def __init__(self, builtin_names: Iterable[str] = BUILTIN_PROTECTED_BRANCHES):
        self.builtin_names = frozenset(builtin_names)

    def is_protected(self, branch: Branch, rules: Iterable[BranchRule]) -> bool:
        """Check if a branch is protected."""
        return self.protected_reason(branch, rules) is not None

    def protected_reason(self, branch: Branch, rules: Iterable[BranchRule]) -> Optional[str]:
        """
        Explain why a branch is protected.

        Args:
            branch: Branch to check
            rules: User protection rules

        Returns:
            Reason string, or None if the branch is not protected
        """
        if branch.is_head:
            return PROTECTED_CURRENT_BRANCH

        if branch.name in self.builtin_names:
            return PROTECTED_BUILTIN

        if self.matches_rule(branch.name, rules):
            return PROTECTED_BY_RULE

        return None

    def matches_rule(self, branch_name: str, rules: Iterable[BranchRule]) -> bool:
        """Check if any deletion-preventing rule matches the branch name."""
        for rule in rules:
            if not rule.prevent_deletion:
                continue
            try:
                if glob_matcher.matches(branch_name, rule.pattern):
                    logger.debug(f"Branch {branch_name} protected by rule '{rule.pattern}'")
                    return True
            except InvalidPatternError as e:
                logger.warning(f"Skipping protection rule: {e}")
        return False


_default_evaluator = ProtectionEvaluator()


def is_protected(branch: Branch, rules: Iterable[BranchRule]) -> bool:
    """Check if a branch is protected using the built-in protected names."""
    return _default_evaluator.is_protected(branch, rules)
