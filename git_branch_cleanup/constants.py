"""Shared constants for git-branch-cleanup."""

from dataclasses import dataclass
from typing import List

from git_branch_cleanup.models.branch import Category, RiskLevel


# Branch names that can never be deleted, regardless of rules
BUILTIN_PROTECTED_BRANCHES = (
    "main",
    "master",
    "develop",
    "development",
    "staging",
    "production",
)

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_STALE_BRANCH_DAYS = 90


# Risk reasons
REASON_FULLY_MERGED = "Fully merged into current branch"
REASON_NO_UPSTREAM = "No upstream configured"
REASON_NO_UNPUSHED_WORK = "No unpushed work"

# Protection reasons
PROTECTED_CURRENT_BRANCH = "Current branch"
PROTECTED_BUILTIN = "Built-in protected branch"
PROTECTED_BY_RULE = "Protected by branch rule"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Unified column definitions for both CLI and TUI
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("risk", "Risk", 9),
    ColumnDefinition("reason", "Reason", 36),
    ColumnDefinition("last_commit", "Last Commit", 14),
    ColumnDefinition("upstream", "Upstream", 24),
    ColumnDefinition("protected", "Protected", 26),
]


CATEGORY_LABELS = {
    Category.MERGED: "Merged",
    Category.STALE: "Stale",
    Category.GONE: "Gone Upstream",
}

CATEGORY_ORDER = (Category.MERGED, Category.STALE, Category.GONE)


# Symbol constants
SYMBOL_SELECTED = "✓"
SYMBOL_UNSELECTED = " "
SYMBOL_PROTECTED = "🔒"


RISK_LABELS = {
    RiskLevel.SAFE: "Safe",
    RiskLevel.WARNING: "Warning",
    RiskLevel.DANGER: "Danger",
}

# CLI colors (Rich color names)
CLI_RISK_COLORS = {
    RiskLevel.SAFE: "green",
    RiskLevel.WARNING: "yellow",
    RiskLevel.DANGER: "red",
}
CLI_PROTECTED_COLOR = "cyan"

# TUI colors (color names for Textual)
TUI_RISK_COLORS = {
    RiskLevel.SAFE: "green",
    RiskLevel.WARNING: "yellow",
    RiskLevel.DANGER: "red",
}
TUI_PROTECTED_COLOR = "cyan"


LEGEND_TEXT = """
Legend:
✓ = Selected for deletion   🔒 = Protected (never deleted)

Risk:
Safe    = Fully merged, deleted with `git branch -d`
Warning = Unpushed commits, force-deleted
Danger  = Remote deleted with unpushed commits, force-deleted

Keys:
1/2/3 = Merged / Stale / Gone tab   space = Toggle branch
a = Select/deselect all in tab      p = Toggle remote prune
enter/d = Delete selected           r = Reload
l = Legend                          q = Quit
"""
