"""Formatting utilities for git-branch-cleanup.

This package provides formatting functions for displaying cleanup candidates,
organized into logical modules:
- date: Date and relative time formatting
- risk: Risk, protection and upstream columns
- summary: Deletion plan confirmation and result summaries
"""

# Date formatters
from .date import format_date, format_time_ago

# Risk formatters
from .risk import (
    format_protection,
    format_risk_label,
    format_risk_text,
    format_upstream,
)

# Summary formatters
from .summary import (
    format_cleanup_summary,
    format_deletion_plan_items,
    format_risky_confirmation,
)

__all__ = [
    # Date
    "format_date",
    "format_time_ago",
    # Risk
    "format_protection",
    "format_risk_label",
    "format_risk_text",
    "format_upstream",
    # Summary
    "format_cleanup_summary",
    "format_deletion_plan_items",
    "format_risky_confirmation",
]
