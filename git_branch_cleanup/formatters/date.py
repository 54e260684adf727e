"""Date and time formatting utilities."""

import time
from datetime import datetime, timezone
from typing import Optional

from git_branch_cleanup.constants import SECONDS_PER_DAY


def format_date(timestamp: Optional[int]) -> str:
    """
    Format a unix timestamp as a YYYY-MM-DD string.

    Args:
        timestamp: Unix seconds, or None

    Returns:
        Formatted date string, "unknown" if no timestamp
    """
    if timestamp is None:
        return "unknown"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


def format_time_ago(timestamp: Optional[int], now: Optional[float] = None) -> str:
    """
    Format a unix timestamp relative to now.

    Months are 30 days and years 12 months, which is precise enough for
    judging how old a branch is.

    Args:
        timestamp: Unix seconds, or None
        now: Current unix time, defaults to time.time()

    Returns:
        "today", "N days ago", "N months ago" or "N years ago"
    """
    if timestamp is None:
        return "unknown"

    current = time.time() if now is None else now
    days_ago = int((current - timestamp) // SECONDS_PER_DAY)

    if days_ago < 1:
        return "today"
    if days_ago == 1:
        return "1 day ago"
    if days_ago < 30:
        return f"{days_ago} days ago"

    months = days_ago // 30
    if months == 1:
        return "1 month ago"
    if months < 12:
        return f"{months} months ago"

    years = months // 12
    return "1 year ago" if years == 1 else f"{years} years ago"
