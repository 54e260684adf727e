"""Wildcard matching of branch names against protection rule patterns.

Only ``*`` is special: it matches any run of characters, including ``/``,
so ``release/*`` also matches ``release/v1.0/hotfix``. Every other character
matches itself literally and the whole name must match.
"""

import re
from typing import Pattern

from git_branch_cleanup.exceptions import InvalidPatternError


def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compile a branch pattern into an anchored regular expression.

    Args:
        pattern: Glob pattern using ``*`` as the only wildcard

    Returns:
        Compiled regular expression matching whole branch names

    Raises:
        InvalidPatternError: If the pattern is not a non-empty string
    """
    if not isinstance(pattern, str) or not pattern:
        raise InvalidPatternError(pattern)

    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{regex}$")


def matches(name: str, pattern: str) -> bool:
    """Check whether a branch name matches a glob pattern exactly."""
    return compile_pattern(pattern).match(name) is not None
