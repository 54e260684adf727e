"""Deletion plan and result formatting utilities."""

from typing import List

from git_branch_cleanup.models.deletion import DeletionResult, DeletionStep


def _branches(count: int) -> str:
    return f"{count} branch{'es' if count != 1 else ''}"


def format_deletion_plan_items(plan: List[DeletionStep]) -> str:
    """
    Format a deletion plan for a confirmation message.

    Example:
        "  • feature/done\\n  • feature/wip (force)"
    """
    return "\n".join(f"  • {step.name}{' (force)' if step.force else ''}" for step in plan)


def format_risky_confirmation(risky_count: int) -> str:
    """Warning shown before deleting branches that have unpushed commits."""
    return (
        f"{risky_count} of the selected branches have unpushed commits that may be lost.\n\n"
        "This action cannot be undone. Continue?"
    )


def format_cleanup_summary(result: DeletionResult) -> str:
    """
    Summarize a deletion run in one line.

    Examples:
        "Deleted 2 branches (remotes pruned)"
        "Deleted 1 branch, 1 failed"
        "Failed to delete 1 branch"
    """
    deleted = len(result.deleted)
    failed = 1 if result.failed else 0

    if deleted == 0:
        if failed:
            return f"Failed to delete {_branches(failed)}"
        return "No branches deleted"

    prune_note = " (remotes pruned)" if result.pruned is not None else ""
    if failed:
        return f"Deleted {_branches(deleted)}, {failed} failed{prune_note}"
    return f"Deleted {_branches(deleted)}{prune_note}"
