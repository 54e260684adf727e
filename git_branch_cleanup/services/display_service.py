"""Display and formatting service for cleanup candidates"""
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from git_branch_cleanup.constants import (
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    COLUMNS,
    SYMBOL_SELECTED,
    SYMBOL_UNSELECTED,
)
from git_branch_cleanup.formatters import (
    format_cleanup_summary,
    format_date,
    format_deletion_plan_items,
    format_protection,
    format_risk_text,
    format_time_ago,
    format_upstream,
)
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import Category, CleanupCandidate, CleanupCandidates
from git_branch_cleanup.models.deletion import DeletionResult, DeletionStep
from git_branch_cleanup.models.selection import Selection

logger = get_logger(__name__)


class DisplayService:
    """Renders candidates, plans and results to the terminal with rich."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def build_category_table(
        self,
        category: Category,
        candidates: Iterable[CleanupCandidate],
        selection: Selection,
    ) -> Table:
        """Build a table of one category's candidates."""
        candidates = list(candidates)
        table = Table(title=f"{CATEGORY_LABELS[category]} ({len(candidates)})")

        table.add_column(SYMBOL_UNSELECTED, justify="center")
        for col in COLUMNS:
            table.add_column(col.label, no_wrap=col.key == "branch")

        for candidate in candidates:
            mark = SYMBOL_SELECTED if candidate.name in selection else SYMBOL_UNSELECTED
            timestamp = candidate.branch.last_commit_timestamp
            last_commit = format_time_ago(timestamp)
            if self.verbose:
                last_commit = f"{format_date(timestamp)} ({last_commit})"
            table.add_row(
                mark,
                Text(candidate.name, style="bold" if candidate.name in selection else ""),
                format_risk_text(candidate.risk),
                candidate.risk_reason,
                last_commit,
                format_upstream(candidate),
                format_protection(candidate),
            )
        return table

    def display_candidates(
        self,
        candidates: CleanupCandidates,
        selection: Selection,
        category: str = "all",
    ) -> None:
        """Print one table per non-empty category (or just the requested one)."""
        if candidates.is_empty:
            self.console.print("[green]No branches to clean up![/green]")
            return

        for cat in CATEGORY_ORDER:
            if category != "all" and cat.value != category:
                continue
            items = candidates.for_category(cat)
            if not items:
                continue
            self.console.print(self.build_category_table(cat, items, selection))

        if self.verbose:
            counts = candidates.counts()
            self.console.print("\nSummary:")
            for cat in CATEGORY_ORDER:
                self.console.print(f"{CATEGORY_LABELS[cat]} branches: {counts[cat]}")
            self.console.print(f"Selected: {len(selection)}")

    def display_plan(self, plan: Iterable[DeletionStep]) -> None:
        """Print the branches about to be deleted."""
        self.console.print("\nThe following branches will be deleted:")
        self.console.print(format_deletion_plan_items(list(plan)))

    def display_result(self, result: DeletionResult) -> None:
        """Print the outcome of a deletion run."""
        for name in result.deleted:
            self.console.print(f"[green]✓ Deleted {name}[/green]")

        if result.failed:
            self.console.print(f"[red]✗ Failed to delete {result.failed.name}: {result.failed.message}[/red]")
        if result.skipped:
            self.console.print(f"[yellow]Not attempted: {', '.join(result.skipped)}[/yellow]")
        if result.pruned:
            self.console.print(f"[dim]Pruned: {', '.join(result.pruned)}[/dim]")
        if result.prune_error:
            self.console.print(f"[yellow]Prune failed: {result.prune_error}[/yellow]")

        style = "green" if result.succeeded and result.deleted else "yellow" if result.deleted else "red"
        self.console.print(f"\n[{style}]{format_cleanup_summary(result)}[/{style}]")
