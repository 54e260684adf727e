"""Core functionality for git-branch-cleanup"""

import asyncio
from typing import Iterable, List, Optional, Union

from rich.console import Console

from git_branch_cleanup.config import CleanupConfig
from git_branch_cleanup.exceptions import OperationInProgressError
from git_branch_cleanup.formatters import format_risky_confirmation
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import Branch, BranchRule, Category, CleanupCandidates
from git_branch_cleanup.models.deletion import DeletionResult, DeletionStep
from git_branch_cleanup.models.selection import Selection
from git_branch_cleanup.services.categorization_service import BranchCategorizer
from git_branch_cleanup.services.deletion_service import DeletionPlanner
from git_branch_cleanup.services.display_service import DisplayService
from git_branch_cleanup.services.git import GitOperations
from git_branch_cleanup.services.rule_store import RuleStore
from git_branch_cleanup.services.selection_service import SelectionPolicy

console = Console()
logger = get_logger(__name__)


class BranchCleanup:
    """Loads repository state, runs the cleanup engine and applies deletions."""

    def __init__(
        self,
        repo_path: str,
        config: Union[CleanupConfig, dict],
        tui_mode: bool = False,
        rule_store: Optional[RuleStore] = None,
    ):
        """Initialize BranchCleanup.

        Args:
            repo_path: Path to git repository
            config: Configuration dict or CleanupConfig object
            tui_mode: If True, suppresses Rich console output (for TUI mode)
            rule_store: Source of stored protection rules

        Raises:
            RepositoryError: If the path is not a usable repository
        """
        self.repo_path = repo_path
        self.tui_mode = tui_mode
        self.config = config if isinstance(config, CleanupConfig) else CleanupConfig.from_dict(config)

        self.git_service = GitOperations(repo_path)
        self.rule_store = rule_store or RuleStore(repo_path)
        self.categorizer = BranchCategorizer()
        self.display_service = DisplayService(console=console, verbose=self.config.verbose)

        # Serializes deletion runs; the engine itself does not guard this
        self.operation_in_progress = False

    def _console_print(self, *args, **kwargs):
        """Print to console only when not in TUI mode."""
        if not self.tui_mode:
            console.print(*args, **kwargs)

    def load_rules(self) -> List[BranchRule]:
        """Stored rules followed by rules from the configuration."""
        return self.rule_store.load_rules() + list(self.config.protection_rules)

    def load_branches(self) -> List[Branch]:
        """Local branches other than the checked-out one."""
        return [
            b for b in self.git_service.get_branches()
            if not b.is_head and not b.is_remote
        ]

    def load_candidates(self) -> CleanupCandidates:
        """Fetch fresh branch, rule and tracking data and categorize it."""
        branches = self.load_branches()
        tracking = self.git_service.get_all_tracking_info(b.name for b in branches)
        rules = self.load_rules()

        logger.debug(
            f"Categorizing {len(branches)} branches with {len(rules)} rules, "
            f"stale after {self.config.stale_branch_days} days"
        )
        return self.categorizer.categorize(
            branches, tracking, rules, self.config.stale_branch_days
        )

    def default_selection(self, candidates: CleanupCandidates) -> Selection:
        return SelectionPolicy.default_selection(candidates.merged, candidates.gone)

    def plan(self, selection: Iterable[str], candidates: CleanupCandidates) -> List[DeletionStep]:
        return DeletionPlanner.plan(selection, candidates)

    async def execute_plan(
        self,
        plan: List[DeletionStep],
        prune: Optional[bool] = None,
    ) -> DeletionResult:
        """
        Execute a deletion plan against the repository.

        Args:
            plan: Steps from plan()
            prune: Prune remote-tracking branches afterwards (defaults to config)

        Raises:
            OperationInProgressError: If another run is still in flight
        """
        if self.operation_in_progress:
            raise OperationInProgressError()

        prune_enabled = self.config.prune_remotes if prune is None else prune
        self.operation_in_progress = True
        try:
            return await DeletionPlanner.execute(
                plan,
                self.git_service.delete_branch,
                lambda: self.git_service.prune_remote_tracking_branches(self.config.remote),
                prune_enabled,
            )
        finally:
            self.operation_in_progress = False

    def delete_selected(
        self,
        selection: Iterable[str],
        candidates: CleanupCandidates,
        prune: Optional[bool] = None,
    ) -> DeletionResult:
        """Plan and execute the deletion of the selected branches."""
        return asyncio.run(self.execute_plan(self.plan(selection, candidates), prune=prune))

    def process_branches(
        self,
        cleanup_enabled: bool = True,
        selected_names: Optional[List[str]] = None,
    ) -> Optional[DeletionResult]:
        """
        Show cleanup candidates and delete the selection.

        Args:
            cleanup_enabled: Delete after displaying (False previews only)
            selected_names: Explicit selection; defaults to the default selection

        Returns:
            DeletionResult, or None when nothing was deleted
        """
        candidates = self.load_candidates()

        if selected_names is None:
            selection = self.default_selection(candidates)
            if self.config.category != "all":
                shown = {c.name for c in candidates.for_category(Category(self.config.category))}
                selection = Selection.of(n for n in selection if n in shown)
        else:
            selection = Selection()
            for name in selected_names:
                candidate = candidates.find(name)
                if candidate is None:
                    self._console_print(f"[yellow]{name} is not a cleanup candidate, skipping[/yellow]")
                    continue
                selection = SelectionPolicy.add(selection, candidate)

        self.display_service.display_candidates(candidates, selection, self.config.category)

        if not selection:
            if not candidates.is_empty:
                self._console_print("\n[green]No branches selected for deletion[/green]")
            return None

        steps = self.plan(selection, candidates)
        self.display_service.display_plan(steps)

        if self.config.dry_run or not cleanup_enabled:
            self._console_print("\n[yellow]Dry run: no branches were deleted[/yellow]")
            return None

        if not self.config.force and not self._confirm_deletion(selection, candidates):
            self._console_print("[yellow]Cleanup cancelled[/yellow]")
            return None

        result = asyncio.run(self.execute_plan(steps))
        self.display_service.display_result(result)
        return result

    def _confirm_deletion(self, selection: Selection, candidates: CleanupCandidates) -> bool:
        """Ask for confirmation, with a stronger warning when work may be lost."""
        risky = SelectionPolicy.risky_count(selection, candidates.all_candidates())
        if risky:
            self._console_print(f"\n[yellow]{format_risky_confirmation(risky)}[/yellow]")

        response = console.input("\nProceed with deletion? [y/N] ")
        return response.lower() == "y"
