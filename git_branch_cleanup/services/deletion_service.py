"""Service for planning and executing branch deletions"""

import inspect
from typing import Any, Callable, Iterable, List, Optional, Union

from git_branch_cleanup.exceptions import InvalidInputError, ProtectedBranchSelectionError
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import CleanupCandidate, CleanupCandidates, RiskLevel
from git_branch_cleanup.models.deletion import (
    DeletionFailure,
    DeletionResult,
    DeletionStep,
    PruneResult,
)
from git_branch_cleanup.models.selection import Selection

logger = get_logger(__name__)

DeleteFn = Callable[[str, bool], Any]
PruneFn = Callable[[], Any]
CompletionFn = Callable[[DeletionResult], Any]


async def _resolve(value):
    """Await collaborator results that are awaitable, pass others through."""
    if inspect.isawaitable(value):
        return await value
    return value


def _pruned_names(result) -> List[str]:
    """
    Normalize a prune collaborator's return value to a list of ref names.

    Raises:
        InvalidInputError: If the value is not a PruneResult, dict, list or None
    """
    if result is None:
        return []
    if isinstance(result, PruneResult):
        return list(result.branches_pruned)
    if isinstance(result, dict):
        return list(result.get("branches_pruned", result.get("branchesPruned", [])))
    if isinstance(result, (list, tuple)):
        return list(result)
    raise InvalidInputError(f"prune returned {type(result).__name__}, expected PruneResult, dict or list")


class DeletionPlanner:
    """Turns a selection into deletion steps and runs them one at a time."""

    @staticmethod
    def plan(
        selection: Iterable[str],
        all_candidates: Union[CleanupCandidates, Iterable[CleanupCandidate]],
    ) -> List[DeletionStep]:
        """
        Build an ordered deletion plan.

        Args:
            selection: Selected branch names, in selection order
            all_candidates: Candidates of every category

        Returns:
            One DeletionStep per selected name; non-safe branches are forced

        Raises:
            ProtectedBranchSelectionError: If a protected branch was selected
        """
        if isinstance(all_candidates, CleanupCandidates):
            candidates = all_candidates.all_candidates()
        else:
            candidates = list(all_candidates)

        by_name = {}
        for candidate in candidates:
            by_name.setdefault(candidate.name, candidate)

        steps = []
        for name in Selection.of(selection):
            candidate = by_name.get(name)
            if candidate is None:
                logger.warning(f"Selected branch {name} is not a cleanup candidate, skipping")
                continue
            if candidate.is_protected:
                raise ProtectedBranchSelectionError(name, candidate.protected_reason)
            steps.append(DeletionStep(name=name, force=candidate.risk != RiskLevel.SAFE))

        logger.debug(f"Planned {len(steps)} deletions ({sum(s.force for s in steps)} forced)")
        return steps

    @staticmethod
    async def execute(
        plan: Iterable[DeletionStep],
        delete_fn: DeleteFn,
        prune_fn: Optional[PruneFn],
        prune_enabled: bool,
        on_complete: Optional[CompletionFn] = None,
    ) -> DeletionResult:
        """
        Execute a deletion plan sequentially.

        Each deletion completes before the next one starts. The first failure
        stops the run; branches already deleted stay deleted and the rest of
        the plan is reported as skipped. When pruning is enabled and at least
        one branch was deleted, ``prune_fn`` runs exactly once afterwards. A
        prune failure is recorded without failing the deletions.

        Args:
            plan: Steps from plan()
            delete_fn: Called as delete_fn(name, force); may be sync or async
            prune_fn: Called with no arguments; may be sync or async
            prune_enabled: Whether to prune remote-tracking branches
            on_complete: Called once with the result after both phases

        Returns:
            DeletionResult; collaborator errors never propagate

        Raises:
            InvalidInputError: If prune_fn returns something other than a
                PruneResult, dict, list or None
        """
        steps = list(plan)
        result = DeletionResult()

        for index, step in enumerate(steps):
            logger.info(f"Deleting branch {step.name}{' (force)' if step.force else ''}")
            try:
                await _resolve(delete_fn(step.name, step.force))
            except Exception as e:
                logger.error(f"Failed to delete {step.name}: {e}")
                result.failed = DeletionFailure(name=step.name, message=str(e))
                result.skipped = [s.name for s in steps[index + 1:]]
                break
            result.deleted.append(step.name)

        if prune_enabled and prune_fn is not None and result.deleted:
            pruned = None
            try:
                pruned = await _resolve(prune_fn())
            except Exception as e:
                logger.error(f"Failed to prune remote-tracking branches: {e}")
                result.prune_error = str(e)
            if result.prune_error is None:
                result.pruned = _pruned_names(pruned)
                logger.info(f"Pruned {len(result.pruned)} remote-tracking branches")

        if on_complete is not None:
            await _resolve(on_complete(result))

        return result


def plan(
    selection: Iterable[str],
    all_candidates: Union[CleanupCandidates, Iterable[CleanupCandidate]],
) -> List[DeletionStep]:
    """Build an ordered deletion plan."""
    return DeletionPlanner.plan(selection, all_candidates)


async def execute(
    plan: Iterable[DeletionStep],
    delete_fn: DeleteFn,
    prune_fn: Optional[PruneFn],
    prune_enabled: bool,
    on_complete: Optional[CompletionFn] = None,
) -> DeletionResult:
    """Execute a deletion plan sequentially."""
    return await DeletionPlanner.execute(plan, delete_fn, prune_fn, prune_enabled, on_complete)
