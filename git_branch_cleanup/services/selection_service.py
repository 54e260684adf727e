"""Service for default and bulk selection of cleanup candidates"""

from typing import Iterable, List

from git_branch_cleanup.exceptions import ProtectedBranchSelectionError
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import CleanupCandidate, RiskLevel
from git_branch_cleanup.models.selection import Selection

logger = get_logger(__name__)


class SelectionPolicy:
    """Selection rules for the cleanup candidate lists.

    Selections are immutable; every method returns a new Selection. Bulk
    operations are scoped to the candidates passed in, which is normally the
    list of the category the user is looking at.
    """

    @staticmethod
    def default_selection(
        merged: Iterable[CleanupCandidate], gone: Iterable[CleanupCandidate]
    ) -> Selection:
        """
        Compute the initial selection.

        Safe, unprotected branches from the merged and gone lists are
        selected. Stale branches are never auto-selected.
        """
        names = [
            c.name
            for c in list(merged) + list(gone)
            if c.risk == RiskLevel.SAFE and not c.is_protected
        ]
        selection = Selection.of(names)
        logger.debug(f"Default selection: {len(selection)} branches")
        return selection

    @staticmethod
    def selectable(candidates: Iterable[CleanupCandidate]) -> List[CleanupCandidate]:
        """Candidates the user may select (everything not protected)."""
        return [c for c in candidates if not c.is_protected]

    @classmethod
    def select_all(cls, selection: Selection, candidates: Iterable[CleanupCandidate]) -> Selection:
        """Add every selectable candidate of the category to the selection."""
        return selection.with_names(c.name for c in cls.selectable(candidates))

    @classmethod
    def deselect_all(cls, selection: Selection, candidates: Iterable[CleanupCandidate]) -> Selection:
        """Remove the category's selectable candidates, keeping other names."""
        return selection.without_names(c.name for c in cls.selectable(candidates))

    @classmethod
    def is_all_selected(cls, selection: Selection, candidates: Iterable[CleanupCandidate]) -> bool:
        """True when the category has selectable candidates and all are selected."""
        selectable = cls.selectable(candidates)
        if not selectable:
            return False
        return all(c.name in selection for c in selectable)

    @classmethod
    def toggle_select_all(cls, selection: Selection, candidates: Iterable[CleanupCandidate]) -> Selection:
        """Deselect the category if fully selected, otherwise select all of it."""
        candidates = list(candidates)
        if cls.is_all_selected(selection, candidates):
            return cls.deselect_all(selection, candidates)
        return cls.select_all(selection, candidates)

    @staticmethod
    def add(selection: Selection, candidate: CleanupCandidate) -> Selection:
        """
        Add one candidate to the selection.

        Raises:
            ProtectedBranchSelectionError: If the candidate is protected
        """
        if candidate.is_protected:
            raise ProtectedBranchSelectionError(candidate.name, candidate.protected_reason)
        return selection.with_names([candidate.name])

    @classmethod
    def toggle(cls, selection: Selection, candidate: CleanupCandidate) -> Selection:
        """
        Flip one candidate's membership.

        Raises:
            ProtectedBranchSelectionError: If the candidate is protected; the
                caller's selection is left as it was
        """
        if candidate.is_protected:
            raise ProtectedBranchSelectionError(candidate.name, candidate.protected_reason)
        if candidate.name in selection:
            return selection.without_names([candidate.name])
        return cls.add(selection, candidate)

    @staticmethod
    def risky_count(selection: Selection, candidates: Iterable[CleanupCandidate]) -> int:
        """Number of selected branches whose deletion loses unpushed commits."""
        names = {c.name for c in candidates if c.is_risky and c.name in selection}
        return len(names)

    @classmethod
    def has_warning_or_danger(cls, selection: Selection, candidates: Iterable[CleanupCandidate]) -> bool:
        return cls.risky_count(selection, candidates) > 0


def default_selection(
    merged: Iterable[CleanupCandidate], gone: Iterable[CleanupCandidate]
) -> Selection:
    """Compute the initial selection from merged and gone candidates."""
    return SelectionPolicy.default_selection(merged, gone)
