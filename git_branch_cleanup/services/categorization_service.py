"""Service for sorting branches into merged, stale and gone cleanup candidates"""

import time
from typing import Iterable, Mapping, Optional

from git_branch_cleanup.constants import REASON_FULLY_MERGED, SECONDS_PER_DAY
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import (
    Branch,
    BranchRule,
    CleanupCandidate,
    CleanupCandidates,
    RiskAssessment,
    RiskLevel,
    TrackingInfo,
)
from git_branch_cleanup.services.protection_service import ProtectionEvaluator
from git_branch_cleanup.services.risk_service import RiskAssessor

logger = get_logger(__name__)


class BranchCategorizer:
    """Partitions branches into cleanup categories.

    The current HEAD branch is expected to be filtered out by the caller; if
    it slips through it is still reported as protected.
    """

    def __init__(
        self,
        protection: Optional[ProtectionEvaluator] = None,
        risk_assessor: Optional[RiskAssessor] = None,
    ):
        self.protection = protection or ProtectionEvaluator()
        self.risk_assessor = risk_assessor or RiskAssessor()

    def categorize(
        self,
        branches: Iterable[Branch],
        tracking_info_by_name: Optional[Mapping[str, TrackingInfo]],
        rules: Iterable[BranchRule],
        stale_branch_days: int,
        now: Optional[float] = None,
    ) -> CleanupCandidates:
        """
        Categorize branches into cleanup candidates.

        Args:
            branches: Branch snapshot to categorize
            tracking_info_by_name: Tracking data keyed by local branch name
            rules: User protection rules
            stale_branch_days: Age in days after which a branch is stale (0 disables)
            now: Current unix time, defaults to time.time()

        Returns:
            CleanupCandidates with merged, stale and gone lists
        """
        tracking = tracking_info_by_name or {}
        rules = list(rules)
        result = CleanupCandidates()
        merged_names = set()

        if stale_branch_days < 0:
            logger.warning(f"Negative stale_branch_days ({stale_branch_days}), stale detection disabled")
            stale_branch_days = 0

        threshold = None
        if stale_branch_days > 0:
            current = time.time() if now is None else now
            threshold = int(current) - stale_branch_days * SECONDS_PER_DAY

        for branch in branches:
            protected_reason = self.protection.protected_reason(branch, rules)
            tracking_info = tracking.get(branch.name)

            def candidate(assessment: RiskAssessment) -> CleanupCandidate:
                return CleanupCandidate(
                    branch=branch,
                    risk=assessment.risk,
                    risk_reason=assessment.risk_reason,
                    is_protected=protected_reason is not None,
                    protected_reason=protected_reason,
                    tracking_info=tracking_info,
                )

            if branch.ahead_behind is not None and branch.ahead_behind.ahead == 0:
                logger.debug(f"Branch {branch.name} is merged")
                result.merged.append(candidate(RiskAssessment(RiskLevel.SAFE, REASON_FULLY_MERGED)))
                merged_names.add(branch.name)

            if tracking_info is not None and tracking_info.is_gone:
                logger.debug(f"Branch {branch.name} has a gone upstream")
                result.gone.append(candidate(self.risk_assessor.assess(branch, tracking_info)))

            if (
                threshold is not None
                and branch.name not in merged_names
                and branch.last_commit_timestamp is not None
                and branch.last_commit_timestamp < threshold
            ):
                logger.debug(f"Branch {branch.name} is stale (last commit {branch.last_commit_timestamp})")
                result.stale.append(candidate(self.risk_assessor.assess(branch, tracking_info)))

        logger.debug(
            f"Categorized: {len(result.merged)} merged, {len(result.stale)} stale, "
            f"{len(result.gone)} gone"
        )
        return result


_default_categorizer = BranchCategorizer()


def categorize(
    branches: Iterable[Branch],
    tracking_info_by_name: Optional[Mapping[str, TrackingInfo]],
    rules: Iterable[BranchRule],
    stale_branch_days: int,
    now: Optional[float] = None,
) -> CleanupCandidates:
    """Categorize branches with the default protection and risk components."""
    return _default_categorizer.categorize(
        branches, tracking_info_by_name, rules, stale_branch_days, now=now
    )
