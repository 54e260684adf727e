"""Service for assessing how risky it is to delete a branch"""

from typing import Optional

from git_branch_cleanup.constants import (
    REASON_FULLY_MERGED,
    REASON_NO_UNPUSHED_WORK,
    REASON_NO_UPSTREAM,
)
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import Branch, RiskAssessment, RiskLevel, TrackingInfo

logger = get_logger(__name__)


def _commits(count: int) -> str:
    return f"{count} unpushed commit{'s' if count != 1 else ''}"


class RiskAssessor:
    """Rates a single branch as safe, warning or danger to delete."""

    def assess(self, branch: Branch, tracking_info: Optional[TrackingInfo] = None) -> RiskAssessment:
        """
        Assess the risk of deleting a branch.

        Args:
            branch: Branch to assess
            tracking_info: Upstream tracking data, if any

        Returns:
            RiskAssessment with level and reason
        """
        ahead = branch.ahead_behind.ahead if branch.ahead_behind else 0

        if ahead == 0:
            return RiskAssessment(RiskLevel.SAFE, REASON_FULLY_MERGED)

        if tracking_info is not None and tracking_info.is_gone:
            logger.debug(f"Branch {branch.name} lost its upstream with {ahead} commits ahead")
            return RiskAssessment(RiskLevel.DANGER, f"Remote deleted with {_commits(ahead)}")

        if ahead > 0:
            return RiskAssessment(RiskLevel.WARNING, f"Has {_commits(ahead)}")

        # Only reachable with a negative ahead count from a misbehaving source
        if not branch.upstream:
            return RiskAssessment(RiskLevel.WARNING, REASON_NO_UPSTREAM)

        return RiskAssessment(RiskLevel.SAFE, REASON_NO_UNPUSHED_WORK)


_default_assessor = RiskAssessor()


def assess(branch: Branch, tracking_info: Optional[TrackingInfo] = None) -> RiskAssessment:
    """Assess the risk of deleting a branch."""
    return _default_assessor.assess(branch, tracking_info)
