"""Risk and protection formatting utilities."""

from rich.text import Text

from git_branch_cleanup.constants import (
    CLI_PROTECTED_COLOR,
    CLI_RISK_COLORS,
    RISK_LABELS,
    SYMBOL_PROTECTED,
)
from git_branch_cleanup.models.branch import CleanupCandidate, RiskLevel


def format_risk_label(risk: RiskLevel) -> str:
    """Display label for a risk level ("Safe", "Warning", "Danger")."""
    return RISK_LABELS[risk]


def format_risk_text(risk: RiskLevel) -> Text:
    """Risk label styled with its CLI color."""
    return Text(format_risk_label(risk), style=CLI_RISK_COLORS[risk])


def format_protection(candidate: CleanupCandidate) -> Text:
    """Protection column: lock symbol and reason, empty when unprotected."""
    if not candidate.is_protected:
        return Text("")
    reason = candidate.protected_reason or "Protected"
    return Text(f"{SYMBOL_PROTECTED} {reason}", style=CLI_PROTECTED_COLOR)


def _short_ref(ref: str) -> str:
    for prefix in ("refs/remotes/", "refs/heads/"):
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def format_upstream(candidate: CleanupCandidate) -> str:
    """Upstream column, marking upstreams that were deleted on the remote."""
    tracking = candidate.tracking_info
    if tracking is not None and tracking.upstream:
        short = _short_ref(tracking.upstream)
        return f"{short} (gone)" if tracking.is_gone else short
    if candidate.branch.upstream:
        return _short_ref(candidate.branch.upstream)
    return "-"
