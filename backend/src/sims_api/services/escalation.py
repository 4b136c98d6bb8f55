"""Escalation rule for repeated low evaluation scores."""

from collections.abc import Sequence

from sims_api.constants.evaluation import (
    CRITICAL_SEVERITY_LOW_COUNT,
    ESCALATION_WINDOW,
    HIGH_SEVERITY_LOW_COUNT,
    LOW_SCORE_THRESHOLD,
)
from sims_api.models.domain.warning_letter import WarningSeverity


def count_low_scores(scores: Sequence[float]) -> int:
    """Count scores at or below the low-score threshold."""
    return sum(1 for score in scores if score <= LOW_SCORE_THRESHOLD)


def assess_escalation(recent_scores: Sequence[float]) -> WarningSeverity | None:
    """Decide whether recent scores warrant a warning letter.

    Only the first ``ESCALATION_WINDOW`` scores are considered, so callers
    should pass them newest first.

    Args:
        recent_scores: Overall scores, newest first

    Returns:
        CRITICAL if every score in the window is low, HIGH if at least two
        are, otherwise None
    """
    low_count = count_low_scores(recent_scores[:ESCALATION_WINDOW])

    if low_count >= CRITICAL_SEVERITY_LOW_COUNT:
        return WarningSeverity.CRITICAL
    if low_count >= HIGH_SEVERITY_LOW_COUNT:
        return WarningSeverity.HIGH
    return None
