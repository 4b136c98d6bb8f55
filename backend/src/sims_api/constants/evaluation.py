"""Evaluation and escalation constants."""

from typing import Final

# =============================================================================
# Scores
# =============================================================================

MIN_SCORE: Final[float] = 0.0
MAX_SCORE: Final[float] = 5.0

# =============================================================================
# Escalation rule
# =============================================================================

# Scores at or below this value count as low
LOW_SCORE_THRESHOLD: Final[float] = 2.5

# Number of most recent evaluations inspected
ESCALATION_WINDOW: Final[int] = 3

# Low-score counts within the window that trigger a warning
HIGH_SEVERITY_LOW_COUNT: Final[int] = 2
CRITICAL_SEVERITY_LOW_COUNT: Final[int] = 3
