from __future__ import annotations

import math
from typing import Sequence, Tuple

# (lower bound inclusive, letter, description), highest band first.
GradeBand = Tuple[float, str, str]

WORKER_GRADE_BANDS: Tuple[GradeBand, ...] = (
    (90.0, "A+", "Exceptional"),
    (85.0, "A", "Excellent"),
    (80.0, "B+", "Very Good"),
    (75.0, "B", "Good"),
    (70.0, "C+", "Above Average"),
    (65.0, "C", "Average"),
    (60.0, "D+", "Below Average"),
    (50.0, "D", "Poor"),
    (0.0, "F", "Failing"),
)

MANAGER_GRADE_BANDS: Tuple[GradeBand, ...] = (
    (95.0, "A+", "Outstanding"),
    (90.0, "A", "Excellent"),
    (85.0, "B+", "Very Good"),
    (80.0, "B", "Good"),
    (75.0, "C+", "Above Average"),
    (70.0, "C", "Average"),
    (65.0, "D+", "Below Average"),
    (60.0, "D", "Poor"),
    (0.0, "F", "Needs Improvement"),
)

NOT_AVAILABLE = "N/A"


def clamp_score(score: float) -> float:
    value = float(score)
    if math.isnan(value):
        return 0.0
    return min(100.0, max(0.0, value))


def _band_for(score: float, bands: Sequence[GradeBand]) -> GradeBand:
    value = clamp_score(score)
    for band in bands:
        if value >= band[0]:
            return band
    return bands[-1]


def letter_grade(score: float, bands: Sequence[GradeBand] = WORKER_GRADE_BANDS) -> str:
    return _band_for(score, bands)[1]


def grade_label(score: float, bands: Sequence[GradeBand] = WORKER_GRADE_BANDS) -> str:
    _, letter, description = _band_for(score, bands)
    return f"{letter} ({description})"


__all__ = [
    "GradeBand",
    "WORKER_GRADE_BANDS",
    "MANAGER_GRADE_BANDS",
    "NOT_AVAILABLE",
    "clamp_score",
    "letter_grade",
    "grade_label",
]
