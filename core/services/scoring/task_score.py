from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.domain.enums import WorkStatus, enum_value
from core.exceptions import ValidationError
from core.services.scoring.models import TaskScore
from core.services.scoring.policy import DEFAULT_POLICY, ScoringPolicy

TIME_EARLY = "early"
TIME_ON_TIME = "onTime"
TIME_LATE = "late"

_REQUIRED_TASK_ATTRS = ("priority", "status")


def ensure_task_shape(task: object) -> None:
    """
    A task must at least expose priority and status attributes (values may be
    None or unrecognized). Anything else is a caller bug, not a business case.
    """
    if task is None or isinstance(task, (str, bytes, int, float)):
        raise ValidationError(
            f"Expected a task record, got {type(task).__name__}.",
            code="SCORING_INVALID_TASK",
        )
    missing = [attr for attr in _REQUIRED_TASK_ATTRS if not hasattr(task, attr)]
    if missing:
        raise ValidationError(
            f"Task record is missing attribute(s): {', '.join(missing)}.",
            code="SCORING_INVALID_TASK",
        )


def time_performance(
    status: object,
    deadline: Optional[datetime],
    actual: Optional[datetime],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[str]:
    """
    Classify deadline adherence. Only completed tasks with both timestamps
    are classified; the grace window is inclusive on both ends.
    """
    if enum_value(status) != WorkStatus.COMPLETED.value:
        return None
    if deadline is None or actual is None:
        return None
    if actual < deadline:
        return TIME_EARLY
    if actual <= deadline + policy.grace_period:
        return TIME_ON_TIME
    return TIME_LATE


def time_multiplier(performance: Optional[str], policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    if performance == TIME_EARLY:
        return policy.early_completion_bonus
    if performance == TIME_LATE:
        return policy.late_penalty
    if performance == TIME_ON_TIME:
        return policy.on_time_multiplier
    return 1.0


def score_task(task: object, policy: ScoringPolicy = DEFAULT_POLICY) -> TaskScore:
    ensure_task_shape(task)

    priority = getattr(task, "priority", None)
    status = getattr(task, "status", None)
    deadline = getattr(task, "completion_datetime", None)
    actual = getattr(task, "actual_completion_datetime", None)

    weight = policy.priority_weight(priority)
    status_mult = policy.status_multiplier(status)
    performance = time_performance(status, deadline, actual, policy)
    time_mult = time_multiplier(performance, policy)

    return TaskScore(
        task_id=getattr(task, "id", None),
        priority_weight=weight,
        status_multiplier=status_mult,
        time_multiplier=time_mult,
        time_performance=performance,
        weighted_score=weight * status_mult * time_mult,
        max_possible_score=policy.max_task_score(priority),
    )


__all__ = [
    "score_task",
    "ensure_task_shape",
    "time_performance",
    "time_multiplier",
    "TIME_EARLY",
    "TIME_ON_TIME",
    "TIME_LATE",
]
