from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Mapping

from core.domain.enums import TaskPriority, WorkStatus, enum_value


def _frozen(values: dict[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


DEFAULT_PRIORITY_WEIGHTS: Mapping[str, float] = _frozen(
    {
        TaskPriority.LOW.value: 1.0,
        TaskPriority.MEDIUM.value: 3.0,
        TaskPriority.HIGH.value: 5.0,
    }
)

DEFAULT_STATUS_MULTIPLIERS: Mapping[str, float] = _frozen(
    {
        WorkStatus.COMPLETED.value: 1.0,
        WorkStatus.ON_GOING.value: 0.5,
        WorkStatus.DELAYED.value: 0.3,
        WorkStatus.PENDING.value: 0.0,
        WorkStatus.CANCELLED.value: 0.0,
    }
)


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Every constant the scoring engine depends on.

    Unknown priorities fall back to the lowest weight and unknown statuses
    to zero credit, so a malformed task still counts toward the maximum
    score but adds nothing to the achieved score.
    """

    priority_weights: Mapping[str, float] = field(default_factory=lambda: DEFAULT_PRIORITY_WEIGHTS)
    default_priority_weight: float = 1.0
    status_multipliers: Mapping[str, float] = field(default_factory=lambda: DEFAULT_STATUS_MULTIPLIERS)
    default_status_multiplier: float = 0.0

    early_completion_bonus: float = 1.2
    on_time_multiplier: float = 1.0
    late_penalty: float = 0.8
    grace_period: timedelta = timedelta(days=1)

    task_termination_penalty: float = 15.0
    project_termination_penalty: float = 25.0

    def priority_weight(self, priority: object) -> float:
        key = enum_value(priority)
        if key is None:
            return self.default_priority_weight
        return float(self.priority_weights.get(key, self.default_priority_weight))

    def status_multiplier(self, status: object) -> float:
        key = enum_value(status)
        if key is None:
            return self.default_status_multiplier
        return float(self.status_multipliers.get(key, self.default_status_multiplier))

    def max_task_score(self, priority: object) -> float:
        # best case: completed (1.0) and early
        return self.priority_weight(priority) * 1.0 * self.early_completion_bonus


DEFAULT_POLICY = ScoringPolicy()


__all__ = [
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "DEFAULT_PRIORITY_WEIGHTS",
    "DEFAULT_STATUS_MULTIPLIERS",
]
