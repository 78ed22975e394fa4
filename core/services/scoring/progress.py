from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List

from core.domain.enums import TaskPriority, WorkStatus, enum_value
from core.exceptions import ValidationError
from core.services.scoring.insights import (
    NO_PHASES_MESSAGE,
    NO_TASKS_MESSAGE,
    ProgressInsightsMixin,
    no_data_insights,
)
from core.services.scoring.models import (
    BreakdownEntry,
    PhaseProgress,
    ProgressResult,
    ProgressSummary,
    ProjectProgressTotals,
)
from core.services.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from core.services.scoring.task_score import score_task

logger = logging.getLogger(__name__)


def round_pct(value: float) -> float:
    return round(float(value), 2)


def weighted_percentage(weighted_sum: float, max_sum: float) -> float:
    return (weighted_sum / max_sum) * 100.0 if max_sum > 0 else 0.0


def simple_percentage(completed: int, total: int) -> float:
    return (completed / total) * 100.0 if total > 0 else 0.0


def ensure_collection(value: object, what: str) -> List[object]:
    if value is None or isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ValidationError(
            f"Expected a collection of {what}, got {type(value).__name__}.",
            code="SCORING_INVALID_INPUT",
        )
    return list(value)


def phase_tasks(phase: object) -> List[object]:
    if phase is None or not hasattr(phase, "tasks"):
        raise ValidationError(
            f"Expected a phase record, got {type(phase).__name__}.",
            code="SCORING_INVALID_INPUT",
        )
    tasks = getattr(phase, "tasks")
    if tasks is None:
        return []
    return ensure_collection(tasks, "tasks")


def finalize_progress(totals: ProjectProgressTotals) -> ProgressSummary:
    return ProgressSummary(
        progress_percentage=round_pct(weighted_percentage(totals.weighted_sum, totals.max_sum)),
        simple_progress_percentage=round_pct(simple_percentage(totals.completed_tasks, totals.total_tasks)),
        total_tasks=totals.total_tasks,
        completed_tasks=totals.completed_tasks,
    )


@dataclass
class _Tally:
    weighted_sum: float = 0.0
    max_sum: float = 0.0
    total: int = 0
    completed: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)
    priority_counts: Dict[str, int] = field(default_factory=dict)

    def add(self, task: object, policy: ScoringPolicy) -> None:
        ts = score_task(task, policy)
        self.weighted_sum += ts.weighted_score
        self.max_sum += ts.max_possible_score
        self.total += 1

        status = enum_value(getattr(task, "status", None))
        priority = enum_value(getattr(task, "priority", None))
        if status is not None:
            self.status_counts[status] = self.status_counts.get(status, 0) + 1
        if priority is not None:
            self.priority_counts[priority] = self.priority_counts.get(priority, 0) + 1
        if status == WorkStatus.COMPLETED.value:
            self.completed += 1

    def merge(self, other: "_Tally") -> None:
        self.weighted_sum += other.weighted_sum
        self.max_sum += other.max_sum
        self.total += other.total
        self.completed += other.completed
        for key, count in other.status_counts.items():
            self.status_counts[key] = self.status_counts.get(key, 0) + count
        for key, count in other.priority_counts.items():
            self.priority_counts[key] = self.priority_counts.get(key, 0) + count


class ProjectProgressCalculator(ProgressInsightsMixin):
    """
    Weighted and simple progress for a Phase -> Task hierarchy.

    Weighted progress is the ratio of achieved task score to best-case task
    score across all tasks; simple progress counts completed tasks. Values are
    rounded only when the result is built.
    """

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self._policy = policy

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    def calculate(self, phases: Iterable[object]) -> ProgressResult:
        phase_list = ensure_collection(phases, "phases")
        if not phase_list:
            return self._empty_result(NO_PHASES_MESSAGE)

        overall = _Tally()
        combo_counts: Dict[str, Dict[str, int]] = {}
        phase_tallies: List[tuple[object, _Tally]] = []

        for phase in phase_list:
            tally = _Tally()
            for task in phase_tasks(phase):
                tally.add(task, self._policy)
                status = enum_value(getattr(task, "status", None))
                priority = enum_value(getattr(task, "priority", None))
                row = combo_counts.setdefault(str(status), {})
                row[str(priority)] = row.get(str(priority), 0) + 1
            phase_tallies.append((phase, tally))
            overall.merge(tally)

        if overall.total == 0:
            return self._empty_result(NO_TASKS_MESSAGE)

        progress = weighted_percentage(overall.weighted_sum, overall.max_sum)
        simple = simple_percentage(overall.completed, overall.total)

        logger.debug(
            "Progress over %d phase(s), %d task(s): weighted=%.4f/%.4f completed=%d",
            len(phase_list),
            overall.total,
            overall.weighted_sum,
            overall.max_sum,
            overall.completed,
        )

        return ProgressResult(
            progress_percentage=round_pct(progress),
            simple_progress_percentage=round_pct(simple),
            total_tasks=overall.total,
            status_breakdown=self._status_breakdown(overall.status_counts, overall.total),
            priority_breakdown=self._priority_breakdown(overall.priority_counts, overall.total),
            combination_breakdown=self._combination_breakdown(combo_counts, overall.total),
            phase_breakdown=self._phase_breakdown(phase_tallies),
            insights=self._build_insights(
                overall.status_counts,
                overall.priority_counts,
                overall.total,
                progress,
                simple,
            ),
        )

    # --------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------

    def _empty_result(self, message: str) -> ProgressResult:
        return ProgressResult(
            progress_percentage=0.0,
            simple_progress_percentage=0.0,
            total_tasks=0,
            status_breakdown={},
            priority_breakdown={},
            combination_breakdown={},
            phase_breakdown={},
            insights=no_data_insights(message),
        )

    def _phase_breakdown(self, phase_tallies: List[tuple[object, _Tally]]) -> Dict[str, PhaseProgress]:
        breakdown: Dict[str, PhaseProgress] = {}
        for index, (phase, tally) in enumerate(phase_tallies):
            phase_id = getattr(phase, "id", None)
            # ids can repeat or be missing; the key stays unique so no phase is dropped
            key = str(phase_id) if phase_id is not None else f"#{index}"
            while key in breakdown:
                key = f"{key}#{index}"
            breakdown[key] = PhaseProgress(
                phase_id=str(phase_id) if phase_id is not None else None,
                phase_name=str(getattr(phase, "name", "") or ""),
                total_tasks=tally.total,
                completed_tasks=tally.completed,
                weighted_progress=round_pct(weighted_percentage(tally.weighted_sum, tally.max_sum)),
                simple_progress=round_pct(simple_percentage(tally.completed, tally.total)),
                status_breakdown=self._status_breakdown(tally.status_counts, tally.total),
                priority_breakdown=self._priority_breakdown(tally.priority_counts, tally.total),
            )
        return breakdown

    def _status_breakdown(self, counts: Dict[str, int], total: int) -> Dict[str, BreakdownEntry]:
        return {
            status.value: BreakdownEntry(
                count=counts.get(status.value, 0),
                percentage=round_pct(simple_percentage(counts.get(status.value, 0), total)),
                display_name=status.display_name,
            )
            for status in WorkStatus
        }

    def _priority_breakdown(self, counts: Dict[str, int], total: int) -> Dict[str, BreakdownEntry]:
        return {
            priority.value: BreakdownEntry(
                count=counts.get(priority.value, 0),
                percentage=round_pct(simple_percentage(counts.get(priority.value, 0), total)),
                display_name=priority.display_name,
                weight=self._policy.priority_weight(priority),
            )
            for priority in TaskPriority
        }

    def _combination_breakdown(
        self,
        combo_counts: Dict[str, Dict[str, int]],
        total: int,
    ) -> Dict[str, Dict[str, BreakdownEntry]]:
        matrix: Dict[str, Dict[str, BreakdownEntry]] = {}
        for status in WorkStatus:
            row = combo_counts.get(status.value, {})
            matrix[status.value] = {
                priority.value: BreakdownEntry(
                    count=row.get(priority.value, 0),
                    percentage=round_pct(simple_percentage(row.get(priority.value, 0), total)),
                    display_name=f"{status.display_name} / {priority.display_name}",
                )
                for priority in TaskPriority
            }
        return matrix


__all__ = [
    "ProjectProgressCalculator",
    "finalize_progress",
    "weighted_percentage",
    "simple_percentage",
    "round_pct",
    "ensure_collection",
    "phase_tasks",
]
