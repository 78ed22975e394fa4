from __future__ import annotations

from typing import Dict, List

from core.domain.enums import TaskPriority, WorkStatus
from core.services.scoring.models import Insights

NO_PHASES_MESSAGE = "No phases found in project."
NO_TASKS_MESSAGE = "No tasks found in any phase."


def no_data_insights(message: str) -> Insights:
    return Insights(messages=(message,), recommendations=())


class ProgressInsightsMixin:
    """Advisory text for a progress result. Nothing downstream reads it back."""

    def _build_insights(
        self,
        status_counts: Dict[str, int],
        priority_counts: Dict[str, int],
        total_tasks: int,
        progress: float,
        simple_progress: float,
    ) -> Insights:
        if total_tasks <= 0:
            return no_data_insights(NO_TASKS_MESSAGE)

        return Insights(
            messages=tuple(
                self._insight_messages(status_counts, priority_counts, total_tasks, progress, simple_progress)
            ),
            recommendations=tuple(
                self._recommendations(status_counts, priority_counts, total_tasks)
            ),
        )

    def _insight_messages(
        self,
        status_counts: Dict[str, int],
        priority_counts: Dict[str, int],
        total_tasks: int,
        progress: float,
        simple_progress: float,
    ) -> List[str]:
        messages: List[str] = []

        if progress >= 90:
            messages.append("Project is near completion - excellent progress!")
        elif progress >= 70:
            messages.append("Project is on track with good progress.")
        elif progress >= 50:
            messages.append("Project is progressing steadily.")
        elif progress >= 25:
            messages.append("Project needs attention to improve progress.")
        else:
            messages.append("Project requires immediate attention - low progress.")

        delayed = status_counts.get(WorkStatus.DELAYED.value, 0)
        if delayed > 0:
            pct = delayed / total_tasks * 100
            messages.append(f"Warning: {delayed} task(s) ({pct:.1f}%) are delayed.")

        cancelled = status_counts.get(WorkStatus.CANCELLED.value, 0)
        if cancelled > 0:
            messages.append(f"Note: {cancelled} task(s) have been cancelled.")

        high = priority_counts.get(TaskPriority.HIGH.value, 0)
        completed = status_counts.get(WorkStatus.COMPLETED.value, 0)
        if high > completed:
            messages.append(f"Focus needed: {high} high-priority task(s) require attention.")

        pending = status_counts.get(WorkStatus.PENDING.value, 0)
        if pending > total_tasks * 0.3:
            messages.append("Many tasks are still pending - consider resource allocation.")

        ongoing = status_counts.get(WorkStatus.ON_GOING.value, 0)
        if ongoing == 0 and simple_progress < 50 and completed < total_tasks:
            messages.append("No work is currently in progress - the project may be stalling.")

        return messages

    def _recommendations(
        self,
        status_counts: Dict[str, int],
        priority_counts: Dict[str, int],
        total_tasks: int,
    ) -> List[str]:
        recommendations: List[str] = []

        ongoing = status_counts.get(WorkStatus.ON_GOING.value, 0)
        pending = status_counts.get(WorkStatus.PENDING.value, 0)
        delayed = status_counts.get(WorkStatus.DELAYED.value, 0)
        high = priority_counts.get(TaskPriority.HIGH.value, 0)

        if ongoing > total_tasks * 0.6:
            recommendations.append("Consider if team capacity is sufficient for current workload.")
        if high > 0:
            recommendations.append("Prioritize high-priority tasks for maximum impact.")
        if delayed > 0:
            recommendations.append("Review delayed tasks and reassign resources if necessary.")
        if pending > total_tasks * 0.4:
            recommendations.append("Activate pending tasks to maintain project momentum.")

        return recommendations


__all__ = [
    "ProgressInsightsMixin",
    "no_data_insights",
    "NO_PHASES_MESSAGE",
    "NO_TASKS_MESSAGE",
]
