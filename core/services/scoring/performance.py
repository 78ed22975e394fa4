from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Dict, List, Optional, Sequence, Tuple

from core.domain.enums import WorkerStatus, WorkStatus, enum_value
from core.exceptions import ValidationError
from core.services.scoring.grading import NOT_AVAILABLE, grade_label
from core.services.scoring.models import (
    PenaltyEntry,
    PerformanceResult,
    ProjectMetrics,
    StatusPenalties,
    TaskMetrics,
    WorkerScoreTotals,
)
from core.services.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from core.services.scoring.progress import (
    ensure_collection,
    phase_tasks,
    round_pct,
    simple_percentage,
    weighted_percentage,
)
from core.services.scoring.task_score import score_task

logger = logging.getLogger(__name__)

# (project status, worker tasks in the project, of which completed)
ProjectTally = Tuple[object, int, int]


def is_terminated(record: object) -> bool:
    return enum_value(getattr(record, "status", None)) == WorkerStatus.TERMINATED.value


def build_project_metrics(tallies: Iterable[ProjectTally]) -> ProjectMetrics:
    """
    Project context from one tally per involved project. Projects where the
    worker holds no task count toward totals and status, not completion rates.
    """
    by_status: Dict[str, int] = {}
    rates: List[float] = []
    projects = 0
    tasks = 0

    for status, total, completed in tallies:
        projects += 1
        tasks += total
        key = enum_value(status) or ""
        by_status[key] = by_status.get(key, 0) + 1
        if total > 0:
            rates.append(simple_percentage(completed, total))

    return ProjectMetrics(
        total_projects=projects,
        projects_by_status=by_status,
        project_completion_rates=tuple(round_pct(rate) for rate in rates),
        average_project_completion=round_pct(sum(rates) / len(rates)) if rates else 0.0,
        average_tasks_per_project=round(tasks / projects, 1) if projects else 0.0,
    )


def finalize_performance(
    totals: WorkerScoreTotals,
    policy: ScoringPolicy = DEFAULT_POLICY,
    penalty_breakdown: Sequence[PenaltyEntry] = (),
) -> PerformanceResult:
    """
    Turn raw sums into the published score. Shared by the in-process
    calculator and the SQL query path so both round and clamp identically.
    """
    base = weighted_percentage(totals.weighted_sum, totals.max_sum)
    total_penalty = (
        totals.task_terminations * policy.task_termination_penalty
        + totals.project_terminations * policy.project_termination_penalty
    )
    overall = max(0.0, base - total_penalty)

    grade = grade_label(overall) if totals.total_tasks > 0 else NOT_AVAILABLE
    metrics = totals.project_metrics or ProjectMetrics(
        total_projects=totals.total_projects,
        average_tasks_per_project=(
            round(totals.total_tasks / totals.total_projects, 1) if totals.total_projects else 0.0
        ),
    )

    return PerformanceResult(
        overall_score=round_pct(overall),
        base_score=round_pct(base),
        total_tasks=totals.total_tasks,
        total_projects=totals.total_projects,
        performance_grade=grade,
        status_penalties=StatusPenalties(
            task_terminations=totals.task_terminations,
            project_terminations=totals.project_terminations,
            total_penalty=round_pct(total_penalty),
            penalty_breakdown=tuple(penalty_breakdown),
        ),
        task_metrics=TaskMetrics(
            raw_score=round_pct(totals.weighted_sum),
            max_possible_score=round_pct(totals.max_sum),
            total_tasks=totals.total_tasks,
        ),
        project_metrics=metrics,
        insights=tuple(_worker_insights(totals, metrics, total_penalty)),
        recommendations=tuple(_worker_recommendations(totals, metrics, overall, total_penalty)),
    )


class WorkerPerformanceCalculator:
    """
    Performance score (0-100) for one worker across a Project -> Phase -> Task
    hierarchy, minus fixed penalties for every terminated assignment.

    When ``worker_id`` is None the projects are taken as already scoped to a
    single worker: every assignment record present belongs to that worker.
    """

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self._policy = policy

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    def calculate(self, projects: Iterable[object], worker_id: Optional[str] = None) -> PerformanceResult:
        project_list = ensure_collection(projects, "projects")
        policy = self._policy

        weighted_sum = 0.0
        max_sum = 0.0
        total_tasks = 0
        completed_tasks = 0
        task_terminations = 0
        project_terminations = 0
        penalties: List[PenaltyEntry] = []
        tallies: List[ProjectTally] = []

        for project in project_list:
            if project is None or isinstance(project, (str, bytes)):
                raise ValidationError(
                    f"Expected a project record, got {type(project).__name__}.",
                    code="SCORING_INVALID_INPUT",
                )
            project_id = getattr(project, "id", None)
            project_name = str(getattr(project, "name", "") or "")
            involved = False
            project_tasks = 0
            project_completed = 0

            for record in self._records_for(getattr(project, "workers", None), worker_id):
                involved = True
                if is_terminated(record):
                    project_terminations += 1
                    penalties.append(
                        PenaltyEntry(
                            type="project",
                            penalty=policy.project_termination_penalty,
                            reason=f"Terminated from project '{project_name}'.",
                            project_id=project_id,
                            project_name=project_name,
                        )
                    )

            phases = getattr(project, "phases", None)
            for phase in ensure_collection(phases, "phases") if phases is not None else []:
                phase_name = str(getattr(phase, "name", "") or "")
                for task in phase_tasks(phase):
                    records = self._records_for(getattr(task, "workers", None), worker_id)
                    if not records:
                        continue
                    involved = True

                    ts = score_task(task, policy)
                    weighted_sum += ts.weighted_score
                    max_sum += ts.max_possible_score
                    project_tasks += 1
                    if enum_value(getattr(task, "status", None)) == WorkStatus.COMPLETED.value:
                        project_completed += 1

                    task_name = str(getattr(task, "name", "") or "")
                    for record in records:
                        if not is_terminated(record):
                            continue
                        task_terminations += 1
                        penalties.append(
                            PenaltyEntry(
                                type="task",
                                penalty=policy.task_termination_penalty,
                                reason=f"Terminated from task '{task_name}' in phase '{phase_name}'.",
                                project_id=project_id,
                                project_name=project_name,
                                phase_name=phase_name,
                                task_id=getattr(task, "id", None),
                                task_name=task_name,
                            )
                        )

            if involved:
                tallies.append((getattr(project, "status", None), project_tasks, project_completed))
                total_tasks += project_tasks
                completed_tasks += project_completed

        totals = WorkerScoreTotals(
            weighted_sum=weighted_sum,
            max_sum=max_sum,
            total_tasks=total_tasks,
            completed_tasks=completed_tasks,
            total_projects=len(tallies),
            task_terminations=task_terminations,
            project_terminations=project_terminations,
            project_metrics=build_project_metrics(tallies),
        )
        logger.debug("Worker %s totals: %s", worker_id or "<scoped>", totals)
        return finalize_performance(totals, policy, penalties)

    def _records_for(self, records: object, worker_id: Optional[str]) -> List[object]:
        if records is None:
            return []
        items = ensure_collection(records, "worker assignments")
        if worker_id is None:
            return items
        return [r for r in items if getattr(r, "worker_id", None) == worker_id]


def _worker_insights(totals: WorkerScoreTotals, metrics: ProjectMetrics, total_penalty: float) -> List[str]:
    if totals.total_tasks == 0:
        insights = ["No tasks found for evaluation period."]
        if total_penalty > 0:
            insights.append(f"Termination penalties of {total_penalty:.1f} points applied.")
        return insights

    insights: List[str] = []
    projects = metrics.total_projects
    if projects >= 10:
        insights.append(f"Experienced worker with involvement in {projects} projects.")
    elif projects >= 5:
        insights.append(f"Worker has contributed to {projects} projects.")
    elif projects > 0:
        insights.append(f"Worker is building experience with {projects} project(s).")

    completed_projects = metrics.projects_by_status.get(WorkStatus.COMPLETED.value, 0)
    if completed_projects > 0:
        share = completed_projects / projects * 100.0
        insights.append(f"Contributed to {completed_projects} completed projects ({share:.1f}% of total).")
    ongoing_projects = metrics.projects_by_status.get(WorkStatus.ON_GOING.value, 0)
    if ongoing_projects > 0:
        insights.append(f"Currently active in {ongoing_projects} ongoing project(s).")

    completion = metrics.average_project_completion
    if completion >= 80:
        insights.append(f"Strong task completion rate ({completion:.1f}%) across all projects.")
    elif completion >= 60:
        insights.append(f"Moderate task completion rate ({completion:.1f}%) - room for improvement.")
    elif completion > 0:
        insights.append(f"Low task completion rate ({completion:.1f}%) - may need additional support.")

    per_project = metrics.average_tasks_per_project
    if per_project >= 20:
        insights.append(f"Handles significant workload with an average of {per_project:.1f} tasks per project.")
    elif per_project >= 10:
        insights.append(f"Maintains a steady workload of {per_project:.1f} tasks per project on average.")

    if totals.task_terminations:
        insights.append(f"Terminated from {totals.task_terminations} task assignment(s).")
    if totals.project_terminations:
        insights.append(f"Terminated from {totals.project_terminations} project(s).")
    if total_penalty > 0:
        insights.append(f"Termination penalties reduced the score by {total_penalty:.1f} points.")

    return insights


def _worker_recommendations(
    totals: WorkerScoreTotals,
    metrics: ProjectMetrics,
    overall: float,
    total_penalty: float,
) -> List[str]:
    if totals.total_tasks == 0:
        return []

    recommendations: List[str] = []
    projects = metrics.total_projects
    per_project = metrics.average_tasks_per_project

    if projects < 3 and overall >= 80:
        recommendations.append("Consider diversifying project experience to build broader skill set.")
    if metrics.average_project_completion < 60:
        recommendations.append("Focus on completing more tasks within assigned projects.")
        recommendations.append("Review project task priorities and seek clarification when needed.")
    if per_project > 30:
        recommendations.append("High task volume per project - ensure workload is manageable.")
        recommendations.append("Consider discussing task distribution with project manager.")
    elif per_project < 5 and projects > 5:
        recommendations.append("Low task count per project - consider deeper involvement in fewer projects.")

    ongoing_projects = metrics.projects_by_status.get(WorkStatus.ON_GOING.value, 0)
    completed_projects = metrics.projects_by_status.get(WorkStatus.COMPLETED.value, 0)
    if ongoing_projects > 5 and completed_projects < 2:
        recommendations.append("Many ongoing projects with few completions - prioritize finishing current work.")

    if total_penalty > 0:
        recommendations.append("Review the circumstances of terminated assignments.")
    if overall >= 90 and projects >= 5:
        recommendations.append("Excellent performance across multiple projects - potential for leadership roles.")
        recommendations.append("Consider mentoring other team members on project best practices.")

    return list(dict.fromkeys(recommendations))


__all__ = ["WorkerPerformanceCalculator", "build_project_metrics", "finalize_performance", "is_terminated"]
