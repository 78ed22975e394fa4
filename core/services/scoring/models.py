from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TaskScore:
    task_id: Optional[str]
    priority_weight: float
    status_multiplier: float
    time_multiplier: float
    time_performance: Optional[str]
    weighted_score: float
    max_possible_score: float


@dataclass(frozen=True)
class BreakdownEntry:
    count: int
    percentage: float
    display_name: str = ""
    weight: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "count": self.count,
            "percentage": self.percentage,
            "displayName": self.display_name,
        }
        if self.weight is not None:
            data["weight"] = self.weight
        return data


@dataclass(frozen=True)
class Insights:
    messages: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "messages": list(self.messages),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PhaseProgress:
    phase_id: Optional[str]
    phase_name: str
    total_tasks: int
    completed_tasks: int
    weighted_progress: float
    simple_progress: float
    status_breakdown: Dict[str, BreakdownEntry]
    priority_breakdown: Dict[str, BreakdownEntry]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "phaseId": self.phase_id,
            "phaseName": self.phase_name,
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "weightedProgress": self.weighted_progress,
            "simpleProgress": self.simple_progress,
            "statusBreakdown": {k: v.as_dict() for k, v in self.status_breakdown.items()},
            "priorityBreakdown": {k: v.as_dict() for k, v in self.priority_breakdown.items()},
        }


@dataclass(frozen=True)
class ProgressResult:
    progress_percentage: float
    simple_progress_percentage: float
    total_tasks: int
    status_breakdown: Dict[str, BreakdownEntry]
    priority_breakdown: Dict[str, BreakdownEntry]
    combination_breakdown: Dict[str, Dict[str, BreakdownEntry]]
    phase_breakdown: Dict[str, PhaseProgress]
    insights: Insights

    @property
    def weighted_progress(self) -> float:
        return self.progress_percentage

    def as_dict(self) -> Dict[str, Any]:
        return {
            "progressPercentage": self.progress_percentage,
            "simpleProgressPercentage": self.simple_progress_percentage,
            "weightedProgress": self.weighted_progress,
            "totalTasks": self.total_tasks,
            "statusBreakdown": {k: v.as_dict() for k, v in self.status_breakdown.items()},
            "priorityBreakdown": {k: v.as_dict() for k, v in self.priority_breakdown.items()},
            "combinationBreakdown": {
                status: {prio: entry.as_dict() for prio, entry in row.items()}
                for status, row in self.combination_breakdown.items()
            },
            "phaseBreakdown": {k: v.as_dict() for k, v in self.phase_breakdown.items()},
            "insights": self.insights.as_dict(),
        }


@dataclass(frozen=True)
class PenaltyEntry:
    type: str
    penalty: float
    reason: str
    project_id: Optional[str]
    project_name: str
    phase_name: Optional[str] = None
    task_id: Optional[str] = None
    task_name: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "penalty": self.penalty,
            "reason": self.reason,
            "projectId": self.project_id,
            "projectName": self.project_name,
        }
        if self.type == "task":
            data["phaseName"] = self.phase_name
            data["taskId"] = self.task_id
            data["taskName"] = self.task_name
        return data


@dataclass(frozen=True)
class StatusPenalties:
    task_terminations: int = 0
    project_terminations: int = 0
    total_penalty: float = 0.0
    penalty_breakdown: Tuple[PenaltyEntry, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "taskTerminations": self.task_terminations,
            "projectTerminations": self.project_terminations,
            "totalPenalty": self.total_penalty,
            "penaltyBreakdown": [entry.as_dict() for entry in self.penalty_breakdown],
        }


@dataclass(frozen=True)
class TaskMetrics:
    raw_score: float = 0.0
    max_possible_score: float = 0.0
    total_tasks: int = 0


@dataclass(frozen=True)
class ProjectMetrics:
    """Project-level context of a worker score: one entry per involved project."""

    total_projects: int = 0
    projects_by_status: Dict[str, int] = field(default_factory=dict)
    project_completion_rates: Tuple[float, ...] = ()
    average_project_completion: float = 0.0
    average_tasks_per_project: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalProjects": self.total_projects,
            "projectsByStatus": dict(self.projects_by_status),
            "projectCompletionRates": list(self.project_completion_rates),
            "averageProjectCompletion": self.average_project_completion,
            "averageTasksPerProject": self.average_tasks_per_project,
        }


@dataclass(frozen=True)
class PerformanceResult:
    overall_score: float
    base_score: float
    total_tasks: int
    total_projects: int
    performance_grade: str
    status_penalties: StatusPenalties
    task_metrics: TaskMetrics = field(default_factory=TaskMetrics)
    project_metrics: ProjectMetrics = field(default_factory=ProjectMetrics)
    insights: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "baseScore": self.base_score,
            "totalTasks": self.total_tasks,
            "totalProjects": self.total_projects,
            "performanceGrade": self.performance_grade,
            "statusPenalties": self.status_penalties.as_dict(),
            "taskMetrics": {
                "rawScore": self.task_metrics.raw_score,
                "maxPossibleScore": self.task_metrics.max_possible_score,
                "totalTasks": self.task_metrics.total_tasks,
            },
            "projectMetrics": self.project_metrics.as_dict(),
            "insights": list(self.insights),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class MetricScore:
    score: float
    description: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ManagerPerformanceResult:
    overall_score: float
    performance_grade: str
    total_projects: int
    completion: MetricScore
    time_management: MetricScore
    project_progress: MetricScore
    statistics: Dict[str, Any]
    insights: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        def metric(m: MetricScore) -> Dict[str, Any]:
            return {"score": m.score, "description": m.description, **m.details}

        return {
            "overallScore": self.overall_score,
            "performanceGrade": self.performance_grade,
            "totalProjects": self.total_projects,
            "metrics": {
                "projectCompletion": metric(self.completion),
                "timeManagement": metric(self.time_management),
                "projectProgress": metric(self.project_progress),
            },
            "statistics": dict(self.statistics),
            "insights": list(self.insights),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class WorkerScoreTotals:
    """Raw sums behind a worker score, produced in-process or by a SQL query."""

    weighted_sum: float = 0.0
    max_sum: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0
    total_projects: int = 0
    task_terminations: int = 0
    project_terminations: int = 0
    project_metrics: Optional[ProjectMetrics] = None


@dataclass(frozen=True)
class ProjectProgressTotals:
    weighted_sum: float = 0.0
    max_sum: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0


@dataclass(frozen=True)
class ProgressSummary:
    """Headline progress figures without breakdowns, as the SQL path yields them."""

    progress_percentage: float
    simple_progress_percentage: float
    total_tasks: int
    completed_tasks: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "progressPercentage": self.progress_percentage,
            "simpleProgressPercentage": self.simple_progress_percentage,
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
        }
