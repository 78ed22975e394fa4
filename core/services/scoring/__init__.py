from .grading import (
    MANAGER_GRADE_BANDS,
    NOT_AVAILABLE,
    WORKER_GRADE_BANDS,
    clamp_score,
    grade_label,
    letter_grade,
)
from .manager import DEFAULT_MANAGER_POLICY, ManagerScoringPolicy, ProjectManagerPerformanceCalculator
from .models import (
    BreakdownEntry,
    Insights,
    ManagerPerformanceResult,
    MetricScore,
    PenaltyEntry,
    PerformanceResult,
    PhaseProgress,
    ProgressResult,
    ProgressSummary,
    ProjectMetrics,
    ProjectProgressTotals,
    StatusPenalties,
    TaskMetrics,
    TaskScore,
    WorkerScoreTotals,
)
from .performance import WorkerPerformanceCalculator, build_project_metrics, finalize_performance
from .policy import DEFAULT_POLICY, ScoringPolicy
from .progress import ProjectProgressCalculator, finalize_progress
from .task_score import score_task

__all__ = [
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "ManagerScoringPolicy",
    "DEFAULT_MANAGER_POLICY",
    "score_task",
    "ProjectProgressCalculator",
    "WorkerPerformanceCalculator",
    "ProjectManagerPerformanceCalculator",
    "finalize_performance",
    "build_project_metrics",
    "finalize_progress",
    "grade_label",
    "letter_grade",
    "clamp_score",
    "WORKER_GRADE_BANDS",
    "MANAGER_GRADE_BANDS",
    "NOT_AVAILABLE",
    "TaskScore",
    "BreakdownEntry",
    "Insights",
    "PhaseProgress",
    "ProgressResult",
    "ProgressSummary",
    "ProjectMetrics",
    "PenaltyEntry",
    "StatusPenalties",
    "TaskMetrics",
    "PerformanceResult",
    "MetricScore",
    "ManagerPerformanceResult",
    "WorkerScoreTotals",
    "ProjectProgressTotals",
]
