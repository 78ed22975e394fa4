from __future__ import annotations

import logging
from typing import Optional

from core.domain import Project, Worker
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import (
    PhaseRepository,
    ProjectRepository,
    ProjectWorkerRepository,
    ScoringQuery,
    TaskRepository,
    TaskWorkerRepository,
    WorkerRepository,
)
from core.services.scoring import (
    DEFAULT_MANAGER_POLICY,
    DEFAULT_POLICY,
    ManagerPerformanceResult,
    ManagerScoringPolicy,
    PerformanceResult,
    ProgressResult,
    ProgressSummary,
    ProjectManagerPerformanceCalculator,
    ProjectProgressCalculator,
    ScoringPolicy,
    WorkerPerformanceCalculator,
    finalize_performance,
    finalize_progress,
)

from .hierarchy import ReportingHierarchyMixin

logger = logging.getLogger(__name__)


class ScoringReportService(ReportingHierarchyMixin):
    def __init__(
        self,
        project_repo: ProjectRepository,
        phase_repo: PhaseRepository,
        task_repo: TaskRepository,
        task_worker_repo: TaskWorkerRepository,
        project_worker_repo: ProjectWorkerRepository,
        worker_repo: WorkerRepository,
        scoring_query: Optional[ScoringQuery] = None,
        policy: ScoringPolicy = DEFAULT_POLICY,
        manager_policy: ManagerScoringPolicy = DEFAULT_MANAGER_POLICY,
    ):
        self._project_repo: ProjectRepository = project_repo
        self._phase_repo: PhaseRepository = phase_repo
        self._task_repo: TaskRepository = task_repo
        self._task_worker_repo: TaskWorkerRepository = task_worker_repo
        self._project_worker_repo: ProjectWorkerRepository = project_worker_repo
        self._worker_repo: WorkerRepository = worker_repo
        self._scoring_query: Optional[ScoringQuery] = scoring_query
        self._policy = policy

        self._progress = ProjectProgressCalculator(policy)
        self._performance = WorkerPerformanceCalculator(policy)
        self._manager = ProjectManagerPerformanceCalculator(manager_policy, self._progress)

    # --------------------------------------------------------------
    # Lookups
    # --------------------------------------------------------------

    def get_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def get_worker(self, worker_id: str) -> Worker:
        worker = self._worker_repo.get(worker_id)
        if not worker:
            raise NotFoundError("Worker not found.", code="WORKER_NOT_FOUND")
        return worker

    # --------------------------------------------------------------
    # Reports
    # --------------------------------------------------------------

    def get_project_progress(self, project_id: str) -> ProgressResult:
        project = self._load_tree(self.get_project(project_id))
        result = self._progress.calculate(project.phases)
        logger.info(
            "Project progress for %s: %.2f%% over %d task(s)",
            project_id,
            result.progress_percentage,
            result.total_tasks,
        )
        return result

    def get_project_progress_summary(self, project_id: str) -> ProgressSummary:
        """Headline progress computed by the database, without breakdowns."""
        self.get_project(project_id)
        totals = self._require_query().project_totals(project_id, self._policy)
        summary = finalize_progress(totals)
        logger.info("Project progress summary for %s: %.2f%%", project_id, summary.progress_percentage)
        return summary

    def get_worker_performance(self, worker_id: str) -> PerformanceResult:
        self.get_worker(worker_id)
        projects = self._load_trees(self._project_repo.list_for_worker(worker_id))
        result = self._performance.calculate(projects, worker_id=worker_id)
        logger.info(
            "Worker performance for %s: %.2f (%s), %d task(s) in %d project(s)",
            worker_id,
            result.overall_score,
            result.performance_grade,
            result.total_tasks,
            result.total_projects,
        )
        return result

    def get_worker_performance_summary(self, worker_id: str) -> PerformanceResult:
        """
        Same score as get_worker_performance, with the sums pushed down into
        SQL. The penalty breakdown is left empty on this path.
        """
        self.get_worker(worker_id)
        totals = self._require_query().worker_totals(worker_id, self._policy)
        result = finalize_performance(totals, self._policy)
        logger.info(
            "Worker performance summary for %s: %.2f (%s)",
            worker_id,
            result.overall_score,
            result.performance_grade,
        )
        return result

    def get_manager_performance(self, manager_id: str) -> ManagerPerformanceResult:
        self.get_worker(manager_id)
        projects = self._load_trees(self._project_repo.list_by_manager(manager_id))
        result = self._manager.calculate(projects)
        logger.info(
            "Manager performance for %s: %.2f (%s) over %d project(s)",
            manager_id,
            result.overall_score,
            result.performance_grade,
            result.total_projects,
        )
        return result

    def _require_query(self) -> ScoringQuery:
        if self._scoring_query is None:
            raise ValidationError(
                "Database scoring query is not configured.",
                code="SCORING_QUERY_UNAVAILABLE",
            )
        return self._scoring_query


__all__ = ["ScoringReportService"]
