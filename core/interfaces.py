# core/interfaces.py
from __future__ import annotations

from typing import List, Optional, Protocol

from core.domain import Phase, Project, ProjectWorker, Task, TaskWorker, Worker
from core.services.scoring.models import ProjectProgressTotals, WorkerScoreTotals
from core.services.scoring.policy import ScoringPolicy


class ProjectRepository(Protocol):
    def add(self, project: Project) -> None: ...
    def get(self, project_id: str) -> Optional[Project]: ...
    def list_all(self) -> List[Project]: ...
    def list_by_manager(self, manager_id: str) -> List[Project]: ...
    def list_for_worker(self, worker_id: str) -> List[Project]:
        """Projects the worker has any project-level or task-level record in."""
        ...


class PhaseRepository(Protocol):
    def add(self, phase: Phase) -> None: ...
    def list_by_project(self, project_id: str) -> List[Phase]: ...


class TaskRepository(Protocol):
    def add(self, task: Task) -> None: ...
    def get(self, task_id: str) -> Optional[Task]: ...
    def list_by_phase(self, phase_id: str) -> List[Task]: ...


class TaskWorkerRepository(Protocol):
    def add(self, record: TaskWorker) -> None: ...
    def list_by_task(self, task_id: str) -> List[TaskWorker]: ...
    def list_by_worker(self, worker_id: str) -> List[TaskWorker]: ...


class ProjectWorkerRepository(Protocol):
    def add(self, record: ProjectWorker) -> None: ...
    def list_by_project(self, project_id: str) -> List[ProjectWorker]: ...
    def list_by_worker(self, worker_id: str) -> List[ProjectWorker]: ...


class WorkerRepository(Protocol):
    def add(self, worker: Worker) -> None: ...
    def get(self, worker_id: str) -> Optional[Worker]: ...


class ScoringQuery(Protocol):
    """Computes scoring sums inside the database instead of loading the hierarchy."""

    def worker_totals(self, worker_id: str, policy: ScoringPolicy) -> WorkerScoreTotals: ...
    def project_totals(self, project_id: str, policy: ScoringPolicy) -> ProjectProgressTotals: ...


__all__ = [
    "ProjectRepository",
    "PhaseRepository",
    "TaskRepository",
    "TaskWorkerRepository",
    "ProjectWorkerRepository",
    "WorkerRepository",
    "ScoringQuery",
]
