from __future__ import annotations

from typing import List

from core.domain import Project
from core.interfaces import (
    PhaseRepository,
    ProjectWorkerRepository,
    TaskRepository,
    TaskWorkerRepository,
)


class ReportingHierarchyMixin:
    """Assembles Project -> Phase -> Task trees with their assignment records."""

    _phase_repo: PhaseRepository
    _task_repo: TaskRepository
    _task_worker_repo: TaskWorkerRepository
    _project_worker_repo: ProjectWorkerRepository

    def _load_tree(self, project: Project) -> Project:
        project.workers = self._project_worker_repo.list_by_project(project.id)
        project.phases = self._phase_repo.list_by_project(project.id)
        for phase in project.phases:
            phase.tasks = self._task_repo.list_by_phase(phase.id)
            for task in phase.tasks:
                task.workers = self._task_worker_repo.list_by_task(task.id)
        return project

    def _load_trees(self, projects: List[Project]) -> List[Project]:
        return [self._load_tree(project) for project in projects]
