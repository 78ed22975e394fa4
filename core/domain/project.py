from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.domain.enums import WorkerStatus, WorkStatus
from core.domain.identifiers import generate_id
from core.domain.phase import Phase


@dataclass
class ProjectWorker:
    id: str
    project_id: str
    worker_id: str
    status: WorkerStatus = WorkerStatus.ASSIGNED

    @staticmethod
    def create(
        project_id: str,
        worker_id: str,
        status: WorkerStatus = WorkerStatus.ASSIGNED,
    ) -> "ProjectWorker":
        return ProjectWorker(
            id=generate_id(),
            project_id=project_id,
            worker_id=worker_id,
            status=status,
        )


@dataclass
class Project:
    id: str
    name: str
    description: str = ""
    manager_id: Optional[str] = None
    status: WorkStatus | str | None = WorkStatus.PENDING
    start_datetime: Optional[datetime] = None
    completion_datetime: Optional[datetime] = None
    actual_completion_datetime: Optional[datetime] = None
    budget: float = 0.0
    phases: List[Phase] = field(default_factory=list)
    workers: List[ProjectWorker] = field(default_factory=list)

    @staticmethod
    def create(name: str, description: str = "", **extra) -> "Project":
        return Project(
            id=generate_id(),
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Project", "ProjectWorker"]
