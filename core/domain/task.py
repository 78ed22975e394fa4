from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.domain.enums import TaskPriority, WorkerStatus, WorkStatus
from core.domain.identifiers import generate_id


@dataclass
class TaskWorker:
    id: str
    task_id: str
    worker_id: str
    status: WorkerStatus = WorkerStatus.ASSIGNED

    @staticmethod
    def create(
        task_id: str,
        worker_id: str,
        status: WorkerStatus = WorkerStatus.ASSIGNED,
    ) -> "TaskWorker":
        return TaskWorker(
            id=generate_id(),
            task_id=task_id,
            worker_id=worker_id,
            status=status,
        )


@dataclass
class Task:
    id: str
    phase_id: str
    name: str
    description: str = ""
    priority: TaskPriority | str | None = TaskPriority.MEDIUM
    status: WorkStatus | str | None = WorkStatus.PENDING
    start_datetime: Optional[datetime] = None
    # deadline
    completion_datetime: Optional[datetime] = None
    actual_completion_datetime: Optional[datetime] = None
    workers: List[TaskWorker] = field(default_factory=list)

    @staticmethod
    def create(phase_id: str, name: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id(),
            phase_id=phase_id,
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Task", "TaskWorker"]
