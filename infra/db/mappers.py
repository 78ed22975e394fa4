from __future__ import annotations

from enum import Enum
from typing import Optional, Type

from core.domain import (
    Phase,
    Project,
    ProjectWorker,
    Task,
    TaskPriority,
    TaskWorker,
    Worker,
    WorkerStatus,
    WorkStatus,
    enum_value,
)
from infra.db.models import (
    PhaseORM,
    ProjectORM,
    ProjectWorkerORM,
    TaskORM,
    TaskWorkerORM,
    WorkerORM,
)


def _to_enum(enum_cls: Type[Enum], raw: Optional[str]):
    """Known values become enum members; unknown strings pass through untouched."""
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


def worker_to_orm(worker: Worker) -> WorkerORM:
    return WorkerORM(
        id=worker.id,
        first_name=worker.first_name,
        last_name=worker.last_name,
        email=worker.email,
    )


def worker_from_orm(obj: WorkerORM) -> Worker:
    return Worker(
        id=obj.id,
        first_name=obj.first_name,
        last_name=obj.last_name or "",
        email=obj.email or "",
    )


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        description=project.description,
        manager_id=project.manager_id,
        status=enum_value(project.status),
        start_datetime=project.start_datetime,
        completion_datetime=project.completion_datetime,
        actual_completion_datetime=project.actual_completion_datetime,
        budget=project.budget or 0.0,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        name=obj.name,
        description=obj.description or "",
        manager_id=obj.manager_id,
        status=_to_enum(WorkStatus, obj.status),
        start_datetime=obj.start_datetime,
        completion_datetime=obj.completion_datetime,
        actual_completion_datetime=obj.actual_completion_datetime,
        budget=obj.budget or 0.0,
    )


def phase_to_orm(phase: Phase) -> PhaseORM:
    return PhaseORM(
        id=phase.id,
        project_id=phase.project_id,
        name=phase.name,
        description=phase.description,
        start_datetime=phase.start_datetime,
        completion_datetime=phase.completion_datetime,
        actual_completion_datetime=phase.actual_completion_datetime,
    )


def phase_from_orm(obj: PhaseORM) -> Phase:
    return Phase(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        description=obj.description or "",
        start_datetime=obj.start_datetime,
        completion_datetime=obj.completion_datetime,
        actual_completion_datetime=obj.actual_completion_datetime,
    )


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        phase_id=task.phase_id,
        name=task.name,
        description=task.description,
        priority=enum_value(task.priority),
        status=enum_value(task.status),
        start_datetime=task.start_datetime,
        completion_datetime=task.completion_datetime,
        actual_completion_datetime=task.actual_completion_datetime,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        phase_id=obj.phase_id,
        name=obj.name,
        description=obj.description or "",
        priority=_to_enum(TaskPriority, obj.priority),
        status=_to_enum(WorkStatus, obj.status),
        start_datetime=obj.start_datetime,
        completion_datetime=obj.completion_datetime,
        actual_completion_datetime=obj.actual_completion_datetime,
    )


def task_worker_to_orm(record: TaskWorker) -> TaskWorkerORM:
    return TaskWorkerORM(
        id=record.id,
        task_id=record.task_id,
        worker_id=record.worker_id,
        status=enum_value(record.status),
    )


def task_worker_from_orm(obj: TaskWorkerORM) -> TaskWorker:
    return TaskWorker(
        id=obj.id,
        task_id=obj.task_id,
        worker_id=obj.worker_id,
        status=_to_enum(WorkerStatus, obj.status),
    )


def project_worker_to_orm(record: ProjectWorker) -> ProjectWorkerORM:
    return ProjectWorkerORM(
        id=record.id,
        project_id=record.project_id,
        worker_id=record.worker_id,
        status=enum_value(record.status),
    )


def project_worker_from_orm(obj: ProjectWorkerORM) -> ProjectWorker:
    return ProjectWorker(
        id=obj.id,
        project_id=obj.project_id,
        worker_id=obj.worker_id,
        status=_to_enum(WorkerStatus, obj.status),
    )
