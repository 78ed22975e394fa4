# infra/db/repositories.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from core.domain import Phase, Project, ProjectWorker, Task, TaskWorker, Worker
from core.interfaces import (
    PhaseRepository,
    ProjectRepository,
    ProjectWorkerRepository,
    TaskRepository,
    TaskWorkerRepository,
    WorkerRepository,
)
from infra.db.mappers import (
    phase_from_orm,
    phase_to_orm,
    project_from_orm,
    project_to_orm,
    project_worker_from_orm,
    project_worker_to_orm,
    task_from_orm,
    task_to_orm,
    task_worker_from_orm,
    task_worker_to_orm,
    worker_from_orm,
    worker_to_orm,
)
from infra.db.models import (
    PhaseORM,
    ProjectORM,
    ProjectWorkerORM,
    TaskORM,
    TaskWorkerORM,
    WorkerORM,
)


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_all(self) -> List[Project]:
        stmt = select(ProjectORM).order_by(ProjectORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_by_manager(self, manager_id: str) -> List[Project]:
        stmt = select(ProjectORM).where(ProjectORM.manager_id == manager_id).order_by(ProjectORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_for_worker(self, worker_id: str) -> List[Project]:
        via_project = select(ProjectWorkerORM.project_id).where(ProjectWorkerORM.worker_id == worker_id)
        via_task = (
            select(PhaseORM.project_id)
            .join(TaskORM, TaskORM.phase_id == PhaseORM.id)
            .join(TaskWorkerORM, TaskWorkerORM.task_id == TaskORM.id)
            .where(TaskWorkerORM.worker_id == worker_id)
        )
        stmt = (
            select(ProjectORM)
            .where(or_(ProjectORM.id.in_(via_project), ProjectORM.id.in_(via_task)))
            .order_by(ProjectORM.name, ProjectORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]


class SqlAlchemyPhaseRepository(PhaseRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, phase: Phase) -> None:
        self.session.add(phase_to_orm(phase))

    def list_by_project(self, project_id: str) -> List[Phase]:
        stmt = (
            select(PhaseORM)
            .where(PhaseORM.project_id == project_id)
            .order_by(PhaseORM.start_datetime, PhaseORM.name)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [phase_from_orm(row) for row in rows]


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_phase(self, phase_id: str) -> List[Task]:
        stmt = select(TaskORM).where(TaskORM.phase_id == phase_id).order_by(TaskORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]


class SqlAlchemyTaskWorkerRepository(TaskWorkerRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, record: TaskWorker) -> None:
        self.session.add(task_worker_to_orm(record))

    def list_by_task(self, task_id: str) -> List[TaskWorker]:
        stmt = (
            select(TaskWorkerORM).where(TaskWorkerORM.task_id == task_id)
            .order_by(TaskWorkerORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_worker_from_orm(row) for row in rows]

    def list_by_worker(self, worker_id: str) -> List[TaskWorker]:
        stmt = (
            select(TaskWorkerORM).where(TaskWorkerORM.worker_id == worker_id)
            .order_by(TaskWorkerORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_worker_from_orm(row) for row in rows]


class SqlAlchemyProjectWorkerRepository(ProjectWorkerRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, record: ProjectWorker) -> None:
        self.session.add(project_worker_to_orm(record))

    def list_by_project(self, project_id: str) -> List[ProjectWorker]:
        stmt = (
            select(ProjectWorkerORM).where(ProjectWorkerORM.project_id == project_id)
            .order_by(ProjectWorkerORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [project_worker_from_orm(row) for row in rows]

    def list_by_worker(self, worker_id: str) -> List[ProjectWorker]:
        stmt = (
            select(ProjectWorkerORM).where(ProjectWorkerORM.worker_id == worker_id)
            .order_by(ProjectWorkerORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [project_worker_from_orm(row) for row in rows]


class SqlAlchemyWorkerRepository(WorkerRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, worker: Worker) -> None:
        self.session.add(worker_to_orm(worker))

    def get(self, worker_id: str) -> Optional[Worker]:
        obj = self.session.get(WorkerORM, worker_id)
        return worker_from_orm(obj) if obj else None


__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyPhaseRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyTaskWorkerRepository",
    "SqlAlchemyProjectWorkerRepository",
    "SqlAlchemyWorkerRepository",
]
