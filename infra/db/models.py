# infra/db/models.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base

# status / priority are stored as plain strings: rows may carry values the
# enums don't know, and scoring treats those as neutral instead of failing.


class WorkerORM(Base):
    __tablename__ = "workers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, default="")
    email: Mapped[str] = mapped_column(String, default="")


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    manager_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("workers.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    start_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    budget: Mapped[float] = mapped_column(Float, default=0.0)

Index("idx_projects_manager", ProjectORM.manager_id)


class PhaseORM(Base):
    __tablename__ = "phases"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    start_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

Index("idx_phases_project", PhaseORM.project_id)


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    phase_id: Mapped[str] = mapped_column(
        String, ForeignKey("phases.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    priority: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    start_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_completion_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

Index("idx_tasks_phase", TaskORM.phase_id)


class TaskWorkerORM(Base):
    __tablename__ = "task_workers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    task_id: Mapped[str] = mapped_column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    worker_id: Mapped[str] = mapped_column(String, ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

Index("idx_task_workers_task", TaskWorkerORM.task_id)
Index("idx_task_workers_worker", TaskWorkerORM.worker_id)


class ProjectWorkerORM(Base):
    __tablename__ = "project_workers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    worker_id: Mapped[str] = mapped_column(String, ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

Index("idx_project_workers_project", ProjectWorkerORM.project_id)
Index("idx_project_workers_worker", ProjectWorkerORM.worker_id)
