from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import Integer, and_, case, cast, func, literal, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from core.domain.enums import WorkerStatus, WorkStatus
from core.interfaces import ScoringQuery
from core.services.scoring.models import ProjectProgressTotals, WorkerScoreTotals
from core.services.scoring.performance import build_project_metrics
from core.services.scoring.policy import ScoringPolicy
from infra.db.models import PhaseORM, ProjectORM, ProjectWorkerORM, TaskORM, TaskWorkerORM

logger = logging.getLogger(__name__)

_US_PER_SECOND = 1_000_000


def _priority_weight(policy: ScoringPolicy) -> ColumnElement:
    whens = [(TaskORM.priority == key, literal(float(w))) for key, w in policy.priority_weights.items()]
    return case(*whens, else_=literal(float(policy.default_priority_weight)))


def _status_multiplier(policy: ScoringPolicy) -> ColumnElement:
    whens = [(TaskORM.status == key, literal(float(m))) for key, m in policy.status_multipliers.items()]
    return case(*whens, else_=literal(float(policy.default_status_multiplier)))


def _epoch_us(column) -> ColumnElement:
    # SQLite DateTime text is "YYYY-MM-DD HH:MM:SS.ffffff"; seconds and micros are read
    # separately so no fractional second is rounded away
    seconds = cast(func.strftime("%s", func.substr(column, 1, 19)), Integer)
    micros = cast(func.substr(column, 21, 6), Integer)
    return seconds * _US_PER_SECOND + micros


def _time_multiplier(policy: ScoringPolicy) -> ColumnElement:
    diff_us = _epoch_us(TaskORM.actual_completion_datetime) - _epoch_us(TaskORM.completion_datetime)
    grace_us = policy.grace_period // timedelta(microseconds=1)
    classified = and_(
        TaskORM.status == WorkStatus.COMPLETED.value,
        TaskORM.completion_datetime.is_not(None),
        TaskORM.actual_completion_datetime.is_not(None),
    )
    return case(
        (and_(classified, diff_us < 0), literal(float(policy.early_completion_bonus))),
        (and_(classified, diff_us <= grace_us), literal(float(policy.on_time_multiplier))),
        (classified, literal(float(policy.late_penalty))),
        else_=literal(1.0),
    )


def _task_sums(policy: ScoringPolicy):
    weight = _priority_weight(policy)
    weighted = weight * _status_multiplier(policy) * _time_multiplier(policy)
    best = weight * literal(float(policy.early_completion_bonus))
    completed = case((TaskORM.status == WorkStatus.COMPLETED.value, 1), else_=0)
    return (
        func.coalesce(func.sum(weighted), 0.0),
        func.coalesce(func.sum(best), 0.0),
        func.count(TaskORM.id),
        func.coalesce(func.sum(completed), 0),
    )


class SqlAlchemyScoringQuery(ScoringQuery):
    """
    Scoring sums computed in SQLite. Mirrors the in-process calculators so
    the results can be finished by the same finalize functions.
    """

    def __init__(self, session: Session):
        self.session = session

    def worker_totals(self, worker_id: str, policy: ScoringPolicy) -> WorkerScoreTotals:
        assigned_tasks = select(TaskWorkerORM.task_id).where(TaskWorkerORM.worker_id == worker_id)
        weighted, best, total, completed = self.session.execute(
            select(*_task_sums(policy)).where(TaskORM.id.in_(assigned_tasks))
        ).one()

        task_terminations = self.session.execute(
            select(func.count(TaskWorkerORM.id)).where(
                TaskWorkerORM.worker_id == worker_id,
                TaskWorkerORM.status == WorkerStatus.TERMINATED.value,
            )
        ).scalar_one()
        project_terminations = self.session.execute(
            select(func.count(ProjectWorkerORM.id)).where(
                ProjectWorkerORM.worker_id == worker_id,
                ProjectWorkerORM.status == WorkerStatus.TERMINATED.value,
            )
        ).scalar_one()

        via_project = select(ProjectWorkerORM.project_id).where(ProjectWorkerORM.worker_id == worker_id)
        via_task = (
            select(PhaseORM.project_id)
            .join(TaskORM, TaskORM.phase_id == PhaseORM.id)
            .where(TaskORM.id.in_(assigned_tasks))
        )
        involved = self.session.execute(
            select(ProjectORM.id, ProjectORM.status)
            .where(or_(ProjectORM.id.in_(via_project), ProjectORM.id.in_(via_task)))
            .order_by(ProjectORM.name, ProjectORM.id)
        ).all()
        done_case = case((TaskORM.status == WorkStatus.COMPLETED.value, 1), else_=0)
        per_project = {
            project_id: (int(count), int(done))
            for project_id, count, done in self.session.execute(
                select(
                    PhaseORM.project_id,
                    func.count(TaskORM.id),
                    func.coalesce(func.sum(done_case), 0),
                )
                .join(TaskORM, TaskORM.phase_id == PhaseORM.id)
                .where(TaskORM.id.in_(assigned_tasks))
                .group_by(PhaseORM.project_id)
            )
        }
        tallies = [(status, *per_project.get(project_id, (0, 0))) for project_id, status in involved]

        totals = WorkerScoreTotals(
            weighted_sum=float(weighted),
            max_sum=float(best),
            total_tasks=int(total),
            completed_tasks=int(completed),
            total_projects=len(involved),
            task_terminations=int(task_terminations),
            project_terminations=int(project_terminations),
            project_metrics=build_project_metrics(tallies),
        )
        logger.debug("SQL worker totals for %s: %s", worker_id, totals)
        return totals

    def project_totals(self, project_id: str, policy: ScoringPolicy) -> ProjectProgressTotals:
        stmt = (
            select(*_task_sums(policy))
            .select_from(TaskORM)
            .join(PhaseORM, PhaseORM.id == TaskORM.phase_id)
            .where(PhaseORM.project_id == project_id)
        )
        weighted, best, total, completed = self.session.execute(stmt).one()
        totals = ProjectProgressTotals(
            weighted_sum=float(weighted),
            max_sum=float(best),
            total_tasks=int(total),
            completed_tasks=int(completed),
        )
        logger.debug("SQL progress totals for %s: %s", project_id, totals)
        return totals


__all__ = ["SqlAlchemyScoringQuery"]
