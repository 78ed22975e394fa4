from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.reporting import ScoringReportService
from core.services.scoring import (
    DEFAULT_MANAGER_POLICY,
    DEFAULT_POLICY,
    ManagerScoringPolicy,
    ScoringPolicy,
)
from infra.db.repositories import (
    SqlAlchemyPhaseRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyProjectWorkerRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyTaskWorkerRepository,
    SqlAlchemyWorkerRepository,
)
from infra.db.scoring_query import SqlAlchemyScoringQuery


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_repo: SqlAlchemyProjectRepository
    phase_repo: SqlAlchemyPhaseRepository
    task_repo: SqlAlchemyTaskRepository
    task_worker_repo: SqlAlchemyTaskWorkerRepository
    project_worker_repo: SqlAlchemyProjectWorkerRepository
    worker_repo: SqlAlchemyWorkerRepository
    scoring_query: SqlAlchemyScoringQuery
    reporting_service: ScoringReportService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "project_repo": self.project_repo,
            "phase_repo": self.phase_repo,
            "task_repo": self.task_repo,
            "task_worker_repo": self.task_worker_repo,
            "project_worker_repo": self.project_worker_repo,
            "worker_repo": self.worker_repo,
            "scoring_query": self.scoring_query,
            "reporting_service": self.reporting_service,
        }


def build_service_graph(
    session: Session,
    policy: ScoringPolicy = DEFAULT_POLICY,
    manager_policy: ManagerScoringPolicy = DEFAULT_MANAGER_POLICY,
) -> ServiceGraph:
    project_repo = SqlAlchemyProjectRepository(session)
    phase_repo = SqlAlchemyPhaseRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)
    task_worker_repo = SqlAlchemyTaskWorkerRepository(session)
    project_worker_repo = SqlAlchemyProjectWorkerRepository(session)
    worker_repo = SqlAlchemyWorkerRepository(session)
    scoring_query = SqlAlchemyScoringQuery(session)

    reporting_service = ScoringReportService(
        project_repo=project_repo,
        phase_repo=phase_repo,
        task_repo=task_repo,
        task_worker_repo=task_worker_repo,
        project_worker_repo=project_worker_repo,
        worker_repo=worker_repo,
        scoring_query=scoring_query,
        policy=policy,
        manager_policy=manager_policy,
    )

    return ServiceGraph(
        session=session,
        project_repo=project_repo,
        phase_repo=phase_repo,
        task_repo=task_repo,
        task_worker_repo=task_worker_repo,
        project_worker_repo=project_worker_repo,
        worker_repo=worker_repo,
        scoring_query=scoring_query,
        reporting_service=reporting_service,
    )


def build_service_dict(session: Session) -> dict[str, Any]:
    return build_service_graph(session).as_dict()
