# tests/conftest.py
import logging
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

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
)
from infra.db.base import Base
from infra.services import build_service_dict


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_dict(session)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def _seed_sample_data(session) -> dict:
    """
    Two workers and a manager across three projects.

    alice: T1 early, T2 on the grace boundary, T3 late (terminated), T5 delayed,
           T7 completed without deadline; terminated from "Data Migration".
    bob:   T2, T4 ongoing, T6 malformed priority/status, T8 pending; project-level
           record only on "Archive".
    """
    alice = Worker(id="w-alice", first_name="Alice", last_name="Moreau")
    bob = Worker(id="w-bob", first_name="Bob", last_name="Keller")
    maria = Worker(id="w-maria", first_name="Maria", last_name="Lopez")

    web = Project(
        id="p-web",
        name="Website Relaunch",
        manager_id=maria.id,
        status=WorkStatus.ON_GOING,
        start_datetime=datetime(2024, 1, 1),
        completion_datetime=datetime(2024, 6, 30),
        budget=50_000.0,
    )
    migration = Project(
        id="p-mig",
        name="Data Migration",
        manager_id=maria.id,
        status=WorkStatus.COMPLETED,
        start_datetime=datetime(2024, 1, 1),
        completion_datetime=datetime(2024, 3, 1),
        actual_completion_datetime=datetime(2024, 2, 20),
        budget=20_000.0,
    )
    archive = Project(id="p-arc", name="Archive", status=WorkStatus.CANCELLED)

    design = Phase(id="ph-design", project_id=web.id, name="Design", start_datetime=datetime(2024, 1, 1))
    build = Phase(id="ph-build", project_id=web.id, name="Build", start_datetime=datetime(2024, 2, 1))
    launch = Phase(id="ph-launch", project_id=web.id, name="Launch", start_datetime=datetime(2024, 6, 1))
    extract = Phase(id="ph-extract", project_id=migration.id, name="Extract", start_datetime=datetime(2024, 1, 1))

    tasks = [
        Task(
            id="t1", phase_id=design.id, name="Wireframes",
            priority=TaskPriority.HIGH, status=WorkStatus.COMPLETED,
            completion_datetime=datetime(2024, 2, 1, 9, 0),
            actual_completion_datetime=datetime(2024, 1, 30, 17, 0),
        ),
        Task(
            id="t2", phase_id=design.id, name="Style guide",
            priority=TaskPriority.MEDIUM, status=WorkStatus.COMPLETED,
            completion_datetime=datetime(2024, 2, 10, 9, 0),
            actual_completion_datetime=datetime(2024, 2, 11, 9, 0),
        ),
        Task(
            id="t3", phase_id=build.id, name="Checkout flow",
            priority=TaskPriority.HIGH, status=WorkStatus.COMPLETED,
            completion_datetime=datetime(2024, 3, 1, 12, 0),
            actual_completion_datetime=datetime(2024, 3, 5, 12, 0),
        ),
        Task(id="t4", phase_id=build.id, name="Search", priority=TaskPriority.MEDIUM, status=WorkStatus.ON_GOING),
        Task(id="t5", phase_id=build.id, name="Accessibility", priority=TaskPriority.LOW, status=WorkStatus.DELAYED),
        Task(id="t6", phase_id=build.id, name="Legacy import", priority="urgent", status=None),
        Task(id="t7", phase_id=extract.id, name="Export CRM", priority=TaskPriority.LOW, status=WorkStatus.COMPLETED),
        Task(id="t8", phase_id=extract.id, name="Export ERP", priority=TaskPriority.HIGH, status=WorkStatus.PENDING),
    ]

    task_workers = [
        TaskWorker(id="tw1", task_id="t1", worker_id=alice.id),
        TaskWorker(id="tw2", task_id="t2", worker_id=alice.id),
        TaskWorker(id="tw3", task_id="t2", worker_id=bob.id),
        TaskWorker(id="tw4", task_id="t3", worker_id=alice.id, status=WorkerStatus.TERMINATED),
        TaskWorker(id="tw5", task_id="t4", worker_id=bob.id),
        TaskWorker(id="tw6", task_id="t5", worker_id=alice.id),
        TaskWorker(id="tw7", task_id="t6", worker_id=bob.id),
        TaskWorker(id="tw8", task_id="t7", worker_id=alice.id),
        TaskWorker(id="tw9", task_id="t8", worker_id=bob.id),
    ]
    project_workers = [
        ProjectWorker(id="pw1", project_id=web.id, worker_id=alice.id),
        ProjectWorker(id="pw2", project_id=web.id, worker_id=bob.id),
        ProjectWorker(id="pw3", project_id=migration.id, worker_id=alice.id, status=WorkerStatus.TERMINATED),
        ProjectWorker(id="pw4", project_id=archive.id, worker_id=bob.id),
    ]

    graph = build_service_dict(session)
    for worker in (alice, bob, maria):
        graph["worker_repo"].add(worker)
    for project in (web, migration, archive):
        graph["project_repo"].add(project)
    for phase in (design, build, launch, extract):
        graph["phase_repo"].add(phase)
    for task in tasks:
        graph["task_repo"].add(task)
    for record in task_workers:
        graph["task_worker_repo"].add(record)
    for record in project_workers:
        graph["project_worker_repo"].add(record)
    session.commit()

    return {
        "alice": alice.id,
        "bob": bob.id,
        "maria": maria.id,
        "web": web.id,
        "migration": migration.id,
        "archive": archive.id,
    }


@pytest.fixture
def seed_sample():
    return _seed_sample_data


@pytest.fixture
def sample_ids(session):
    return _seed_sample_data(session)
