from datetime import datetime, timedelta

import pytest

from core.domain import Phase, Project, Task, TaskPriority, TaskWorker, Worker, WorkStatus
from core.services.scoring import DEFAULT_POLICY, ScoringPolicy
from infra.services import build_service_graph

DEADLINE = datetime(2024, 5, 10, 17, 0, 0, 250000)


@pytest.mark.parametrize("worker", ["alice", "bob"])
def test_database_and_in_process_worker_scores_agree(services, sample_ids, worker):
    service = services["reporting_service"]
    worker_id = sample_ids[worker]

    full = service.get_worker_performance(worker_id)
    summary = service.get_worker_performance_summary(worker_id)

    assert summary.base_score == full.base_score
    assert summary.overall_score == full.overall_score
    assert summary.performance_grade == full.performance_grade
    assert summary.total_tasks == full.total_tasks
    assert summary.total_projects == full.total_projects
    assert summary.status_penalties.task_terminations == full.status_penalties.task_terminations
    assert summary.status_penalties.project_terminations == full.status_penalties.project_terminations
    assert summary.status_penalties.total_penalty == full.status_penalties.total_penalty
    assert summary.task_metrics.raw_score == pytest.approx(full.task_metrics.raw_score)
    assert summary.task_metrics.max_possible_score == pytest.approx(full.task_metrics.max_possible_score)
    assert summary.status_penalties.penalty_breakdown == ()


@pytest.mark.parametrize("project", ["web", "migration", "archive"])
def test_database_and_in_process_project_progress_agree(services, sample_ids, project):
    service = services["reporting_service"]
    project_id = sample_ids[project]

    full = service.get_project_progress(project_id)
    summary = service.get_project_progress_summary(project_id)

    assert summary.progress_percentage == full.progress_percentage
    assert summary.simple_progress_percentage == full.simple_progress_percentage
    assert summary.total_tasks == full.total_tasks


def test_worker_totals_raw_sums(services, sample_ids):
    totals = services["scoring_query"].worker_totals(sample_ids["alice"], DEFAULT_POLICY)

    assert totals.weighted_sum == pytest.approx(14.3)
    assert totals.max_sum == pytest.approx(18.0)
    assert totals.total_tasks == 5
    assert totals.completed_tasks == 4
    assert totals.total_projects == 2
    assert totals.task_terminations == 1
    assert totals.project_terminations == 1


def test_unknown_worker_has_empty_totals(services, sample_ids):
    totals = services["scoring_query"].worker_totals("nobody", DEFAULT_POLICY)

    assert totals.weighted_sum == 0.0
    assert totals.total_tasks == 0
    assert totals.total_projects == 0


def test_custom_policy_flows_into_sql(session, sample_ids):
    policy = ScoringPolicy(late_penalty=0.5)
    service = build_service_graph(session, policy=policy).reporting_service

    full = service.get_worker_performance(sample_ids["alice"])
    summary = service.get_worker_performance_summary(sample_ids["alice"])

    assert full.task_metrics.raw_score == pytest.approx(12.8)
    assert summary.base_score == full.base_score


@pytest.mark.parametrize("worker", ["alice", "bob"])
def test_database_and_in_process_project_metrics_agree(services, sample_ids, worker):
    service = services["reporting_service"]
    worker_id = sample_ids[worker]

    full = service.get_worker_performance(worker_id)
    summary = service.get_worker_performance_summary(worker_id)

    assert summary.project_metrics == full.project_metrics
    assert summary.insights == full.insights
    assert summary.recommendations == full.recommendations


def test_worker_project_metrics_from_database(services, sample_ids):
    metrics = services["reporting_service"].get_worker_performance_summary(sample_ids["alice"]).project_metrics

    assert metrics.total_projects == 2
    assert metrics.projects_by_status == {"completed": 1, "onGoing": 1}
    # "Data Migration" 1/1, then "Website Relaunch" 3/4
    assert metrics.project_completion_rates == (100.0, 75.0)
    assert metrics.average_project_completion == 87.5
    assert metrics.average_tasks_per_project == 2.5


def _seed_single_task(services, actual):
    worker = Worker(id="w-edge", first_name="Edge")
    project = Project(id="p-edge", name="Edge", status=WorkStatus.ON_GOING)
    phase = Phase(id="ph-edge", project_id=project.id, name="Only")
    task = Task(
        id="t-edge",
        phase_id=phase.id,
        name="Boundary",
        priority=TaskPriority.HIGH,
        status=WorkStatus.COMPLETED,
        completion_datetime=DEADLINE,
        actual_completion_datetime=actual,
    )
    services["worker_repo"].add(worker)
    services["project_repo"].add(project)
    services["phase_repo"].add(phase)
    services["task_repo"].add(task)
    services["task_worker_repo"].add(TaskWorker(id="tw-edge", task_id=task.id, worker_id=worker.id))
    return worker.id, project.id


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(0), 83.33),
        (-timedelta(microseconds=1), 100.0),
        (-timedelta(microseconds=400), 100.0),
        (timedelta(days=1), 83.33),
        (timedelta(days=1, microseconds=1), 66.67),
        (timedelta(days=1, microseconds=400), 66.67),
    ],
)
def test_sub_millisecond_deadline_boundaries_agree(session, services, offset, expected):
    worker_id, project_id = _seed_single_task(services, DEADLINE + offset)
    session.commit()
    service = services["reporting_service"]

    assert service.get_worker_performance(worker_id).base_score == expected
    assert service.get_worker_performance_summary(worker_id).base_score == expected
    assert service.get_project_progress(project_id).progress_percentage == expected
    assert service.get_project_progress_summary(project_id).progress_percentage == expected
