from datetime import datetime, timedelta

import pytest

from core.domain import (
    Phase,
    Project,
    ProjectWorker,
    Task,
    TaskPriority,
    TaskWorker,
    WorkerStatus,
    WorkStatus,
)
from core.exceptions import ValidationError
from core.services.scoring import (
    NOT_AVAILABLE,
    WorkerPerformanceCalculator,
    WorkerScoreTotals,
    finalize_performance,
)

WORKER = "w1"
OTHER = "w2"
DEADLINE = datetime(2024, 4, 1, 9, 0)


def _task(task_id, priority, status, workers, actual=None):
    return Task(
        id=task_id,
        phase_id="ph",
        name=f"Task {task_id}",
        priority=priority,
        status=status,
        completion_datetime=DEADLINE,
        actual_completion_datetime=actual,
        workers=[TaskWorker(id=f"{task_id}-{w}", task_id=task_id, worker_id=w, status=s) for w, s in workers],
    )


def _project(project_id, phases, workers=()):
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        phases=phases,
        workers=[
            ProjectWorker(id=f"{project_id}-{w}", project_id=project_id, worker_id=w, status=s)
            for w, s in workers
        ],
    )


ASSIGNED = WorkerStatus.ASSIGNED
TERMINATED = WorkerStatus.TERMINATED


def test_base_score_without_terminations():
    phase = Phase(
        id="ph1",
        project_id="p1",
        name="Build",
        tasks=[
            _task("a", TaskPriority.HIGH, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)], DEADLINE - timedelta(days=1)),
            _task("b", TaskPriority.LOW, WorkStatus.ON_GOING, [(WORKER, ASSIGNED)]),
            _task("c", TaskPriority.HIGH, WorkStatus.PENDING, [(OTHER, ASSIGNED)]),
        ],
    )

    result = WorkerPerformanceCalculator().calculate([_project("p1", [phase])], worker_id=WORKER)

    # (6.0 + 0.5) / (6.0 + 1.2)
    assert result.base_score == 90.28
    assert result.overall_score == result.base_score
    assert result.total_tasks == 2
    assert result.total_projects == 1
    assert result.status_penalties.total_penalty == 0.0
    assert result.status_penalties.penalty_breakdown == ()
    assert result.task_metrics.raw_score == 6.5
    assert result.task_metrics.max_possible_score == 7.2


def test_one_task_termination_subtracts_fifteen():
    totals = WorkerScoreTotals(weighted_sum=8.5, max_sum=10.0, total_tasks=4, completed_tasks=3,
                               total_projects=1, task_terminations=1)

    result = finalize_performance(totals)

    assert result.base_score == 85.0
    assert result.overall_score == 70.0
    assert result.status_penalties.total_penalty == 15.0


def test_score_is_floored_at_zero():
    totals = WorkerScoreTotals(weighted_sum=3.0, max_sum=10.0, total_tasks=2, total_projects=3,
                               project_terminations=3)

    result = finalize_performance(totals)

    assert result.base_score == 30.0
    assert result.status_penalties.total_penalty == 75.0
    assert result.overall_score == 0.0
    assert result.performance_grade.startswith("F")


@pytest.mark.parametrize("existing", [0, 1, 2, 3, 4, 5, 6])
def test_each_extra_task_termination_costs_fifteen_until_zero(existing):
    base = WorkerScoreTotals(weighted_sum=9.0, max_sum=10.0, total_tasks=5, total_projects=1,
                             task_terminations=existing)
    more = WorkerScoreTotals(weighted_sum=9.0, max_sum=10.0, total_tasks=5, total_projects=1,
                             task_terminations=existing + 1)

    before = finalize_performance(base).overall_score
    after = finalize_performance(more).overall_score

    if before >= 15:
        assert before - after == pytest.approx(15.0)
    else:
        assert after == 0.0


def test_terminations_recorded_in_iteration_order():
    design = Phase(
        id="ph1",
        project_id="p1",
        name="Design",
        tasks=[
            _task("a", TaskPriority.HIGH, WorkStatus.COMPLETED, [(WORKER, TERMINATED)], DEADLINE),
            _task("b", TaskPriority.LOW, WorkStatus.DELAYED, [(WORKER, ASSIGNED)]),
        ],
    )
    build = Phase(
        id="ph2",
        project_id="p1",
        name="Build",
        tasks=[_task("c", TaskPriority.MEDIUM, WorkStatus.ON_GOING, [(WORKER, TERMINATED), (OTHER, TERMINATED)])],
    )
    p1 = _project("p1", [design, build], workers=[(WORKER, ASSIGNED)])
    p2 = _project("p2", [], workers=[(WORKER, TERMINATED), (OTHER, TERMINATED)])

    result = WorkerPerformanceCalculator().calculate([p1, p2], worker_id=WORKER)
    penalties = result.status_penalties

    assert penalties.task_terminations == 2
    assert penalties.project_terminations == 1
    assert penalties.total_penalty == 55.0
    assert [(e.type, e.task_name, e.project_name) for e in penalties.penalty_breakdown] == [
        ("task", "Task a", "Project p1"),
        ("task", "Task c", "Project p1"),
        ("project", None, "Project p2"),
    ]
    first = penalties.penalty_breakdown[0]
    assert first.phase_name == "Design"
    assert first.penalty == 15.0
    assert penalties.penalty_breakdown[2].penalty == 25.0
    assert result.overall_score == round(max(0.0, result.base_score - 55.0), 2)


def test_terminated_task_still_counts_toward_base_score():
    phase = Phase(
        id="ph1",
        project_id="p1",
        name="Build",
        tasks=[_task("a", TaskPriority.HIGH, WorkStatus.COMPLETED, [(WORKER, TERMINATED)], DEADLINE)],
    )

    result = WorkerPerformanceCalculator().calculate([_project("p1", [phase])], worker_id=WORKER)

    assert result.total_tasks == 1
    assert result.base_score == round(100 * 5.0 / 6.0, 2)
    assert result.overall_score == round(100 * 5.0 / 6.0 - 15.0, 2)


def test_total_projects_counts_any_assignment_record():
    only_project_record = _project("p1", [], workers=[(WORKER, ASSIGNED)])
    only_task_record = _project(
        "p2",
        [Phase(id="ph", project_id="p2", name="X",
               tasks=[_task("a", TaskPriority.LOW, WorkStatus.PENDING, [(WORKER, ASSIGNED)])])],
    )
    unrelated = _project("p3", [], workers=[(OTHER, ASSIGNED)])

    result = WorkerPerformanceCalculator().calculate(
        [only_project_record, only_task_record, unrelated], worker_id=WORKER
    )

    assert result.total_projects == 2
    assert result.total_tasks == 1


def test_worker_without_tasks_gets_zero_and_no_grade():
    project = _project("p1", [], workers=[(WORKER, TERMINATED)])

    result = WorkerPerformanceCalculator().calculate([project], worker_id=WORKER)

    assert result.total_tasks == 0
    assert result.base_score == 0.0
    assert result.overall_score == 0.0
    assert result.performance_grade == NOT_AVAILABLE
    assert result.status_penalties.project_terminations == 1
    assert result.insights


def test_empty_project_list():
    result = WorkerPerformanceCalculator().calculate([], worker_id=WORKER)

    assert result.overall_score == 0.0
    assert result.total_projects == 0
    assert result.performance_grade == NOT_AVAILABLE


def test_pre_scoped_input_uses_every_record():
    phase = Phase(
        id="ph1",
        project_id="p1",
        name="Build",
        tasks=[
            _task("a", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)], DEADLINE),
            _task("b", TaskPriority.LOW, WorkStatus.PENDING, []),
        ],
    )

    result = WorkerPerformanceCalculator().calculate([_project("p1", [phase])])

    assert result.total_tasks == 1
    assert result.base_score == round(100 * 1.0 / 1.2, 2)


def test_task_with_two_records_for_same_worker_counts_once():
    phase = Phase(
        id="ph1",
        project_id="p1",
        name="Build",
        tasks=[_task("a", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, TERMINATED), (WORKER, ASSIGNED)], DEADLINE)],
    )

    result = WorkerPerformanceCalculator().calculate([_project("p1", [phase])], worker_id=WORKER)

    assert result.total_tasks == 1
    assert result.status_penalties.task_terminations == 1


def test_grade_follows_overall_score():
    totals = WorkerScoreTotals(weighted_sum=9.2, max_sum=10.0, total_tasks=3, total_projects=1)

    assert finalize_performance(totals).performance_grade == "A+ (Exceptional)"


def test_as_dict_shape():
    totals = WorkerScoreTotals(weighted_sum=8.5, max_sum=10.0, total_tasks=4, total_projects=1, task_terminations=1)

    data = finalize_performance(totals).as_dict()

    assert data["overallScore"] == 70.0
    assert data["baseScore"] == 85.0
    assert data["statusPenalties"]["taskTerminations"] == 1
    assert data["statusPenalties"]["penaltyBreakdown"] == []
    assert data["taskMetrics"] == {"rawScore": 8.5, "maxPossibleScore": 10.0, "totalTasks": 4}


@pytest.mark.parametrize("bad", [None, "projects", [None]])
def test_invalid_project_input_raises(bad):
    with pytest.raises(ValidationError):
        WorkerPerformanceCalculator().calculate(bad, worker_id=WORKER)


def _status_project(project_id, status, tasks):
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        status=status,
        phases=[Phase(id=f"{project_id}-ph", project_id=project_id, name="Work", tasks=tasks)],
    )


def test_project_metrics_average_per_project_rates():
    done = _status_project(
        "p1", WorkStatus.COMPLETED,
        [_task("a", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)])],
    )
    running = _status_project(
        "p2", WorkStatus.ON_GOING,
        [_task("b", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)])]
        + [_task(f"c{i}", TaskPriority.LOW, WorkStatus.PENDING, [(WORKER, ASSIGNED)]) for i in range(3)],
    )

    result = WorkerPerformanceCalculator().calculate([done, running], worker_id=WORKER)
    metrics = result.project_metrics

    assert metrics.total_projects == 2
    assert metrics.projects_by_status == {"completed": 1, "onGoing": 1}
    assert metrics.project_completion_rates == (100.0, 25.0)
    # mean of 100% and 25%, not 2 of 5 tasks pooled
    assert metrics.average_project_completion == 62.5
    assert metrics.average_tasks_per_project == 2.5
    assert "Contributed to 1 completed projects (50.0% of total)." in result.insights
    assert "Currently active in 1 ongoing project(s)." in result.insights
    assert "Moderate task completion rate (62.5%) - room for improvement." in result.insights


def test_project_without_worker_tasks_has_no_completion_rate():
    staffed_only = _project("p1", [], workers=[(WORKER, ASSIGNED)])
    working = _status_project(
        "p2", WorkStatus.ON_GOING,
        [_task("a", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)])],
    )

    metrics = WorkerPerformanceCalculator().calculate([staffed_only, working], worker_id=WORKER).project_metrics

    assert metrics.total_projects == 2
    assert metrics.project_completion_rates == (100.0,)
    assert metrics.average_project_completion == 100.0
    assert metrics.average_tasks_per_project == 0.5


def test_many_ongoing_projects_with_few_completions():
    projects = [
        _status_project(
            f"p{i}", WorkStatus.ON_GOING,
            [_task(f"t{i}", TaskPriority.LOW, WorkStatus.PENDING, [(WORKER, ASSIGNED)])],
        )
        for i in range(6)
    ]

    result = WorkerPerformanceCalculator().calculate(projects, worker_id=WORKER)

    assert result.project_metrics.projects_by_status == {"onGoing": 6}
    assert "Currently active in 6 ongoing project(s)." in result.insights
    assert "Many ongoing projects with few completions - prioritize finishing current work." in result.recommendations
    assert "Low task count per project - consider deeper involvement in fewer projects." in result.recommendations


def test_high_task_volume_suggests_talking_to_the_manager():
    tasks = [_task(f"t{i}", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)]) for i in range(31)]

    result = WorkerPerformanceCalculator().calculate(
        [_status_project("p1", WorkStatus.ON_GOING, tasks)], worker_id=WORKER
    )

    assert result.project_metrics.average_tasks_per_project == 31.0
    assert "High task volume per project - ensure workload is manageable." in result.recommendations
    assert "Consider discussing task distribution with project manager." in result.recommendations


def test_excellent_worker_on_many_projects_is_asked_to_mentor():
    projects = [
        _status_project(
            f"p{i}", WorkStatus.COMPLETED,
            [_task(f"t{i}", TaskPriority.HIGH, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)], DEADLINE - timedelta(days=1))],
        )
        for i in range(5)
    ]

    result = WorkerPerformanceCalculator().calculate(projects, worker_id=WORKER)

    assert result.overall_score == 100.0
    assert "Contributed to 5 completed projects (100.0% of total)." in result.insights
    assert "Consider mentoring other team members on project best practices." in result.recommendations
    assert len(result.recommendations) == len(set(result.recommendations))


def test_as_dict_exposes_project_metrics():
    phase = Phase(
        id="ph1",
        project_id="p1",
        name="Build",
        tasks=[_task("a", TaskPriority.LOW, WorkStatus.COMPLETED, [(WORKER, ASSIGNED)])],
    )

    data = WorkerPerformanceCalculator().calculate([_project("p1", [phase])], worker_id=WORKER).as_dict()

    assert data["projectMetrics"] == {
        "totalProjects": 1,
        "projectsByStatus": {"pending": 1},
        "projectCompletionRates": [100.0],
        "averageProjectCompletion": 100.0,
        "averageTasksPerProject": 1.0,
    }
