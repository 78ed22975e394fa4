from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from core.domain.enums import WorkStatus, enum_value
from core.services.scoring.grading import MANAGER_GRADE_BANDS, NOT_AVAILABLE, clamp_score, grade_label
from core.services.scoring.models import ManagerPerformanceResult, MetricScore
from core.services.scoring.progress import (
    ProjectProgressCalculator,
    ensure_collection,
    phase_tasks,
    round_pct,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerScoringPolicy:
    project_status_weights: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                WorkStatus.COMPLETED.value: 1.0,
                WorkStatus.ON_GOING.value: 0.6,
                WorkStatus.DELAYED.value: 0.3,
                WorkStatus.PENDING.value: 0.2,
                WorkStatus.CANCELLED.value: -0.5,
            }
        )
    )
    completion_weight: float = 0.35
    time_weight: float = 0.30
    progress_weight: float = 0.35

    early_delivery_bonus: float = 1.3
    on_time_multiplier: float = 1.0
    late_penalty: float = 0.7
    severely_late_penalty: float = 0.4
    grace_days: int = 2
    severe_delay_percent: float = 20.0


DEFAULT_MANAGER_POLICY = ManagerScoringPolicy()

_NO_DATA_INSIGHTS = (
    "No projects found for evaluation period.",
    "Start managing projects to build performance history.",
    "Performance metrics will be calculated as projects are completed.",
)


class ProjectManagerPerformanceCalculator:
    """
    Scores a project manager from the projects they manage: delivery status,
    deadline adherence of completed projects and actual task progress.
    """

    def __init__(
        self,
        policy: ManagerScoringPolicy = DEFAULT_MANAGER_POLICY,
        progress_calculator: ProjectProgressCalculator | None = None,
    ):
        self._policy = policy
        self._progress = progress_calculator or ProjectProgressCalculator()

    def calculate(self, projects: Iterable[object]) -> ManagerPerformanceResult:
        project_list = ensure_collection(projects, "projects")
        if not project_list:
            empty = MetricScore(score=0.0, description="")
            return ManagerPerformanceResult(
                overall_score=0.0,
                performance_grade=NOT_AVAILABLE,
                total_projects=0,
                completion=empty,
                time_management=empty,
                project_progress=empty,
                statistics={},
                insights=_NO_DATA_INSIGHTS,
                recommendations=(),
            )

        completion = self._completion_score(project_list)
        timing = self._time_management_score(project_list)
        progress = self._progress_score(project_list)

        p = self._policy
        raw = (
            completion.score * p.completion_weight
            + timing.score * p.time_weight
            + progress.score * p.progress_weight
        )
        overall = clamp_score(raw)
        statistics = self._statistics(project_list)

        logger.debug(
            "Manager score over %d project(s): completion=%.2f time=%.2f progress=%.2f",
            len(project_list),
            completion.score,
            timing.score,
            progress.score,
        )

        return ManagerPerformanceResult(
            overall_score=round_pct(overall),
            performance_grade=grade_label(overall, MANAGER_GRADE_BANDS),
            total_projects=len(project_list),
            completion=completion,
            time_management=timing,
            project_progress=progress,
            statistics=statistics,
            insights=tuple(self._insights(overall, completion, timing, progress, statistics)),
            recommendations=tuple(self._recommendations(completion, timing, progress, statistics)),
        )

    # --------------------------------------------------------------
    # Metrics
    # --------------------------------------------------------------

    def _completion_score(self, projects: List[object]) -> MetricScore:
        status_counts: Dict[str, int] = {}
        weighted = 0.0
        for project in projects:
            status = enum_value(getattr(project, "status", None)) or ""
            status_counts[status] = status_counts.get(status, 0) + 1
            weighted += self._policy.project_status_weights.get(status, 0.0)

        score = weighted / len(projects) * 100.0
        return MetricScore(
            score=round_pct(score),
            description="Project delivery and completion effectiveness",
            details={"statusBreakdown": status_counts},
        )

    def _time_management_score(self, projects: List[object]) -> MetricScore:
        p = self._policy
        stats = {"earlyDelivery": 0, "onTime": 0, "late": 0, "severelyLate": 0}
        total = 0.0
        evaluated = 0

        for project in projects:
            if enum_value(getattr(project, "status", None)) != WorkStatus.COMPLETED.value:
                continue
            deadline = getattr(project, "completion_datetime", None)
            actual = getattr(project, "actual_completion_datetime", None)
            if deadline is None or actual is None:
                continue

            evaluated += 1
            days_off = abs((actual - deadline).days)
            start = getattr(project, "start_datetime", None)
            planned_days = (deadline - start).days if start is not None else 0
            delay_pct = days_off / planned_days * 100.0 if planned_days > 0 else 0.0

            if actual < deadline:
                total += 100.0 * p.early_delivery_bonus
                stats["earlyDelivery"] += 1
            elif days_off <= p.grace_days:
                total += 100.0 * p.on_time_multiplier
                stats["onTime"] += 1
            elif delay_pct <= p.severe_delay_percent:
                total += 100.0 * p.late_penalty
                stats["late"] += 1
            else:
                total += 100.0 * p.severely_late_penalty
                stats["severelyLate"] += 1

        score = total / evaluated if evaluated else 0.0
        return MetricScore(
            score=round_pct(score),
            description="On-time project delivery track record",
            details={"completedProjects": evaluated, "timePerformance": stats},
        )

    def _progress_score(self, projects: List[object]) -> MetricScore:
        distribution = {"highProgress": 0, "moderateProgress": 0, "lowProgress": 0, "minimalProgress": 0}
        total = 0.0
        evaluated = 0

        for project in projects:
            phases = getattr(project, "phases", None)
            if not phases:
                continue
            pct = self._progress.calculate(phases).progress_percentage
            total += pct
            evaluated += 1
            if pct >= 75:
                distribution["highProgress"] += 1
            elif pct >= 50:
                distribution["moderateProgress"] += 1
            elif pct >= 25:
                distribution["lowProgress"] += 1
            else:
                distribution["minimalProgress"] += 1

        score = total / evaluated if evaluated else 0.0
        return MetricScore(
            score=round_pct(score),
            description="Actual task completion progress across all managed projects",
            details={"evaluatedProjects": evaluated, "progressDistribution": distribution},
        )

    def _statistics(self, projects: List[object]) -> Dict[str, Any]:
        by_status: Dict[str, int] = {}
        total_budget = 0.0
        with_budget = 0
        total_tasks = 0

        for project in projects:
            status = enum_value(getattr(project, "status", None)) or ""
            by_status[status] = by_status.get(status, 0) + 1

            budget = float(getattr(project, "budget", 0.0) or 0.0)
            if budget > 0:
                total_budget += budget
                with_budget += 1

            for phase in getattr(project, "phases", None) or []:
                total_tasks += len(phase_tasks(phase))

        return {
            "total": len(projects),
            "byStatus": by_status,
            "totalBudget": round(total_budget, 2),
            "averageBudget": round(total_budget / with_budget, 2) if with_budget else 0.0,
            "totalTasks": total_tasks,
            "averageTasksPerProject": round(total_tasks / len(projects), 1),
        }

    # --------------------------------------------------------------
    # Text
    # --------------------------------------------------------------

    def _insights(
        self,
        overall: float,
        completion: MetricScore,
        timing: MetricScore,
        progress: MetricScore,
        statistics: Dict[str, Any],
    ) -> List[str]:
        insights: List[str] = []

        if overall >= 85:
            insights.append("Exceptional project management performance! Consistently delivers high-quality projects.")
        elif overall >= 70:
            insights.append("Good project management with solid track record. Some areas for improvement identified.")
        elif overall >= 50:
            insights.append("Average performance with significant room for improvement in multiple areas.")
        else:
            insights.append("Performance needs immediate attention. Critical improvement required.")

        completed = completion.details["statusBreakdown"].get(WorkStatus.COMPLETED.value, 0)
        rate = completed / statistics["total"] * 100.0
        if rate >= 80:
            insights.append(f"Strong project completion rate at {rate:.1f}%.")
        elif rate < 50:
            insights.append(f"Low project completion rate ({rate:.1f}%) - focus on delivering projects.")

        evaluated = timing.details["completedProjects"]
        if evaluated > 0:
            perf = timing.details["timePerformance"]
            if perf["onTime"] + perf["earlyDelivery"] >= evaluated * 0.7:
                insights.append("Strong time management - majority of projects delivered on schedule.")
            if perf["severelyLate"] > 0:
                insights.append("Concern: Some projects severely delayed. Review planning and resource allocation.")

        progressed = progress.details["evaluatedProjects"]
        if progressed > 0:
            if progress.score >= 80:
                insights.append("Excellent progress tracking - projects are advancing steadily towards completion.")
            elif progress.score >= 60:
                insights.append("Good progress on active projects - maintain momentum to meet deadlines.")
            elif progress.score < 40:
                insights.append("Warning: Low average progress across projects. Consider resource reallocation.")

            dist = progress.details["progressDistribution"]
            if dist["minimalProgress"] > 0:
                insights.append(
                    f"{dist['minimalProgress']} project(s) with minimal progress (<25%) - immediate attention required."
                )
            if dist["highProgress"] >= progressed * 0.6:
                insights.append("Strong execution - majority of projects showing high progress (>=75%).")

        return insights

    def _recommendations(
        self,
        completion: MetricScore,
        timing: MetricScore,
        progress: MetricScore,
        statistics: Dict[str, Any],
    ) -> List[str]:
        recommendations: List[str] = []
        status_counts = completion.details["statusBreakdown"]

        if status_counts.get(WorkStatus.CANCELLED.value, 0) > 0:
            recommendations.append("Investigate reasons for cancelled projects and implement preventive measures.")
        if status_counts.get(WorkStatus.DELAYED.value, 0) >= statistics["total"] * 0.3:
            recommendations.append("High number of delayed projects - review resource allocation and planning processes.")

        if timing.score < 70:
            recommendations.append("Enhance project scheduling and milestone tracking.")
        perf = timing.details["timePerformance"]
        if perf["late"] + perf["severelyLate"] > 0:
            recommendations.append("Analyze causes of delays and implement corrective actions.")
            recommendations.append("Build buffer time into project schedules to accommodate unforeseen challenges.")

        progressed = progress.details["evaluatedProjects"]
        if progressed > 0:
            dist = progress.details["progressDistribution"]
            if dist["minimalProgress"] > 0:
                recommendations.append(
                    "Urgently address projects with minimal progress - identify blockers and reallocate resources."
                )
            if progress.score < 50:
                recommendations.append("Implement weekly progress reviews to identify and resolve bottlenecks early.")
            if dist["minimalProgress"] + dist["lowProgress"] >= progressed * 0.4:
                recommendations.append("Review team capacity and consider hiring or reassigning resources.")

        if not recommendations:
            recommendations.append("Continue maintaining high standards of project management.")
            recommendations.append("Share best practices across the organization.")

        return recommendations


__all__ = [
    "ProjectManagerPerformanceCalculator",
    "ManagerScoringPolicy",
    "DEFAULT_MANAGER_POLICY",
]
