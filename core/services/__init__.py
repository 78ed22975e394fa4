from .reporting import ScoringReportService
from .scoring import (
    ProjectManagerPerformanceCalculator,
    ProjectProgressCalculator,
    ScoringPolicy,
    WorkerPerformanceCalculator,
)

__all__ = [
    "ScoringReportService",
    "ScoringPolicy",
    "ProjectProgressCalculator",
    "WorkerPerformanceCalculator",
    "ProjectManagerPerformanceCalculator",
]
