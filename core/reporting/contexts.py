from dataclasses import dataclass
from datetime import datetime

from core.domain import Project, Worker
from core.services.scoring import PerformanceResult, ProgressResult


@dataclass
class ProgressExcelContext:
    project: Project
    progress: ProgressResult
    generated_at: datetime


@dataclass
class PerformanceExcelContext:
    worker: Worker
    performance: PerformanceResult
    generated_at: datetime
