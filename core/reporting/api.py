"""Reporting API wrappers around renderer classes."""

from datetime import datetime
from pathlib import Path

from core.services.reporting import ScoringReportService
from core.services.scoring import PerformanceResult, ProgressResult
from core.reporting.renderers.excel import PerformanceExcelRenderer, ProgressExcelRenderer
from core.reporting.contexts import PerformanceExcelContext, ProgressExcelContext


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def generate_progress_excel(
    reporting_service: ScoringReportService,
    project_id: str,
    output_path: str | Path,
    progress: ProgressResult | None = None,
) -> Path:
    if progress is None:
        progress = reporting_service.get_project_progress(project_id)
    ctx = ProgressExcelContext(
        project=reporting_service.get_project(project_id),
        progress=progress,
        generated_at=datetime.now(),
    )
    return ProgressExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_performance_excel(
    reporting_service: ScoringReportService,
    worker_id: str,
    output_path: str | Path,
    performance: PerformanceResult | None = None,
) -> Path:
    """Write the performance workbook; an already computed result is rendered as is."""
    if performance is None:
        performance = reporting_service.get_worker_performance(worker_id)
    ctx = PerformanceExcelContext(
        worker=reporting_service.get_worker(worker_id),
        performance=performance,
        generated_at=datetime.now(),
    )
    return PerformanceExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))
