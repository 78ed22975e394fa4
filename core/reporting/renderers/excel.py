from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.worksheet.worksheet import Worksheet

from core.domain import TaskPriority, WorkStatus
from core.reporting.contexts import PerformanceExcelContext, ProgressExcelContext

HEADER_FONT = Font(bold=True)
TITLE_FONT = Font(bold=True, size=14)
CENTER = Alignment(horizontal="center")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
HEADER_FILL = PatternFill("solid", fgColor="DDDDDD")


def _header_row(ws: Worksheet, headers, row: int = 1) -> None:
    for col_index, h in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=col_index, value=h)
        cell.font = HEADER_FONT
        cell.alignment = CENTER
        cell.fill = HEADER_FILL
        cell.border = THIN_BORDER


def _data_row(ws: Worksheet, row: int, values) -> None:
    for col_index, v in enumerate(values, start=1):
        ws.cell(row=row, column=col_index, value=v).border = THIN_BORDER


class _OverviewWriter:
    def __init__(self, ws: Worksheet, start_row: int = 3):
        self.ws = ws
        self.row = start_row

    def kv(self, key, value) -> None:
        ws = self.ws
        ws[f"A{self.row}"] = key
        ws[f"B{self.row}"] = value
        ws[f"A{self.row}"].font = HEADER_FONT
        ws[f"A{self.row}"].border = THIN_BORDER
        ws[f"B{self.row}"].border = THIN_BORDER
        self.row += 1

    def skip(self) -> None:
        self.row += 1

    def lines(self, title: str, items) -> None:
        if not items:
            return
        self.skip()
        self.ws[f"A{self.row}"] = title
        self.ws[f"A{self.row}"].font = HEADER_FONT
        self.row += 1
        for item in items:
            self.ws[f"A{self.row}"] = item
            self.row += 1


class ProgressExcelRenderer:
    def render(self, ctx: ProgressExcelContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        progress = ctx.progress

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"
        ws["A1"] = f"Project Progress - {ctx.project.name}"
        ws["A1"].font = TITLE_FONT

        out = _OverviewWriter(ws)
        out.kv("Project ID", ctx.project.id)
        out.kv("Project name", ctx.project.name)
        out.kv("Generated at", ctx.generated_at.isoformat(timespec="seconds"))
        out.skip()
        out.kv("Weighted progress (%)", progress.progress_percentage)
        out.kv("Simple progress (%)", progress.simple_progress_percentage)
        out.kv("Tasks - total", progress.total_tasks)
        out.lines("Insights", progress.insights.messages)
        out.lines("Recommendations", progress.insights.recommendations)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Phases ----------------
        ws_ph = wb.create_sheet("Phases")
        _header_row(ws_ph, ["Phase ID", "Name", "Tasks", "Completed", "Weighted (%)", "Simple (%)"])
        for r, (phase_id, phase) in enumerate(progress.phase_breakdown.items(), start=2):
            _data_row(
                ws_ph,
                r,
                [
                    phase_id,
                    phase.phase_name,
                    phase.total_tasks,
                    phase.completed_tasks,
                    phase.weighted_progress,
                    phase.simple_progress,
                ],
            )
        ws_ph.column_dimensions["A"].width = 36
        ws_ph.column_dimensions["B"].width = 30
        for col_letter in ("C", "D", "E", "F"):
            ws_ph.column_dimensions[col_letter].width = 14

        # ---------------- Breakdown ----------------
        ws_b = wb.create_sheet("Breakdown")
        _header_row(ws_b, ["Status", "Count", "Percentage"])
        r = 2
        for entry in progress.status_breakdown.values():
            _data_row(ws_b, r, [entry.display_name, entry.count, entry.percentage])
            r += 1

        r += 1
        _header_row(ws_b, ["Priority", "Count", "Percentage", "Weight"], row=r)
        r += 1
        for entry in progress.priority_breakdown.values():
            _data_row(ws_b, r, [entry.display_name, entry.count, entry.percentage, entry.weight])
            r += 1

        if progress.combination_breakdown:
            r += 1
            _header_row(ws_b, ["Status / Priority"] + [p.display_name for p in TaskPriority], row=r)
            r += 1
            for status in WorkStatus:
                row = progress.combination_breakdown.get(status.value, {})
                counts = [row[p.value].count if p.value in row else 0 for p in TaskPriority]
                _data_row(ws_b, r, [status.display_name] + counts)
                r += 1

        ws_b.column_dimensions["A"].width = 22
        for col_letter in ("B", "C", "D"):
            ws_b.column_dimensions[col_letter].width = 14

        wb.save(output_path)
        return output_path


class PerformanceExcelRenderer:
    def render(self, ctx: PerformanceExcelContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        perf = ctx.performance

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"
        ws["A1"] = f"Worker Performance - {ctx.worker.full_name}"
        ws["A1"].font = TITLE_FONT

        out = _OverviewWriter(ws)
        out.kv("Worker ID", ctx.worker.id)
        out.kv("Worker name", ctx.worker.full_name)
        out.kv("Generated at", ctx.generated_at.isoformat(timespec="seconds"))
        out.skip()
        out.kv("Overall score", perf.overall_score)
        out.kv("Base score", perf.base_score)
        out.kv("Grade", perf.performance_grade)
        out.kv("Tasks", perf.total_tasks)
        out.kv("Projects", perf.total_projects)
        out.kv("Avg project completion (%)", perf.project_metrics.average_project_completion)
        out.skip()
        out.kv("Raw task score", perf.task_metrics.raw_score)
        out.kv("Max possible score", perf.task_metrics.max_possible_score)
        out.kv("Total penalty", perf.status_penalties.total_penalty)
        out.lines("Insights", perf.insights)
        out.lines("Recommendations", perf.recommendations)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Penalties ----------------
        ws_p = wb.create_sheet("Penalties")
        _header_row(ws_p, ["Type", "Penalty", "Project", "Phase", "Task", "Reason"])
        for r, entry in enumerate(perf.status_penalties.penalty_breakdown, start=2):
            _data_row(
                ws_p,
                r,
                [
                    entry.type,
                    entry.penalty,
                    entry.project_name,
                    entry.phase_name or "",
                    entry.task_name or "",
                    entry.reason,
                ],
            )
        ws_p.column_dimensions["A"].width = 10
        ws_p.column_dimensions["B"].width = 10
        for col_letter in ("C", "D", "E"):
            ws_p.column_dimensions[col_letter].width = 24
        ws_p.column_dimensions["F"].width = 50

        wb.save(output_path)
        return output_path
