"""Excel weekly grid export for generated combinations."""

from collections import defaultdict
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..constants import LUNCH_AFTER_PERIOD, LUNCH_BREAK, PERIODS, get_period_time_range
from ..models import ActivityType, Day
from .models import GenerationResult
from .summary import summarize

# Cell fill colours by activity type (hex RGB)
ACTIVITY_COLORS = {
    ActivityType.LECTURE: "FBBF24",
    ActivityType.LAB: "7DD3FC",
    ActivityType.TUTORIAL: "34D399",
    ActivityType.WORKSHOP: "C084FC",
    ActivityType.FIELDWORK: "D97706",
    ActivityType.PRACTICUM: "F87171",
    ActivityType.OTHER: "9CA3AF",
}
OVERLAP_COLOR = "EF4444"
LUNCH_COLOR = "E5E7EB"

DAYS_ORDER = list(Day)

# Layout: row 1 title, row 2 summary, row 4 headers, grid from row 5
TITLE_ROW = 1
SUMMARY_ROW = 2
HEADER_ROW = 4
FIRST_GRID_ROW = 5
TIME_COLUMN = 1
FIRST_DAY_COLUMN = 2

TIME_COLUMN_WIDTH = 14.0
DAY_COLUMN_WIDTH = 24.0

FONT_TITLE = Font(name="Calibri", size=14, bold=True)
FONT_HEADER = Font(name="Calibri", size=11, bold=True)
FONT_CELL = Font(name="Calibri", size=10, bold=False)

ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def period_row(period: int) -> int:
    """Worksheet row of a period; periods after lunch shift down by one."""
    offset = 1 if period > LUNCH_AFTER_PERIOD else 0
    return FIRST_GRID_ROW + (period - 1) + offset


def day_column(day: Day) -> int:
    return FIRST_DAY_COLUMN + day.value


def build_grid(result: GenerationResult) -> dict[tuple[Day, int], list[tuple[str, ActivityType]]]:
    """Map each (day, period) to the labelled activities that occupy it."""
    grid: dict[tuple[Day, int], list[tuple[str, ActivityType]]] = defaultdict(list)
    for section in result.sections:
        for activity in section.activities:
            for block in activity.blocks:
                grid[(block.day, block.period)].append(
                    (f"{section.label} ({activity.activity_type.value})", activity.activity_type)
                )
    return grid


class ScheduleGridExporter:
    """Writes one weekly grid worksheet per generated combination."""

    def __init__(self, title: str = "Weekly schedule"):
        self.title = title

    def export(self, results: list[GenerationResult], output_path: Path | str) -> Path:
        """Write results to an .xlsx workbook.

        Args:
            results: Combinations to export, one worksheet each
            output_path: Path to output Excel file

        Returns:
            Path of the written workbook
        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        wb.remove(wb.active)

        for result in results:
            ws = wb.create_sheet(title=result.id[:31])
            self._write_sheet(ws, result)

        if not results:
            ws = wb.create_sheet(title="No results")
            ws.cell(row=TITLE_ROW, column=1, value="No valid combination found").font = FONT_TITLE

        wb.save(output)
        return output

    def _write_sheet(self, ws, result: GenerationResult) -> None:
        summary = summarize(result)

        ws.cell(row=TITLE_ROW, column=1, value=f"{self.title} - {result.id}").font = FONT_TITLE
        ws.cell(
            row=SUMMARY_ROW,
            column=1,
            value=f"{summary.description} | {summary.occupied_block_count} blocks",
        )

        self._write_headers(ws)
        self._write_lunch_row(ws)

        grid = build_grid(result)
        for day in DAYS_ORDER:
            for period in PERIODS:
                entries = grid.get((day, period), [])
                cell = ws.cell(row=period_row(period), column=day_column(day))
                cell.border = THIN_BORDER
                cell.alignment = ALIGN_CENTER
                cell.font = FONT_CELL
                if not entries:
                    continue

                cell.value = "\n".join(label for label, _ in entries)
                color = OVERLAP_COLOR if len(entries) > 1 else ACTIVITY_COLORS[entries[0][1]]
                cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")

        ws.column_dimensions[get_column_letter(TIME_COLUMN)].width = TIME_COLUMN_WIDTH
        for day in DAYS_ORDER:
            ws.column_dimensions[get_column_letter(day_column(day))].width = DAY_COLUMN_WIDTH

    def _write_headers(self, ws) -> None:
        header = ws.cell(row=HEADER_ROW, column=TIME_COLUMN, value="Period")
        header.font = FONT_HEADER
        header.alignment = ALIGN_CENTER
        header.border = THIN_BORDER

        for day in DAYS_ORDER:
            cell = ws.cell(row=HEADER_ROW, column=day_column(day), value=day.label)
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

        for period in PERIODS:
            cell = ws.cell(
                row=period_row(period),
                column=TIME_COLUMN,
                value=f"{period}\n{get_period_time_range(period)}",
            )
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

    def _write_lunch_row(self, ws) -> None:
        row = period_row(LUNCH_AFTER_PERIOD) + 1
        fill = PatternFill(start_color=LUNCH_COLOR, end_color=LUNCH_COLOR, fill_type="solid")
        label = ws.cell(
            row=row,
            column=TIME_COLUMN,
            value=f"Lunch\n{LUNCH_BREAK['start']}-{LUNCH_BREAK['end']}",
        )
        label.font = FONT_CELL
        label.alignment = ALIGN_CENTER
        for column in range(TIME_COLUMN, day_column(DAYS_ORDER[-1]) + 1):
            ws.cell(row=row, column=column).fill = fill


def generate_schedule_excel(results: list[GenerationResult], output_path: Path | str) -> Path:
    """Convenience wrapper around ScheduleGridExporter."""
    return ScheduleGridExporter().export(results, output_path)
