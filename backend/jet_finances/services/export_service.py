"""
Spreadsheet export for the expenses-by-month report.

build_table lays the matrix out as a library-neutral table of styled cells;
to_xlsx maps that table onto an openpyxl workbook.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from io import BytesIO
from typing import Any, List, Optional, Tuple
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from jet_finances.services.report_service import ReportMatrix, ReportRow

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE = "Expenses by Month"

# Style tags
HEADER = "header"
SUBHEADER = "subheader"
LABEL = "label"
USD_VALUE = "usd"
AED_VALUE = "aed"
SUMMARY_LABEL = "summary_label"
SUMMARY_USD = "summary_usd"
SUMMARY_AED = "summary_aed"

LABEL_COLUMN_WIDTH = 30
DATA_COLUMN_WIDTH = 15

USD_NUMBER_FORMAT = '"$"#,##0.00'
AED_NUMBER_FORMAT = '#,##0.00'

HEADER_FILL = "D9D9D9"
SUMMARY_FILL = "E5E7EB"

CENT = Decimal("0.01")


@dataclass
class RenderedCell:
    value: Any = None
    style: Optional[str] = None


@dataclass
class RenderedTable:
    """Grid of styled cells plus merged ranges and column widths (0-based)."""
    rows: List[List[RenderedCell]] = field(default_factory=list)
    # (row, first column, last column) spans on a single row
    merges: List[Tuple[int, int, int]] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)


def round_cents(value: Decimal) -> Decimal:
    """Round half-up to two decimal places for display."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _value_cells(row: ReportRow, months: List[str], summary: bool) -> List[RenderedCell]:
    usd_style = SUMMARY_USD if summary else USD_VALUE
    aed_style = SUMMARY_AED if summary else AED_VALUE
    cells = []
    for month in months:
        cell = row.cell(month)
        cells.append(RenderedCell(round_cents(cell.usd), usd_style))
        cells.append(RenderedCell(round_cents(cell.aed), aed_style))
    return cells


def build_table(matrix: ReportMatrix) -> RenderedTable:
    """
    Lay the report matrix out as a table.

    Row 0 holds the "Category" header and one month label spanning two
    columns per month; row 1 the USD/AED sub-headers. Category rows follow,
    then Credit note, Total and Charter profit.
    """
    table = RenderedTable()

    header = [RenderedCell("Category", HEADER)]
    subheader = [RenderedCell(None, SUBHEADER)]
    for index, label in enumerate(matrix.month_labels):
        first_column = 1 + index * 2
        header.append(RenderedCell(label, HEADER))
        header.append(RenderedCell(None, HEADER))
        subheader.append(RenderedCell("USD", SUBHEADER))
        subheader.append(RenderedCell("AED", SUBHEADER))
        table.merges.append((0, first_column, first_column + 1))
    table.rows.append(header)
    table.rows.append(subheader)

    for row in matrix.category_rows:
        table.rows.append([RenderedCell(row.label, LABEL)] + _value_cells(row, matrix.months, summary=False))

    for row in (matrix.credit_note, matrix.total, matrix.charter_profit):
        table.rows.append([RenderedCell(row.label, SUMMARY_LABEL)] + _value_cells(row, matrix.months, summary=True))

    table.column_widths = [LABEL_COLUMN_WIDTH] + [DATA_COLUMN_WIDTH] * (len(matrix.months) * 2)
    return table


def _apply_style(cell, style: Optional[str]) -> None:
    bold = Font(bold=True)
    if style in (HEADER, SUBHEADER):
        cell.font = bold
        cell.fill = PatternFill(start_color=HEADER_FILL, end_color=HEADER_FILL, fill_type="solid")
        cell.alignment = Alignment(horizontal="center", vertical="center")
    elif style in (SUMMARY_LABEL, SUMMARY_USD, SUMMARY_AED):
        cell.font = bold
        cell.fill = PatternFill(start_color=SUMMARY_FILL, end_color=SUMMARY_FILL, fill_type="solid")

    if style in (USD_VALUE, SUMMARY_USD):
        cell.number_format = USD_NUMBER_FORMAT
        cell.alignment = Alignment(horizontal="right", vertical="center")
    elif style in (AED_VALUE, SUMMARY_AED):
        cell.number_format = AED_NUMBER_FORMAT
        cell.alignment = Alignment(horizontal="right", vertical="center")


def to_xlsx(table: RenderedTable) -> bytes:
    """Render a table into .xlsx bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for row_index, row in enumerate(table.rows, start=1):
        for column_index, rendered in enumerate(row, start=1):
            value = rendered.value
            if isinstance(value, Decimal):
                value = float(value)
            cell = ws.cell(row=row_index, column=column_index, value=value)
            _apply_style(cell, rendered.style)

    for row_index, first_column, last_column in table.merges:
        ws.merge_cells(
            start_row=row_index + 1,
            start_column=first_column + 1,
            end_row=row_index + 1,
            end_column=last_column + 1
        )

    for column_index, width in enumerate(table.column_widths, start=1):
        ws.column_dimensions[get_column_letter(column_index)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def report_filename(year_filter: str, ats: bool = False, today: Optional[date] = None) -> str:
    """File name for the export, e.g. expenses_by_month_current_ATS_2025-03-14.xlsx."""
    today = today or date.today()
    suffix = "_ATS" if ats else ""
    return f"expenses_by_month_{year_filter}{suffix}_{today.isoformat()}.xlsx"


def render_report(matrix: ReportMatrix) -> bytes:
    """Build and render the spreadsheet for a matrix."""
    table = build_table(matrix)
    content = to_xlsx(table)
    logger.debug(f"Rendered report workbook: {len(table.rows)} rows, {len(content)} bytes")
    return content
