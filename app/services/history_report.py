"""
GymPortal API - Monthly Workout History Report.

Renders a month of completions as a paginated PDF table with reportlab.
Each row's height follows the wrapped height of the workout title, and
the shaded header is redrawn at the top of every page.
"""

import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from app.models.mongodb import WorkoutDocument

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 10
LEADING = 12
CELL_PADDING = 5

# (header, width in points)
COLUMNS: Tuple[Tuple[str, float], ...] = (
    ("Date", 80),
    ("Workout", 235),
    ("Duration", 80),
    ("Category", 100),
)
TITLE_COLUMN_WIDTH = COLUMNS[1][1]

HEADER_HEIGHT = LEADING + 2 * CELL_PADDING
MIN_ROW_HEIGHT = LEADING + 2 * CELL_PADDING
TITLE_BLOCK_HEIGHT = 70
FOOTER_HEIGHT = 20

PAGE_TOP = PAGE_HEIGHT - MARGIN
PAGE_BOTTOM = MARGIN + FOOTER_HEIGHT
# Room for rows below the header; the first page also carries the title block.
FIRST_PAGE_SPACE = PAGE_TOP - TITLE_BLOCK_HEIGHT - HEADER_HEIGHT - PAGE_BOTTOM
PAGE_SPACE = PAGE_TOP - HEADER_HEIGHT - PAGE_BOTTOM
# Tallest title that still fits on any page.
MAX_TITLE_LINES = int((FIRST_PAGE_SPACE - 2 * CELL_PADDING) // LEADING)
ELLIPSIS = "..."

HEADER_FILL = colors.HexColor("#d9d9d9")
ZEBRA_FILL = colors.HexColor("#f2f2f2")
GRID_COLOR = colors.HexColor("#b0b0b0")

NO_COMPLETIONS_NOTICE = "No completed workouts for this month."


@dataclass
class ReportRow:
    day: date
    title_lines: List[str]
    duration: str
    category: str
    height: float


def format_duration(minutes: float) -> str:
    return f"{minutes:g} min"


def wrap_title(title: str) -> List[str]:
    """
    Wrap a title to the Workout column.

    Titles longer than MAX_TITLE_LINES are cut and the last kept line
    ends with an ellipsis, so a single row never outgrows a page.
    """
    width = TITLE_COLUMN_WIDTH - 2 * CELL_PADDING
    lines = simpleSplit(title, FONT, FONT_SIZE, width)
    if not lines:
        return [""]
    if len(lines) <= MAX_TITLE_LINES:
        return lines

    lines = lines[:MAX_TITLE_LINES]
    last = lines[-1]
    while last and stringWidth(last + ELLIPSIS, FONT, FONT_SIZE) > width:
        last = last[:-1]
    lines[-1] = last.rstrip() + ELLIPSIS
    return lines


def build_rows(entries: Sequence[Tuple[date, WorkoutDocument]]) -> List[ReportRow]:
    rows = []
    for day, workout in entries:
        lines = wrap_title(workout.title)
        rows.append(ReportRow(
            day=day,
            title_lines=lines,
            duration=format_duration(workout.total_duration),
            category=workout.category.title(),
            height=max(MIN_ROW_HEIGHT, len(lines) * LEADING + 2 * CELL_PADDING),
        ))
    return rows


def plan_pages(
    rows: Sequence[ReportRow],
    first_page_space: float,
    page_space: float
) -> List[List[ReportRow]]:
    """
    Split rows into pages.

    A new page starts whenever the next row does not fit in the space
    left below the header. Space values exclude the header itself.
    """
    pages: List[List[ReportRow]] = [[]]
    remaining = first_page_space
    for row in rows:
        if pages[-1] and row.height > remaining:
            pages.append([])
            remaining = page_space
        pages[-1].append(row)
        remaining -= row.height
    return pages


def _draw_title_block(pdf: canvas.Canvas, title: str, subtitle: str, top: float) -> float:
    pdf.setFillColor(colors.black)
    pdf.setFont(FONT_BOLD, 18)
    pdf.drawString(MARGIN, top - 18, title)
    pdf.setFont(FONT, 12)
    pdf.drawString(MARGIN, top - 40, subtitle)
    return top - TITLE_BLOCK_HEIGHT


def _draw_header(pdf: canvas.Canvas, top: float) -> float:
    table_width = sum(width for _, width in COLUMNS)
    pdf.setFillColor(HEADER_FILL)
    pdf.setStrokeColor(GRID_COLOR)
    pdf.rect(MARGIN, top - HEADER_HEIGHT, table_width, HEADER_HEIGHT, stroke=1, fill=1)

    pdf.setFillColor(colors.black)
    pdf.setFont(FONT_BOLD, FONT_SIZE)
    x = MARGIN
    for label, width in COLUMNS:
        pdf.drawString(x + CELL_PADDING, top - CELL_PADDING - FONT_SIZE, label)
        x += width
    return top - HEADER_HEIGHT


def _draw_row(pdf: canvas.Canvas, row: ReportRow, top: float, shaded: bool) -> float:
    table_width = sum(width for _, width in COLUMNS)
    if shaded:
        pdf.setFillColor(ZEBRA_FILL)
        pdf.rect(MARGIN, top - row.height, table_width, row.height, stroke=0, fill=1)

    pdf.setStrokeColor(GRID_COLOR)
    pdf.line(MARGIN, top - row.height, MARGIN + table_width, top - row.height)

    pdf.setFillColor(colors.black)
    pdf.setFont(FONT, FONT_SIZE)
    baseline = top - CELL_PADDING - FONT_SIZE
    cells = [[row.day.isoformat()], row.title_lines, [row.duration], [row.category]]
    x = MARGIN
    for (_, width), lines in zip(COLUMNS, cells):
        for i, line in enumerate(lines):
            pdf.drawString(x + CELL_PADDING, baseline - i * LEADING, line)
        x += width
    return top - row.height


def _draw_footer(pdf: canvas.Canvas, page_number: int, page_count: int) -> None:
    pdf.setFillColor(colors.grey)
    pdf.setFont(FONT, 8)
    pdf.drawRightString(PAGE_WIDTH - MARGIN, MARGIN / 2, f"Page {page_number} of {page_count}")


def render_monthly_report(
    entries: Sequence[Tuple[date, WorkoutDocument]],
    year: int,
    month: int,
    title: str = "Workout History",
    owner_label: Optional[str] = None
) -> bytes:
    """
    Render a month's completions as a PDF.

    Args:
        entries: (day, workout) pairs sorted by day ascending.
        year: Report year.
        month: Report month (1-12).
        title: Heading printed on the first page.
        owner_label: Optional name shown next to the month.

    Returns:
        bytes: The PDF document.
    """
    month_label = date(year, month, 1).strftime("%B %Y")
    subtitle = f"{month_label} - {owner_label}" if owner_label else month_label

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"{title} {month_label}")

    y = _draw_title_block(pdf, title, subtitle, PAGE_TOP)

    if not entries:
        pdf.setFont(FONT, 11)
        pdf.drawString(MARGIN, y, NO_COMPLETIONS_NOTICE)
        _draw_footer(pdf, 1, 1)
        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    rows = build_rows(entries)
    pages = plan_pages(rows, first_page_space=FIRST_PAGE_SPACE, page_space=PAGE_SPACE)

    row_index = 0
    for page_number, page_rows in enumerate(pages, start=1):
        if page_number > 1:
            y = PAGE_TOP
        y = _draw_header(pdf, y)
        for row in page_rows:
            y = _draw_row(pdf, row, y, shaded=row_index % 2 == 1)
            row_index += 1
        _draw_footer(pdf, page_number, len(pages))
        pdf.showPage()

    pdf.save()
    logger.info(f"Rendered history report for {month_label}: {len(rows)} rows, {len(pages)} pages")
    return buffer.getvalue()
