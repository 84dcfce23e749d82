"""Pay statement PDF rendering."""

from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.types import PayStatementData, RateType, TripRecord

PRIMARY = colors.Color(66 / 255, 70 / 255, 229 / 255)
SECONDARY = colors.Color(41 / 255, 44 / 255, 143 / 255)
ACCENT = colors.Color(247 / 255, 148 / 255, 30 / 255)
LIGHT_GRAY = colors.Color(240 / 255, 240 / 255, 240 / 255)
ROW_GRAY = colors.Color(245 / 255, 245 / 255, 245 / 255)
MEDIUM_GRAY = colors.Color(200 / 255, 200 / 255, 200 / 255)
DARK_GRAY = colors.Color(100 / 255, 100 / 255, 100 / 255)

STATUS_COLORS = {
    "DRAFT": colors.Color(150 / 255, 150 / 255, 150 / 255),
    "FINALIZED": ACCENT,
    "PAID": colors.Color(46 / 255, 204 / 255, 113 / 255),
}

CONTENT_WIDTH = A4[0] - 40 * mm


def format_currency(amount: Decimal | None) -> str:
    """Format as US dollars, e.g. ``$1,234.56`` or ``-$12.00``."""
    if amount is None:
        amount = Decimal("0")
    if amount.is_nan():
        return "$NaN"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: date) -> str:
    """Format as ``Mar 1, 2025``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_rate(trip: TripRecord) -> str:
    if trip.rate_type == RateType.PER_MILE:
        return f"${trip.rate}/mi"
    if trip.rate_type == RateType.PERCENTAGE:
        return f"{trip.rate}%"
    if trip.rate_type == RateType.HOURLY:
        return f"${trip.rate}/hr"
    return f"${trip.rate}"


def _title(value: str | None) -> str:
    return value[:1].upper() + value[1:] if value else ""


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps ``Page i of n`` and the company footer on every page."""

    company_name = "NeoPay"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict[str, Any]] = []

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setStrokeColor(MEDIUM_GRAY)
        self.line(20 * mm, 17 * mm, width - 20 * mm, 17 * mm)
        self.setFont("Helvetica", 8)
        self.setFillColor(DARK_GRAY)
        self.drawString(20 * mm, 10 * mm, f"{self.company_name} Trucking Solutions")
        self.drawCentredString(
            width / 2, 10 * mm, f"Page {self._pageNumber} of {page_count}"
        )
        self.restoreState()


def _canvas_for(company_name: str) -> type[NumberedCanvas]:
    return type("StatementCanvas", (NumberedCanvas,), {"company_name": company_name})


def _detail_table(head: list[str], rows: list[list[str]], amount_col: int) -> Table:
    table = Table([head] + rows, repeatRows=1, hAlign="LEFT")
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), SECONDARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, MEDIUM_GRAY),
        ("ALIGN", (amount_col, 0), (amount_col, -1), "RIGHT"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for i in range(2, len(rows) + 1, 2):
        style.append(("BACKGROUND", (0, i), (-1, i), ROW_GRAY))
    table.setStyle(TableStyle(style))
    return table


def _section_header(title: str) -> Table:
    header = Table([[title]], colWidths=[CONTENT_WIDTH])
    header.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, -1), colors.white),
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 14),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    return header


def build_story(statement: PayStatementData, company_name: str) -> list[Any]:
    """Lay out the statement as a list of platypus flowables."""
    styles = getSampleStyleSheet()
    small_right = ParagraphStyle(
        "SmallRight", parent=styles["Normal"], fontSize=8, alignment=TA_RIGHT,
        textColor=DARK_GRAY, fontName="Helvetica-Oblique",
    )
    section_style = ParagraphStyle(
        "Section", parent=styles["Heading3"], textColor=SECONDARY
    )

    status = (statement.status or "draft").upper()
    story: list[Any] = []

    # Header band
    header = Table(
        [
            [company_name, f"ID: {statement.id or 'NEW'}"],
            ["Pay Statement", status],
        ],
        colWidths=[CONTENT_WIDTH - 45 * mm, 45 * mm],
    )
    header.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, -1), colors.white),
        ("FONTNAME", (0, 0), (0, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (0, 0), 24),
        ("FONTSIZE", (0, 1), (0, 1), 14),
        ("FONTSIZE", (1, 0), (1, -1), 9),
        ("ALIGN", (1, 0), (1, -1), "CENTER"),
        ("BACKGROUND", (1, 1), (1, 1), STATUS_COLORS.get(status, STATUS_COLORS["DRAFT"])),
        ("FONTNAME", (1, 1), (1, 1), "Helvetica-Bold"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    story.append(header)
    story.append(Spacer(1, 3 * mm))
    story.append(
        Paragraph(f"Generated on {format_date(statement.generated_date)}", small_right)
    )
    story.append(Spacer(1, 3 * mm))

    # Driver information
    info = Table(
        [
            ["Driver Information", "", "", ""],
            [
                "Driver:",
                statement.driver_name,
                "Pay Period:",
                f"{format_date(statement.period_start)} - {format_date(statement.period_end)}",
            ],
        ],
        colWidths=[25 * mm, 55 * mm, 25 * mm, CONTENT_WIDTH - 105 * mm],
    )
    info.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), LIGHT_GRAY),
        ("SPAN", (0, 0), (-1, 0)),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("TEXTCOLOR", (0, 0), (-1, 0), SECONDARY),
        ("FONTSIZE", (0, 0), (-1, 0), 12),
        ("FONTNAME", (1, 1), (1, 1), "Helvetica-Bold"),
        ("FONTNAME", (3, 1), (3, 1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 1), (-1, -1), 10),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    story.append(info)
    story.append(Spacer(1, 6 * mm))

    if statement.trip_details:
        story.append(Paragraph("Trip Details", section_style))
        story.append(Paragraph(escape(statement.trip_details), styles["Normal"]))
        story.append(Spacer(1, 6 * mm))

    # Payment summary
    story.append(Paragraph("Payment Summary", section_style))
    summary = Table(
        [
            ["Description", "Amount"],
            ["Trip Earnings (Gross Pay)", format_currency(statement.gross_pay)],
            ["Tax Withholding", f"-{format_currency(statement.tax_withholding)}"],
            ["Deductions", f"-{format_currency(statement.deductions_total)}"],
            ["Expenses", f"-{format_currency(statement.expense_total)}"],
            ["Cash Advances", f"-{format_currency(statement.cash_advance_total)}"],
            ["Net Pay", format_currency(statement.net_pay)],
        ],
        colWidths=[CONTENT_WIDTH - 40 * mm, 40 * mm],
    )
    summary.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), SECONDARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -2), 0.5, MEDIUM_GRAY),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("BACKGROUND", (0, -1), (-1, -1), colors.Color(ACCENT.red, ACCENT.green, ACCENT.blue, 0.1)),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, -1), (-1, -1), 12),
        ("TEXTCOLOR", (1, -1), (1, -1), ACCENT),
    ]))
    story.append(summary)

    if statement.trips:
        rows = [
            [
                format_date(t.trip_date),
                t.origin[:20],
                t.destination[:20],
                f"{t.distance} mi",
                f"{t.hours_worked or 0} hrs" if t.rate_type == RateType.HOURLY else "",
                format_rate(t),
                format_currency(t.amount),
            ]
            for t in statement.trips
        ]
        story += [
            PageBreak(),
            _section_header("Trip Details"),
            Spacer(1, 4 * mm),
            _detail_table(
                ["Date", "Origin", "Destination", "Distance", "Hours", "Rate", "Amount"],
                rows,
                amount_col=6,
            ),
        ]

    if statement.expenses:
        rows = [
            [
                format_date(e.expense_date),
                _title(e.category),
                e.description[:40],
                "Yes" if e.reimbursable else "No",
                _title(e.reimbursement_status),
                format_currency(e.amount),
            ]
            for e in statement.expenses
        ]
        story += [
            PageBreak(),
            _section_header("Expense Details"),
            Spacer(1, 4 * mm),
            _detail_table(
                ["Date", "Category", "Description", "Reimbursable", "Status", "Amount"],
                rows,
                amount_col=5,
            ),
        ]

    if statement.cash_advances:
        rows = [
            [
                format_date(a.advance_date),
                a.description[:60],
                _title(a.status),
                format_currency(a.amount),
            ]
            for a in statement.cash_advances
        ]
        story += [
            PageBreak(),
            _section_header("Cash Advance Details"),
            Spacer(1, 4 * mm),
            _detail_table(["Date", "Description", "Status", "Amount"], rows, amount_col=3),
        ]

    if statement.deductions:
        rows = [
            [
                format_date(d.deduction_date),
                _title(d.deduction_type),
                d.description[:60],
                format_currency(d.amount),
            ]
            for d in statement.deductions
        ]
        rows.append([
            format_date(statement.generated_date),
            "Tax",
            StatementItemBuilder.TAX_WITHHOLDING_DESCRIPTION,
            format_currency(statement.tax_withholding),
        ])
        story += [
            PageBreak(),
            _section_header("Deduction Details"),
            Spacer(1, 4 * mm),
            _detail_table(["Date", "Type", "Description", "Amount"], rows, amount_col=3),
        ]

    return story


def render_pay_statement_pdf(
    statement: PayStatementData, company_name: str = "NeoPay"
) -> bytes:
    """Render a pay statement to PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=25 * mm,
        title=f"Pay Statement - {statement.driver_name}",
        author=company_name,
    )
    doc.build(build_story(statement, company_name), canvasmaker=_canvas_for(company_name))
    buffer.seek(0)
    return buffer.getvalue()
