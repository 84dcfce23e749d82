"""Tests for the PDF pay statement renderer."""

from datetime import date
from decimal import Decimal

import pytest
from reportlab.platypus import PageBreak, Paragraph, Table

from driver_payroll.calculators.aggregator import PayStatementAggregator
from driver_payroll.reports.pdf import (
    build_story,
    format_currency,
    format_date,
    format_rate,
    render_pay_statement_pdf,
)


@pytest.fixture
def statement(sample_trips, sample_expenses, sample_cash_advances, sample_deductions):
    return PayStatementAggregator.generate(
        company_id=1,
        driver_id=7,
        driver_name="Dana Reyes",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 15),
        trips=sample_trips,
        expenses=sample_expenses,
        cash_advances=sample_cash_advances,
        deductions=sample_deductions,
    )


def _tables(story):
    return [f for f in story if isinstance(f, Table)]


def _texts(story):
    return [f.getPlainText() for f in story if isinstance(f, Paragraph)]


class TestFormatting:
    """Test value formatting helpers."""

    def test_format_currency(self):
        assert format_currency(Decimal("1234.5")) == "$1,234.50"
        assert format_currency(Decimal("-147.3625")) == "-$147.36"
        assert format_currency(None) == "$0.00"
        assert format_currency(Decimal("NaN")) == "$NaN"

    def test_format_date(self):
        assert format_date(date(2025, 3, 1)) == "Mar 1, 2025"
        assert format_date(date(2025, 12, 15)) == "Dec 15, 2025"

    def test_format_rate(self, sample_trips):
        assert format_rate(sample_trips[0]) == "$1.50/mi"
        assert format_rate(sample_trips[1]) == "30%"
        assert format_rate(sample_trips[2]) == "$0.75"


class TestBuildStory:
    """Test statement layout."""

    def test_header_shows_company_and_status(self, statement):
        header = _tables(build_story(statement, "Lone Star Freight"))[0]

        assert header._cellvalues[0][0] == "Lone Star Freight"
        assert header._cellvalues[0][1] == "ID: NEW"
        assert header._cellvalues[1] == ["Pay Statement", "DRAFT"]

    def test_saved_statement_shows_id(self, statement):
        statement.id = 42
        statement.status = "finalized"
        header = _tables(build_story(statement, "NeoPay"))[0]

        assert header._cellvalues[0][1] == "ID: 42"
        assert header._cellvalues[1][1] == "FINALIZED"

    def test_driver_information(self, statement):
        info = _tables(build_story(statement, "NeoPay"))[1]

        assert info._cellvalues[1][1] == "Dana Reyes"
        assert info._cellvalues[1][3] == "Mar 1, 2025 - Mar 15, 2025"

    def test_payment_summary(self, statement):
        story = build_story(statement, "NeoPay")
        summary = _tables(story)[2]

        assert "Payment Summary" in _texts(story)
        assert summary._cellvalues == [
            ["Description", "Amount"],
            ["Trip Earnings (Gross Pay)", "$555.75"],
            ["Tax Withholding", "-$83.36"],
            ["Deductions", "-$205.75"],
            ["Expenses", "-$214.00"],
            ["Cash Advances", "-$200.00"],
            ["Net Pay", "-$147.36"],
        ]

    def test_detail_sections_each_on_new_page(self, statement):
        story = build_story(statement, "NeoPay")
        headers = [
            t._cellvalues[0][0]
            for t in _tables(story)
            if len(t._cellvalues) == 1 and len(t._cellvalues[0]) == 1
        ]

        assert headers == [
            "Trip Details",
            "Expense Details",
            "Cash Advance Details",
            "Deduction Details",
        ]
        assert sum(isinstance(f, PageBreak) for f in story) == 4

    def test_deduction_table_lists_tax(self, statement):
        deduction_table = _tables(build_story(statement, "NeoPay"))[-1]

        assert deduction_table._cellvalues[0] == ["Date", "Type", "Description", "Amount"]
        assert deduction_table._cellvalues[-1][1:] == ["Tax", "Tax Withholding", "$83.36"]
        assert len(deduction_table._cellvalues) == 4

    def test_trip_rows(self, statement):
        trip_table = _tables(build_story(statement, "NeoPay"))[4]

        assert trip_table._cellvalues[1] == [
            "Mar 3, 2025",
            "Austin",
            "Dallas",
            "250 mi",
            "",
            "$1.50/mi",
            "$375.00",
        ]

    def test_empty_statement_has_summary_only(self):
        empty = PayStatementAggregator.generate(
            company_id=1,
            driver_id=7,
            driver_name="Dana Reyes",
            period_start=date(2025, 3, 1),
            period_end=date(2025, 3, 15),
            trips=[],
            expenses=[],
            cash_advances=[],
            deductions=[],
        )
        story = build_story(empty, "NeoPay")

        assert not any(isinstance(f, PageBreak) for f in story)
        assert len(_tables(story)) == 3

    def test_trip_details_paragraph(self, statement):
        statement.trip_details = "Dallas & Houston lanes"
        texts = _texts(build_story(statement, "NeoPay"))

        assert "Trip Details" in texts
        assert "Dallas & Houston lanes" in texts


class TestRender:
    """Test PDF rendering."""

    def test_renders_pdf_bytes(self, statement):
        content = render_pay_statement_pdf(statement, "Lone Star Freight")

        assert content.startswith(b"%PDF-")
        assert content.rstrip().endswith(b"%%EOF")

    def test_renders_empty_statement(self):
        empty = PayStatementAggregator.generate(
            company_id=1,
            driver_id=7,
            driver_name="Dana Reyes",
            period_start=date(2025, 3, 1),
            period_end=date(2025, 3, 15),
            trips=None,
            expenses=None,
            cash_advances=None,
            deductions=None,
        )

        assert render_pay_statement_pdf(empty).startswith(b"%PDF-")
