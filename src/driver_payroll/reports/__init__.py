"""Printable pay statement documents."""

from driver_payroll.reports.pdf import render_pay_statement_pdf

__all__ = ["render_pay_statement_pdf"]
