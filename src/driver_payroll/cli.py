"""Driver payroll command line interface.

Provides offline tools for:
- Generating a pay statement from a JSON activity file
- Pricing a single trip

Usage:
    python -m driver_payroll.cli generate --input activity.json --pdf statement.pdf
    python -m driver_payroll.cli trip-amount --distance 250 --rate 0.55 --rate-type per_mile

The activity file holds one driver and period::

    {
      "company_id": 1, "driver_id": 7, "driver_name": "Dana Reyes",
      "period_start": "2025-03-01", "period_end": "2025-03-15",
      "trips": [{"trip_date": "2025-03-03", "origin": "Austin", "destination": "Dallas",
                 "distance": "195", "rate": "0.55", "rate_type": "per_mile"}],
      "expenses": [], "cash_advances": [], "deductions": []
    }

Trips without an ``amount`` are priced from their rate type.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable

from driver_payroll.calculators.aggregator import PayStatementAggregator
from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.trip_pricing import calculate_trip_amount, to_decimal
from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    PayStatementData,
    RateType,
    TripRecord,
)
from driver_payroll.config import get_settings
from driver_payroll.reports import render_pay_statement_pdf

logger = logging.getLogger(__name__)


class ActivityFileError(ValueError):
    """Raised when an activity file is missing required fields."""


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_decimal(s: str) -> Decimal:
    """Parse decimal string."""
    try:
        return Decimal(s)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid number: {s!r}")


def _field(raw: dict[str, Any], *names: str) -> Any:
    for name in names:
        if raw.get(name) is not None:
            return raw[name]
    raise ActivityFileError(f"missing field '{names[0]}' in {raw}")


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else to_decimal(value)


def load_activity(
    data: dict[str, Any],
) -> tuple[
    dict[str, Any],
    list[TripRecord],
    list[ExpenseRecord],
    list[CashAdvanceRecord],
    list[DeductionRecord],
]:
    """Turn a decoded activity document into header fields and records."""
    company_id = int(_field(data, "company_id"))
    driver_id = int(_field(data, "driver_id"))
    header = {
        "company_id": company_id,
        "driver_id": driver_id,
        "driver_name": str(_field(data, "driver_name")),
        "period_start": parse_date(_field(data, "period_start")),
        "period_end": parse_date(_field(data, "period_end")),
        "trip_details": data.get("trip_details"),
    }

    trips = []
    for raw in data.get("trips") or []:
        distance = to_decimal(_field(raw, "distance"))
        rate = to_decimal(_field(raw, "rate"))
        rate_type = str(_field(raw, "rate_type"))
        hours = _optional_decimal(raw.get("hours_worked"))
        amount = raw.get("amount")
        trips.append(
            TripRecord(
                id=raw.get("id"),
                company_id=company_id,
                driver_id=driver_id,
                trip_date=parse_date(_field(raw, "trip_date", "date")),
                origin=str(_field(raw, "origin")),
                destination=str(_field(raw, "destination")),
                distance=distance,
                rate=rate,
                rate_type=rate_type,
                hours_worked=hours,
                amount=(
                    calculate_trip_amount(distance, rate, rate_type, hours)
                    if amount is None
                    else to_decimal(amount)
                ),
                status=raw.get("status", "completed"),
                load_id=raw.get("load_id"),
            )
        )

    expenses = [
        ExpenseRecord(
            id=raw.get("id"),
            company_id=company_id,
            driver_id=driver_id,
            expense_date=parse_date(_field(raw, "expense_date", "date")),
            category=str(raw.get("category", "other")),
            amount=to_decimal(_field(raw, "amount")),
            description=str(raw.get("description", "")),
            reimbursable=bool(raw.get("reimbursable", False)),
            reimbursement_status=raw.get("reimbursement_status"),
        )
        for raw in data.get("expenses") or []
    ]

    advances = [
        CashAdvanceRecord(
            id=raw.get("id"),
            company_id=company_id,
            driver_id=driver_id,
            advance_date=parse_date(_field(raw, "advance_date", "date")),
            amount=to_decimal(_field(raw, "amount")),
            description=str(raw.get("description", "")),
            status=raw.get("status", "approved"),
        )
        for raw in data.get("cash_advances") or []
    ]

    deductions = [
        DeductionRecord(
            id=raw.get("id"),
            company_id=company_id,
            driver_id=driver_id,
            deduction_type=str(raw.get("deduction_type", "other")),
            description=str(raw.get("description", "")),
            amount=to_decimal(_field(raw, "amount")),
            deduction_date=parse_date(_field(raw, "deduction_date", "date")),
        )
        for raw in data.get("deductions") or []
    ]

    return header, trips, expenses, advances, deductions


def statement_to_dict(statement: PayStatementData) -> dict[str, Any]:
    """JSON-ready view of a statement: totals as strings, plus signed items."""
    return {
        "company_id": statement.company_id,
        "driver_id": statement.driver_id,
        "driver_name": statement.driver_name,
        "period_start": statement.period_start.isoformat(),
        "period_end": statement.period_end.isoformat(),
        "generated_date": statement.generated_date.isoformat(),
        "status": statement.status,
        "trip_details": statement.trip_details,
        "totals": {name: str(value) for name, value in statement.totals().items()},
        "items": [item.to_dict() for item in StatementItemBuilder.build_items(statement)],
    }


class PayrollCli:
    """Driver payroll command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m driver_payroll.cli",
            description="Driver pay statement tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # generate command
        generate = subparsers.add_parser(
            "generate",
            help="Generate a pay statement from a JSON activity file",
        )
        generate.add_argument(
            "--input",
            type=Path,
            required=True,
            help="Path to the activity JSON file",
        )
        generate.add_argument(
            "--tax-percent",
            type=parse_decimal,
            help="Tax withholding percent (default: DEFAULT_TAX_WITHHOLDING_PERCENT)",
        )
        generate.add_argument(
            "--pdf",
            type=Path,
            help="Also write the statement as a PDF to this path",
        )
        generate.add_argument(
            "--company-name",
            type=str,
            help="Company name printed on the PDF (default: COMPANY_NAME)",
        )

        # trip-amount command
        trip_amount = subparsers.add_parser(
            "trip-amount",
            help="Price a single trip",
        )
        trip_amount.add_argument("--distance", type=parse_decimal, required=True)
        trip_amount.add_argument("--rate", type=parse_decimal, required=True)
        trip_amount.add_argument(
            "--rate-type",
            type=str,
            required=True,
            help=f"One of: {', '.join(t.value for t in RateType)}",
        )
        trip_amount.add_argument(
            "--hours",
            type=parse_decimal,
            help="Hours worked (hourly trips only)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        handlers: dict[str, Callable[..., int]] = {
            "generate": self._cmd_generate,
            "trip-amount": self._cmd_trip_amount,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_generate(self, args: argparse.Namespace) -> int:
        """Generate a pay statement."""
        settings = get_settings()
        try:
            with args.input.open() as f:
                data = json.load(f, parse_float=Decimal)
            header, trips, expenses, advances, deductions = load_activity(data)
        except (OSError, ValueError, InvalidOperation) as e:
            print(f"Cannot read {args.input}: {e}", file=sys.stderr)
            return 1

        if header["period_start"] > header["period_end"]:
            print(
                f"Period start {header['period_start']} is after "
                f"period end {header['period_end']}",
                file=sys.stderr,
            )
            return 1

        tax_percent = (
            args.tax_percent
            if args.tax_percent is not None
            else settings.default_tax_withholding_percent
        )
        statement = PayStatementAggregator.generate(
            trips=trips,
            expenses=expenses,
            cash_advances=advances,
            deductions=deductions,
            tax_percent=tax_percent,
            **header,
        )
        logger.info(
            "Generated pay statement for driver %s from %s", statement.driver_id, args.input
        )
        print(json.dumps(statement_to_dict(statement), indent=2))

        if args.pdf:
            company_name = args.company_name or settings.company_name
            args.pdf.write_bytes(render_pay_statement_pdf(statement, company_name))
            print(f"Wrote {args.pdf}", file=sys.stderr)

        return 0

    def _cmd_trip_amount(self, args: argparse.Namespace) -> int:
        """Price one trip."""
        amount = calculate_trip_amount(args.distance, args.rate, args.rate_type, args.hours)
        print(amount)
        return 0


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
