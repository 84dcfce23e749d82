"""Pay statement calculation."""

from driver_payroll.calculators.aggregator import PayStatementAggregator
from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.trip_pricing import calculate_trip_amount

__all__ = [
    "PayStatementAggregator",
    "StatementItemBuilder",
    "calculate_trip_amount",
]
