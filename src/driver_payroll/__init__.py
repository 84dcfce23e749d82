"""Driver pay statements for fleet payroll."""

__version__ = "0.1.0"
