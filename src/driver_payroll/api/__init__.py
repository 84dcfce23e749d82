"""HTTP API for driver payroll."""
