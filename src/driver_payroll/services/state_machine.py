"""Pay statement state machine with transition validation."""

from __future__ import annotations

from driver_payroll.calculators.types import StatementStatus


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayStatementStateMachine:
    """State machine for pay statement status transitions.

    Allowed transitions:
    - draft → finalized
    - finalized → draft (reopen)
    - finalized → paid
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        StatementStatus.DRAFT: [StatementStatus.FINALIZED],
        StatementStatus.FINALIZED: [StatementStatus.DRAFT, StatementStatus.PAID],
        StatementStatus.PAID: [],  # Terminal state
    }

    # Statuses where the statement may still be regenerated or deleted
    EDITABLE = {StatementStatus.DRAFT}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if to_status not in {s.value for s in StatementStatus}:
            raise InvalidTransitionError(from_status, to_status, "unknown status")
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)

    @classmethod
    def is_editable(cls, status: str) -> bool:
        return status in cls.EDITABLE

    @classmethod
    def is_reopen(cls, from_status: str, to_status: str) -> bool:
        """Check if this transition is a reopen (finalized → draft)."""
        return from_status == StatementStatus.FINALIZED and to_status == StatementStatus.DRAFT

    @classmethod
    def get_next_statuses(cls, current_status: str) -> list[str]:
        """Get list of valid next statuses from current status."""
        return [s.value for s in cls.VALID_TRANSITIONS.get(current_status, [])]
