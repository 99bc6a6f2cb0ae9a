from __future__ import annotations


class FirePlannerError(Exception):
    """Base class for planner errors."""


class InvalidProfile(FirePlannerError):
    """Profile cannot be used for a calculation (ages out of order, negative money)."""


class InvalidExpense(FirePlannerError):
    """A single expense row is unusable.

    Carries the expense id so callers can point at the offending row.
    """

    def __init__(self, message: str, expense_id: str | None = None) -> None:
        super().__init__(message)
        self.expense_id = expense_id
