from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, List

import pandas as pd

from ..errors import InvalidExpense
from .base import ColumnDefinition, TableModel

logger = logging.getLogger(__name__)

ONE_TIME_CATEGORIES = ["marriage", "house", "car", "education", "other"]
RECURRING_CATEGORIES = ["travel", "luxury", "health", "other"]


@dataclass(frozen=True)
class OneTimeExpense:
    id: str
    name: str
    amount: float  # today's value
    target_year: int
    category: str = "other"
    inflation_rate: float | None = None  # percent; None -> profile rate

    def effective_inflation(self, global_rate: float) -> float:
        return self.inflation_rate if self.inflation_rate is not None else global_rate

    def validate(self, current_year: int) -> None:
        if self.amount < 0:
            raise InvalidExpense(f"{self.name}: amount cannot be negative", self.id)
        if self.target_year < current_year:
            raise InvalidExpense(f"{self.name}: target year {self.target_year} is in the past", self.id)


@dataclass(frozen=True)
class RecurringExpense:
    id: str
    name: str
    monthly_amount: float
    start_year: int
    end_year: int | None = None  # open-ended when None
    category: str = "other"

    @property
    def annual_amount(self) -> float:
        return self.monthly_amount * 12.0

    def validate(self) -> None:
        if self.monthly_amount < 0:
            raise InvalidExpense(f"{self.name}: monthly amount cannot be negative", self.id)
        if self.end_year is not None and self.end_year < self.start_year:
            raise InvalidExpense(f"{self.name}: end year precedes start year", self.id)


def validate_expenses(
    one_time: Iterable[OneTimeExpense],
    recurring: Iterable[RecurringExpense],
    current_year: int,
) -> List[InvalidExpense]:
    """Check every row and return the problems instead of raising.

    The caller decides whether a flagged row is dropped or kept with a warning.
    """
    problems: List[InvalidExpense] = []
    for expense in one_time:
        try:
            expense.validate(current_year)
        except InvalidExpense as exc:
            problems.append(exc)
    for expense in recurring:
        try:
            expense.validate()
        except InvalidExpense as exc:
            problems.append(exc)
    for exc in problems:
        logger.warning("expense %s flagged: %s", exc.expense_id, exc)
    return problems


class OneTimeExpenseTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("ID", "ID", help="assigned by the editor"),
            ColumnDefinition("Name", "Name", required=True),
            ColumnDefinition("Category", "Category", kind="select", default="other", options=ONE_TIME_CATEGORIES),
            ColumnDefinition(
                "Amount",
                "Amount (today's value)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=10000.0,
                format="%.0f",
                required=True,
            ),
            ColumnDefinition("Target Year", "Target Year", kind="number", default=None, step=1.0, required=True),
            ColumnDefinition(
                "Inflation Rate (%)",
                "Inflation Rate (%)",
                kind="number",
                default=None,
                step=0.5,
                help="blank = use the profile inflation rate",
            ),
        ]
        super().__init__("one_time_expenses", columns)


class RecurringExpenseTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("ID", "ID", help="assigned by the editor"),
            ColumnDefinition("Name", "Name", required=True),
            ColumnDefinition("Category", "Category", kind="select", default="other", options=RECURRING_CATEGORIES),
            ColumnDefinition(
                "Monthly Amount",
                "Monthly Amount",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1000.0,
                format="%.0f",
                required=True,
            ),
            ColumnDefinition("Start Year", "Start Year", kind="number", default=None, step=1.0, required=True),
            ColumnDefinition("End Year", "End Year (empty=ongoing)", kind="number", default=None, step=1.0),
        ]
        super().__init__("recurring_expenses", columns)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _optional_float(value: Any) -> float | None:
    return None if _is_blank(value) else float(value)


def _optional_int(value: Any) -> int | None:
    return None if _is_blank(value) else int(float(value))


def _row_id(row: dict) -> str:
    raw = row.get("ID")
    return uuid.uuid4().hex if _is_blank(raw) else str(raw).strip()


def _category(row: dict, allowed: List[str]) -> str:
    category = "other" if _is_blank(row.get("Category")) else str(row["Category"]).strip().lower()
    return category if category in allowed else "other"


def dataframe_to_one_time_expenses(df: pd.DataFrame) -> List[OneTimeExpense]:
    rows: List[OneTimeExpense] = []
    for row in df.to_dict("records"):
        name = "" if _is_blank(row.get("Name")) else str(row["Name"]).strip()
        if not name:
            continue
        amount = _optional_float(row.get("Amount")) or 0.0
        target_year = _optional_int(row.get("Target Year"))
        if amount == 0.0 or target_year is None:
            continue
        rows.append(
            OneTimeExpense(
                id=_row_id(row),
                name=name,
                amount=amount,
                target_year=target_year,
                category=_category(row, ONE_TIME_CATEGORIES),
                inflation_rate=_optional_float(row.get("Inflation Rate (%)")),
            )
        )
    return rows


def dataframe_to_recurring_expenses(df: pd.DataFrame) -> List[RecurringExpense]:
    rows: List[RecurringExpense] = []
    for row in df.to_dict("records"):
        name = "" if _is_blank(row.get("Name")) else str(row["Name"]).strip()
        if not name:
            continue
        monthly = _optional_float(row.get("Monthly Amount")) or 0.0
        start_year = _optional_int(row.get("Start Year"))
        if monthly == 0.0 or start_year is None:
            continue
        rows.append(
            RecurringExpense(
                id=_row_id(row),
                name=name,
                monthly_amount=monthly,
                start_year=start_year,
                end_year=_optional_int(row.get("End Year")),
                category=_category(row, RECURRING_CATEGORIES),
            )
        )
    return rows


def _payload_items(items: Any, kind: str) -> List[dict]:
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise InvalidExpense(f"{kind} expenses must be a list")
    for item in items:
        if not isinstance(item, dict):
            raise InvalidExpense(f"malformed {kind} expense: expected an object, got {type(item).__name__}")
    return list(items)


def one_time_from_payload(items: Iterable[dict]) -> List[OneTimeExpense]:
    """Parse camelCase expense objects sent by the front-end."""
    expenses: List[OneTimeExpense] = []
    for item in _payload_items(items, "one-time"):
        try:
            expenses.append(
                OneTimeExpense(
                    id=str(item.get("id") or uuid.uuid4().hex),
                    name=str(item.get("name", "")).strip(),
                    amount=float(item.get("amount", 0.0) or 0.0),
                    target_year=int(item["targetYear"]),
                    category=str(item.get("category") or "other"),
                    inflation_rate=_optional_float(item.get("inflationRate")),
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidExpense(f"malformed one-time expense: {exc}", item.get("id")) from exc
    return expenses


def recurring_from_payload(items: Iterable[dict]) -> List[RecurringExpense]:
    expenses: List[RecurringExpense] = []
    for item in _payload_items(items, "recurring"):
        try:
            expenses.append(
                RecurringExpense(
                    id=str(item.get("id") or uuid.uuid4().hex),
                    name=str(item.get("name", "")).strip(),
                    monthly_amount=float(item.get("monthlyAmount", 0.0) or 0.0),
                    start_year=int(item["startYear"]),
                    end_year=_optional_int(item.get("endYear")),
                    category=str(item.get("category") or "other"),
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidExpense(f"malformed recurring expense: {exc}", item.get("id")) from exc
    return expenses
