from .base import ColumnDefinition, TableModel
from .cities import BASE_CITY_ID, CITIES, CityProfile, get_city
from .expenses import (
    ONE_TIME_CATEGORIES,
    RECURRING_CATEGORIES,
    OneTimeExpense,
    OneTimeExpenseTableModel,
    RecurringExpense,
    RecurringExpenseTableModel,
    dataframe_to_one_time_expenses,
    dataframe_to_recurring_expenses,
    one_time_from_payload,
    recurring_from_payload,
    validate_expenses,
)
from .profile import FinancialProfile
from .strategies import STRATEGIES, StrategyVariant, get_strategy, list_strategy_ids

__all__ = [
    "BASE_CITY_ID",
    "CITIES",
    "ONE_TIME_CATEGORIES",
    "RECURRING_CATEGORIES",
    "STRATEGIES",
    "CityProfile",
    "ColumnDefinition",
    "FinancialProfile",
    "OneTimeExpense",
    "OneTimeExpenseTableModel",
    "RecurringExpense",
    "RecurringExpenseTableModel",
    "StrategyVariant",
    "TableModel",
    "dataframe_to_one_time_expenses",
    "dataframe_to_recurring_expenses",
    "get_city",
    "get_strategy",
    "list_strategy_ids",
    "one_time_from_payload",
    "recurring_from_payload",
    "validate_expenses",
]
