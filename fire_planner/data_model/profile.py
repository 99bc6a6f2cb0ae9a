# data_model/profile.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from ..errors import InvalidProfile

CURRENCY_FIELDS = ("current_savings", "monthly_expenses", "monthly_income", "current_monthly_savings")


@dataclass(frozen=True)
class FinancialProfile:
    current_age: int
    retirement_age: int
    life_expectancy: int
    current_savings: float
    monthly_expenses: float
    monthly_income: float
    current_monthly_savings: float
    expected_return: float  # annual, percent
    inflation_rate: float  # annual, percent

    @property
    def years_to_retirement(self) -> int:
        return self.retirement_age - self.current_age

    @property
    def months_to_retirement(self) -> int:
        return self.years_to_retirement * 12

    @property
    def years_in_retirement(self) -> int:
        return self.life_expectancy - self.retirement_age

    def validate(self) -> None:
        if self.retirement_age <= self.current_age:
            raise InvalidProfile(
                f"retirement age ({self.retirement_age}) must be greater than current age ({self.current_age})"
            )
        if self.life_expectancy < self.retirement_age:
            raise InvalidProfile(
                f"life expectancy ({self.life_expectancy}) cannot be below retirement age ({self.retirement_age})"
            )
        for name in CURRENCY_FIELDS:
            if getattr(self, name) < 0:
                raise InvalidProfile(f"{name} cannot be negative")

    def replace(self, **changes) -> "FinancialProfile":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_payload(cls, payload: dict) -> "FinancialProfile":
        """Build a profile from a camelCase or snake_case mapping."""
        def pick(snake: str, camel: str, cast):
            value = payload.get(snake, payload.get(camel))
            if value is None:
                raise InvalidProfile(f"missing field '{camel}'")
            try:
                return cast(value)
            except (TypeError, ValueError) as exc:
                raise InvalidProfile(f"field '{camel}' must be numeric") from exc

        return cls(
            current_age=pick("current_age", "currentAge", int),
            retirement_age=pick("retirement_age", "retirementAge", int),
            life_expectancy=pick("life_expectancy", "lifeExpectancy", int),
            current_savings=pick("current_savings", "currentSavings", float),
            monthly_expenses=pick("monthly_expenses", "monthlyExpenses", float),
            monthly_income=pick("monthly_income", "monthlyIncome", float),
            current_monthly_savings=pick("current_monthly_savings", "currentMonthlySavings", float),
            expected_return=pick("expected_return", "expectedReturn", float),
            inflation_rate=pick("inflation_rate", "inflationRate", float),
        )
