"""What-if planning: rerun the calculator with a few profile fields swapped."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..config import EngineConfig
from ..data_model import FinancialProfile, OneTimeExpense, RecurringExpense, StrategyVariant
from .calculator import FireResult, compute


@dataclass(frozen=True)
class Scenario:
    name: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScenarioOutcome:
    scenario: Scenario
    profile: FinancialProfile
    result: FireResult


def default_scenarios(profile: FinancialProfile) -> List[Scenario]:
    scenarios = [
        Scenario("Current Plan"),
        Scenario("Increase Savings +₹10K", {"current_monthly_savings": profile.current_monthly_savings + 10000}),
        Scenario("Reduce Expenses -₹5K", {"monthly_expenses": max(profile.monthly_expenses - 5000, 0.0)}),
    ]
    # later retirement must still fit inside the life expectancy
    if profile.retirement_age + 5 <= profile.life_expectancy:
        scenarios.append(Scenario("Retire 5 Years Later", {"retirement_age": profile.retirement_age + 5}))
    scenarios.append(Scenario("Higher Returns +2%", {"expected_return": profile.expected_return + 2}))
    return scenarios


def run_custom_scenario(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    changes: Dict[str, Any],
    one_time_expenses: Sequence[OneTimeExpense] = (),
    recurring_expenses: Sequence[RecurringExpense] = (),
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> ScenarioOutcome:
    return run_scenarios(
        profile,
        strategy,
        [Scenario("Custom Scenario", dict(changes))],
        one_time_expenses,
        recurring_expenses,
        current_year=current_year,
        config=config,
    )[0]


def run_scenarios(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    scenarios: Sequence[Scenario] | None = None,
    one_time_expenses: Sequence[OneTimeExpense] = (),
    recurring_expenses: Sequence[RecurringExpense] = (),
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> List[ScenarioOutcome]:
    outcomes: List[ScenarioOutcome] = []
    for scenario in default_scenarios(profile) if scenarios is None else scenarios:
        adjusted = profile.replace(**scenario.changes)
        result = compute(
            adjusted,
            strategy,
            one_time_expenses,
            recurring_expenses,
            current_year=current_year,
            config=config,
        )
        outcomes.append(ScenarioOutcome(scenario, adjusted, result))
    return outcomes
