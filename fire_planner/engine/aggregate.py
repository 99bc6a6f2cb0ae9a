from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from .accumulation import YearPoint
from .geo import CityComparison
from .scenarios import ScenarioOutcome
from .withdrawal import WithdrawalYear

REQUIRED_COLUMNS = {"Phase", "Age", "Corpus"}

_ACCUMULATION_COLUMNS = {
    "year": "CalendarYear",
    "age": "Age",
    "total_corpus": "Corpus",
    "yearly_contribution": "YearlyContribution",
    "cumulative_contributions": "CumulativeContributions",
    "investment_growth": "InvestmentGrowth",
    "progress_percentage": "ProgressPct",
}

_WITHDRAWAL_COLUMNS = {
    "age": "Age",
    "starting_corpus": "StartingCorpus",
    "annual_withdrawal": "Withdrawal",
    "investment_growth": "InvestmentGrowth",
    "ending_corpus": "Corpus",
    "depletion_risk": "DepletionRisk",
}


def accumulation_frame(points: Sequence[YearPoint]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(p) for p in points], columns=list(_ACCUMULATION_COLUMNS))
    df = df.rename(columns=_ACCUMULATION_COLUMNS)
    df.insert(0, "Phase", "accumulation")
    return df


def withdrawal_frame(years: Sequence[WithdrawalYear]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(y) for y in years], columns=list(_WITHDRAWAL_COLUMNS))
    df = df.rename(columns=_WITHDRAWAL_COLUMNS)
    df.insert(0, "Phase", "withdrawal")
    return df


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")
    return df.copy()


def lifetime_frame(points: Sequence[YearPoint], years: Sequence[WithdrawalYear]) -> pd.DataFrame:
    """One row per age across both phases, for a single corpus chart."""
    parts = [_prepare(accumulation_frame(points)), _prepare(withdrawal_frame(years))]
    parts = [p for p in parts if not p.empty]
    if not parts:
        return pd.DataFrame(columns=sorted(REQUIRED_COLUMNS))
    df = pd.concat(parts, ignore_index=True)
    return df.sort_values(["Age", "Phase"], kind="stable").reset_index(drop=True)


def scenario_frame(outcomes: Sequence[ScenarioOutcome]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Scenario": o.scenario.name,
                "RequiredCorpus": o.result.required_corpus,
                "MonthlyRequiredSavings": o.result.monthly_required_savings,
                "YearsToGoal": o.result.years_to_goal,
                "Shortfall": o.result.shortfall,
                "Achievable": o.result.achievable,
            }
            for o in outcomes
        ]
    )


def city_frame(comparisons: Sequence[CityComparison]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Rank": rank,
                "City": c.city.name,
                "Region": c.city.region,
                "CostMultiplier": c.city.cost_multiplier,
                "RequiredCorpus": c.result.required_corpus,
                "MonthlyRequiredSavings": c.result.monthly_required_savings,
                "Achievable": c.result.achievable,
            }
            for rank, c in enumerate(comparisons, start=1)
        ]
    )
