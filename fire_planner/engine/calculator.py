"""Corpus requirement and required-savings solver.

Everything here is a pure function of its inputs: the profile and expense
records are read, never modified, and each call builds a new FireResult.
Rates on the public surface are annual percentages (12 means 12 %).
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

from ..config import DEFAULT_CONFIG, EngineConfig
from ..data_model import FinancialProfile, OneTimeExpense, RecurringExpense, StrategyVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FireResult:
    strategy: StrategyVariant
    required_corpus: float
    monthly_required_savings: float
    years_to_goal: int
    total_months_to_goal: int
    projected_corpus_at_retirement: float
    shortfall: float
    achievable: bool
    monthly_passive_income: float
    monthly_required_income: float | None
    # breakdown of required_corpus
    future_annual_expenses: float
    base_corpus: float
    one_time_total: float
    recurring_total: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["strategy"] = self.strategy.id
        return data


@dataclass(frozen=True)
class CorpusBreakdown:
    future_annual_expenses: float
    base_corpus: float
    part_time_income_needed: float  # annual
    years_in_retirement: int
    withdrawal_rate: float  # 1 / multiplier


def current_calendar_year() -> int:
    return datetime.date.today().year


def inflate(amount: float, rate_pct: float, years: float) -> float:
    return amount * (1 + rate_pct / 100.0) ** years


def monthly_rate(annual_pct: float) -> float:
    return annual_pct / 100.0 / 12.0


def future_value_of_contributions(monthly_contribution: float, monthly_return: float, months: int) -> float:
    """Future value of level end-of-month contributions (ordinary annuity)."""
    if months <= 0:
        return 0.0
    if monthly_return == 0:
        return monthly_contribution * months
    return monthly_contribution * ((1 + monthly_return) ** months - 1) / monthly_return


def required_monthly_contribution(target: float, monthly_return: float, months: int) -> float:
    """Level monthly contribution whose future value after ``months`` equals ``target``."""
    if months <= 0:
        raise ValueError("months must be positive to spread a contribution")
    if monthly_return == 0:
        return target / months
    return target * monthly_return / ((1 + monthly_return) ** months - 1)


def future_annual_expenses(profile: FinancialProfile) -> float:
    return inflate(profile.monthly_expenses, profile.inflation_rate, profile.years_to_retirement) * 12


def corpus_breakdown(profile: FinancialProfile, strategy: StrategyVariant) -> CorpusBreakdown:
    annual = future_annual_expenses(profile)
    if strategy.has_income_component:
        ratio = strategy.income_coverage_ratio or 0.0
        base = annual * (1 - ratio) * strategy.multiplier
        part_time = annual * ratio
    else:
        base = annual * strategy.multiplier
        part_time = 0.0
    return CorpusBreakdown(
        future_annual_expenses=annual,
        base_corpus=base,
        part_time_income_needed=part_time,
        years_in_retirement=profile.years_in_retirement,
        withdrawal_rate=1 / strategy.multiplier,
    )


def one_time_total(
    expenses: Iterable[OneTimeExpense],
    global_inflation: float,
    current_year: int,
) -> float:
    return sum(
        inflate(e.amount, e.effective_inflation(global_inflation), e.target_year - current_year)
        for e in expenses
    )


def recurring_total(
    expenses: Iterable[RecurringExpense],
    profile: FinancialProfile,
    strategy: StrategyVariant,
) -> float:
    # Same multiplier as the base corpus, income strategies included.
    years = profile.years_to_retirement
    return sum(
        inflate(e.annual_amount, profile.inflation_rate, years) * strategy.multiplier
        for e in expenses
    )


def compute(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    one_time_expenses: Sequence[OneTimeExpense] = (),
    recurring_expenses: Sequence[RecurringExpense] = (),
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> FireResult:
    profile.validate()
    cfg = config or DEFAULT_CONFIG
    year_now = current_calendar_year() if current_year is None else current_year

    years = profile.years_to_retirement
    months = profile.months_to_retirement

    breakdown = corpus_breakdown(profile, strategy)
    monthly_required_income = None
    if strategy.has_income_component:
        monthly_required_income = breakdown.part_time_income_needed / 12

    lump_sums = one_time_total(one_time_expenses, profile.inflation_rate, year_now)
    ongoing = recurring_total(recurring_expenses, profile, strategy)
    required = breakdown.base_corpus + lump_sums + ongoing

    r_m = monthly_rate(profile.expected_return)
    savings_growth = inflate(profile.current_savings, profile.expected_return, years)
    contributions_fv = future_value_of_contributions(profile.current_monthly_savings, r_m, months)
    projected = savings_growth + contributions_fv

    shortfall = max(0.0, required - projected)
    extra = 0.0
    if shortfall > 0:
        extra = required_monthly_contribution(shortfall, r_m, months)
    monthly_required_savings = profile.current_monthly_savings + extra

    achievable = monthly_required_savings <= cfg.max_savings_rate * profile.monthly_income
    withdrawal_rate = min(profile.expected_return / 100.0, cfg.safe_withdrawal_rate)
    monthly_passive_income = projected * withdrawal_rate / 12

    logger.debug(
        "%s: required=%.0f projected=%.0f shortfall=%.0f monthly=%.0f achievable=%s",
        strategy.id,
        required,
        projected,
        shortfall,
        monthly_required_savings,
        achievable,
    )

    return FireResult(
        strategy=strategy,
        required_corpus=required,
        monthly_required_savings=monthly_required_savings,
        years_to_goal=years,
        total_months_to_goal=months,
        projected_corpus_at_retirement=max(projected, required),
        shortfall=shortfall,
        achievable=achievable,
        monthly_passive_income=monthly_passive_income,
        monthly_required_income=monthly_required_income,
        future_annual_expenses=breakdown.future_annual_expenses,
        base_corpus=breakdown.base_corpus,
        one_time_total=lump_sums,
        recurring_total=ongoing,
    )


def savings_rate(profile: FinancialProfile) -> float:
    """Current savings as a percent of income (0 when there is no income)."""
    if profile.monthly_income == 0:
        return 0.0
    return profile.current_monthly_savings / profile.monthly_income * 100


def required_savings_rate(profile: FinancialProfile, result: FireResult) -> float:
    if profile.monthly_income == 0:
        return 0.0
    return result.monthly_required_savings / profile.monthly_income * 100


def current_progress(profile: FinancialProfile, result: FireResult) -> float:
    if result.required_corpus == 0:
        return 100.0
    return profile.current_savings / result.required_corpus * 100
