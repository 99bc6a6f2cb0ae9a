from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..config import DEFAULT_CONFIG, EngineConfig
from ..data_model import FinancialProfile
from .calculator import FireResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawalYear:
    year: int  # labelled by age, as in the breakdown table
    age: int
    starting_corpus: float
    annual_withdrawal: float
    investment_growth: float
    ending_corpus: float
    depletion_risk: bool


def post_retirement_return(expected_return: float, config: EngineConfig | None = None) -> float:
    """Expected return after retirement, in percent: a fixed haircut with a floor."""
    cfg = config or DEFAULT_CONFIG
    return max(expected_return - cfg.post_retirement_haircut, cfg.post_retirement_floor)


def project_withdrawals(
    profile: FinancialProfile,
    result: FireResult,
    config: EngineConfig | None = None,
) -> List[WithdrawalYear]:
    """Yearly draw-down of the retirement corpus.

    Withdrawals start at the retirement-year annual expenses and grow with
    inflation. The run stops early the first year the corpus hits zero.
    """
    rate = post_retirement_return(profile.expected_return, config)
    base_withdrawal = result.future_annual_expenses
    corpus = result.projected_corpus_at_retirement

    years: List[WithdrawalYear] = []
    for y in range(profile.years_in_retirement):
        withdrawal = base_withdrawal * (1 + profile.inflation_rate / 100.0) ** y
        growth = corpus * rate / 100.0
        ending = corpus + growth - withdrawal
        age = profile.retirement_age + y
        years.append(
            WithdrawalYear(
                year=age,
                age=age,
                starting_corpus=corpus,
                annual_withdrawal=withdrawal,
                investment_growth=growth,
                ending_corpus=max(0.0, ending),
                depletion_risk=ending < 0,
            )
        )
        corpus = max(0.0, ending)
        if corpus <= 0:
            logger.warning("corpus depleted at age %d (%s)", age, result.strategy.id)
            break

    return years


def safe_withdrawal_rate(result: FireResult) -> float:
    """First-year withdrawal as a percent of the retirement corpus."""
    if result.projected_corpus_at_retirement == 0:
        return float("inf") if result.future_annual_expenses > 0 else 0.0
    return result.future_annual_expenses / result.projected_corpus_at_retirement * 100


def is_withdrawal_rate_safe(rate_pct: float, config: EngineConfig | None = None) -> bool:
    cfg = config or DEFAULT_CONFIG
    return rate_pct <= cfg.safe_withdrawal_benchmark


def first_depletion(years: Sequence[WithdrawalYear]) -> WithdrawalYear | None:
    for entry in years:
        if entry.depletion_risk:
            return entry
    return None
