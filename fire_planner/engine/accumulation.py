from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..data_model import FinancialProfile
from .calculator import FireResult, current_calendar_year, monthly_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearPoint:
    year: int
    age: int
    total_corpus: float
    yearly_contribution: float
    cumulative_contributions: float
    investment_growth: float
    progress_percentage: float


def _progress(corpus: float, required: float) -> float:
    if required <= 0:
        return 100.0
    return corpus / required * 100


def project_accumulation(
    profile: FinancialProfile,
    result: FireResult,
    start_year: int | None = None,
) -> List[YearPoint]:
    """Year-end corpus from today to retirement at the required monthly savings.

    Each year compounds monthly: growth first, then that month's contribution.
    """
    year0 = current_calendar_year() if start_year is None else start_year
    r_m = monthly_rate(profile.expected_return)
    contribution_m = result.monthly_required_savings
    yearly_contribution = contribution_m * 12

    corpus = profile.current_savings
    points: List[YearPoint] = [
        YearPoint(
            year=year0,
            age=profile.current_age,
            total_corpus=corpus,
            yearly_contribution=0.0,
            cumulative_contributions=0.0,
            investment_growth=0.0,
            progress_percentage=_progress(corpus, result.required_corpus),
        )
    ]

    for k in range(1, profile.years_to_retirement + 1):
        for _ in range(12):
            corpus = corpus * (1 + r_m) + contribution_m
        cumulative = yearly_contribution * k
        points.append(
            YearPoint(
                year=year0 + k,
                age=profile.current_age + k,
                total_corpus=corpus,
                yearly_contribution=yearly_contribution,
                cumulative_contributions=cumulative,
                investment_growth=max(corpus - profile.current_savings - cumulative, 0.0),
                progress_percentage=min(_progress(corpus, result.required_corpus), 100.0),
            )
        )

    logger.debug("accumulation: %d points, final corpus %.0f", len(points), corpus)
    return points


def target_reached(points: Sequence[YearPoint]) -> YearPoint | None:
    """First year whose corpus covers the requirement."""
    for point in points:
        if point.progress_percentage >= 100:
            return point
    return None
