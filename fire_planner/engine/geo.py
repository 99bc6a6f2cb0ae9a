from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from ..config import EngineConfig
from ..data_model import CITIES, CityProfile, FinancialProfile, StrategyVariant
from .calculator import FireResult, compute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CityComparison:
    city: CityProfile
    result: FireResult


@dataclass(frozen=True)
class RelocationSummary:
    current: CityComparison
    target: CityComparison
    monthly_savings: float
    annual_savings: float
    corpus_reduction: float


def monthly_savings_from_relocation(base_expenses: float, target_multiplier: float) -> float:
    """Monthly spend saved by moving; negative when the target city is dearer."""
    return base_expenses * (1 - target_multiplier)


def evaluate_city(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    city: CityProfile,
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> CityComparison:
    adjusted = profile.replace(monthly_expenses=profile.monthly_expenses * city.cost_multiplier)
    return CityComparison(city, compute(adjusted, strategy, current_year=current_year, config=config))


def compare_cities(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    cities: Iterable[CityProfile] | None = None,
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> List[CityComparison]:
    """Cities ranked by required corpus, cheapest to FIRE first."""
    ranked = [
        evaluate_city(profile, strategy, city, current_year=current_year, config=config)
        for city in (CITIES if cities is None else cities)
    ]
    ranked.sort(key=lambda c: c.result.required_corpus)
    if ranked:
        logger.debug("geo: %s ranks first of %d", ranked[0].city.id, len(ranked))
    return ranked


def relocation_summary(
    profile: FinancialProfile,
    strategy: StrategyVariant,
    current_city: CityProfile,
    target_city: CityProfile,
    current_year: int | None = None,
    config: EngineConfig | None = None,
) -> RelocationSummary:
    current = evaluate_city(profile, strategy, current_city, current_year=current_year, config=config)
    target = evaluate_city(profile, strategy, target_city, current_year=current_year, config=config)
    monthly = monthly_savings_from_relocation(profile.monthly_expenses, target_city.cost_multiplier)
    return RelocationSummary(
        current=current,
        target=target,
        monthly_savings=monthly,
        annual_savings=monthly * 12,
        corpus_reduction=current.result.required_corpus - target.result.required_corpus,
    )
