# data_model/strategies.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class StrategyVariant:
    """A FIRE flavour: how many years of expenses the corpus must cover.

    Income-based variants (Barista, Hobby) expect part-time work to pay
    ``income_coverage_ratio`` of expenses, so only the rest needs a corpus.
    """

    id: str
    name: str
    description: str
    multiplier: float
    has_income_component: bool = False
    income_coverage_ratio: float | None = None

    def __post_init__(self) -> None:
        if self.multiplier <= 0:
            raise ValueError(f"{self.id}: multiplier must be positive")
        if self.has_income_component:
            if self.income_coverage_ratio is None or not 0.0 <= self.income_coverage_ratio < 1.0:
                raise ValueError(f"{self.id}: income_coverage_ratio must be in [0, 1)")
        elif self.income_coverage_ratio is not None:
            raise ValueError(f"{self.id}: income_coverage_ratio requires has_income_component")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "multiplier": self.multiplier,
            "hasIncomeComponent": self.has_income_component,
            "incomeCoverageRatio": self.income_coverage_ratio,
        }


STRATEGIES: Tuple[StrategyVariant, ...] = (
    StrategyVariant("lean", "Lean FIRE", "Minimal expenses, frugal lifestyle", 25),
    StrategyVariant("coast", "Coast FIRE", "Enough saved to coast to traditional retirement", 25),
    StrategyVariant(
        "barista",
        "Barista FIRE",
        "Part-time work covers partial expenses",
        15,
        has_income_component=True,
        income_coverage_ratio=0.4,
    ),
    StrategyVariant("chubby", "Chubby FIRE", "Comfortable lifestyle with some luxuries", 30),
    StrategyVariant("fat", "Fat FIRE", "Luxurious lifestyle, high expenses", 35),
    StrategyVariant("flamingo", "Flamingo FIRE", "Single person optimized approach", 22),
    StrategyVariant("geo", "Geo FIRE", "Retire in lower cost-of-living area", 20),
    StrategyVariant(
        "hobby",
        "Hobby FIRE",
        "Monetize hobbies for partial income",
        18,
        has_income_component=True,
        income_coverage_ratio=0.3,
    ),
)

_BY_ID: Dict[str, StrategyVariant] = {s.id: s for s in STRATEGIES}


def get_strategy(strategy_id: str) -> StrategyVariant:
    try:
        return _BY_ID[str(strategy_id).strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown strategy: {strategy_id}") from None


def list_strategy_ids() -> list[str]:
    return [s.id for s in STRATEGIES]
