from .accumulation import YearPoint, project_accumulation, target_reached
from .aggregate import accumulation_frame, city_frame, lifetime_frame, scenario_frame, withdrawal_frame
from .calculator import (
    CorpusBreakdown,
    FireResult,
    compute,
    corpus_breakdown,
    current_progress,
    future_value_of_contributions,
    inflate,
    required_monthly_contribution,
    required_savings_rate,
    savings_rate,
)
from .geo import (
    CityComparison,
    RelocationSummary,
    compare_cities,
    monthly_savings_from_relocation,
    relocation_summary,
)
from .scenarios import Scenario, ScenarioOutcome, default_scenarios, run_custom_scenario, run_scenarios
from .withdrawal import (
    WithdrawalYear,
    first_depletion,
    is_withdrawal_rate_safe,
    post_retirement_return,
    project_withdrawals,
    safe_withdrawal_rate,
)

__all__ = [
    "CityComparison",
    "CorpusBreakdown",
    "FireResult",
    "RelocationSummary",
    "Scenario",
    "ScenarioOutcome",
    "WithdrawalYear",
    "YearPoint",
    "accumulation_frame",
    "city_frame",
    "compare_cities",
    "compute",
    "corpus_breakdown",
    "current_progress",
    "default_scenarios",
    "first_depletion",
    "future_value_of_contributions",
    "inflate",
    "is_withdrawal_rate_safe",
    "lifetime_frame",
    "monthly_savings_from_relocation",
    "post_retirement_return",
    "project_accumulation",
    "project_withdrawals",
    "relocation_summary",
    "required_monthly_contribution",
    "required_savings_rate",
    "run_custom_scenario",
    "run_scenarios",
    "safe_withdrawal_rate",
    "savings_rate",
    "scenario_frame",
    "target_reached",
    "withdrawal_frame",
]
