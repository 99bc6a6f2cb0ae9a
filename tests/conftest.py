import pytest

from fire_planner.data_model import FinancialProfile, get_strategy


@pytest.fixture
def profile() -> FinancialProfile:
    return FinancialProfile(
        current_age=25,
        retirement_age=45,
        life_expectancy=85,
        current_savings=500000,
        monthly_expenses=40000,
        monthly_income=80000,
        current_monthly_savings=30000,
        expected_return=12,
        inflation_rate=6,
    )


@pytest.fixture
def lean():
    return get_strategy("lean")


@pytest.fixture
def barista():
    return get_strategy("barista")
