import dataclasses

import pytest

from fire_planner.config import EngineConfig
from fire_planner.engine import (
    compute,
    first_depletion,
    is_withdrawal_rate_safe,
    post_retirement_return,
    project_accumulation,
    project_withdrawals,
    safe_withdrawal_rate,
    target_reached,
)

YEAR = 2025


def test_accumulation_shape_and_year_zero(profile, lean):
    result = compute(profile, lean, current_year=YEAR)

    points = project_accumulation(profile, result, start_year=YEAR)

    assert len(points) == profile.years_to_retirement + 1
    first = points[0]
    assert (first.year, first.age) == (YEAR, 25)
    assert first.total_corpus == 500000
    assert first.yearly_contribution == 0
    assert first.progress_percentage == pytest.approx(500000 / result.required_corpus * 100)
    assert points[-1].year == YEAR + 20
    assert points[-1].age == 45


def test_accumulation_compounds_monthly(profile, lean):
    result = compute(profile, lean, current_year=YEAR)
    monthly = result.monthly_required_savings

    points = project_accumulation(profile, result, start_year=YEAR)

    corpus = 500000.0
    for _ in range(12):
        corpus = corpus * 1.01 + monthly
    assert points[1].total_corpus == pytest.approx(corpus)
    for k, point in enumerate(points[1:], start=1):
        assert point.cumulative_contributions == pytest.approx(monthly * 12 * k)
        assert point.yearly_contribution == pytest.approx(monthly * 12)
        assert point.investment_growth >= 0


def test_accumulation_caps_progress_but_not_corpus(profile, lean):
    result = compute(profile, lean, current_year=YEAR)

    points = project_accumulation(profile, result, start_year=YEAR)

    assert all(p.progress_percentage <= 100 for p in points[1:])
    # monthly compounding of the opening balance outruns the annual figure
    assert points[-1].total_corpus > result.required_corpus
    reached = target_reached(points)
    assert reached is not None
    assert reached.progress_percentage == 100


def test_accumulation_growth_floored_at_zero_without_returns(profile, lean):
    flat = profile.replace(expected_return=0)
    result = compute(flat, lean, current_year=YEAR)

    points = project_accumulation(flat, result, start_year=YEAR)

    for point in points:
        assert point.investment_growth == pytest.approx(0, abs=1e-3)


def test_post_retirement_return_haircut_and_floor():
    assert post_retirement_return(12) == 10
    assert post_retirement_return(5) == 4
    assert post_retirement_return(-3) == 4
    assert post_retirement_return(12, EngineConfig(post_retirement_haircut=3, post_retirement_floor=5)) == 9


def test_withdrawals_follow_inflation_and_growth(profile, lean):
    result = compute(profile, lean, current_year=YEAR)

    years = project_withdrawals(profile, result)

    first = years[0]
    assert first.age == 45
    assert first.starting_corpus == pytest.approx(result.projected_corpus_at_retirement)
    assert first.annual_withdrawal == pytest.approx(result.future_annual_expenses)
    assert first.investment_growth == pytest.approx(first.starting_corpus * 0.10)
    assert years[1].annual_withdrawal == pytest.approx(result.future_annual_expenses * 1.06)
    assert years[1].starting_corpus == pytest.approx(first.ending_corpus)
    assert len(years) <= profile.years_in_retirement


def test_sustainable_withdrawal_never_depletes(profile, lean):
    steady = profile.replace(
        current_age=30, retirement_age=40, life_expectancy=90, monthly_expenses=20000, inflation_rate=0, expected_return=8
    )
    result = compute(steady, lean, current_year=YEAR)
    assert result.future_annual_expenses / result.projected_corpus_at_retirement <= 0.06

    years = project_withdrawals(steady, result)

    assert len(years) == 50
    assert not any(y.depletion_risk for y in years)
    assert first_depletion(years) is None


def test_depletion_stops_the_projection(profile, lean):
    strained = profile.replace(current_savings=0, current_monthly_savings=0, expected_return=5, inflation_rate=10)
    result = compute(strained, lean, current_year=YEAR)

    years = project_withdrawals(strained, result)

    assert len(years) < strained.years_in_retirement
    last = years[-1]
    assert last.ending_corpus == 0
    assert last.depletion_risk is True
    assert first_depletion(years) is last
    assert all(y.ending_corpus > 0 for y in years[:-1])


def test_exact_zero_ending_terminates_without_risk_flag(profile, lean):
    flat = profile.replace(expected_return=0, inflation_rate=0)
    result = dataclasses.replace(
        compute(flat, lean, current_year=YEAR),
        projected_corpus_at_retirement=100.0,
        future_annual_expenses=50.0,
    )
    no_growth = EngineConfig(post_retirement_haircut=0, post_retirement_floor=0)

    years = project_withdrawals(flat, result, config=no_growth)

    assert [y.ending_corpus for y in years] == [50.0, 0.0]
    assert years[-1].depletion_risk is False


def test_no_withdrawal_years_when_retiring_at_life_expectancy(profile, lean):
    short = profile.replace(retirement_age=45, life_expectancy=45)
    result = compute(short, lean, current_year=YEAR)

    years = project_withdrawals(short, result)

    assert short.years_in_retirement == 0
    assert years == []
    assert first_depletion(years) is None
    assert len(project_accumulation(short, result, start_year=YEAR)) == 21


def test_safe_withdrawal_rate_against_benchmark(profile, lean):
    result = compute(profile, lean, current_year=YEAR)

    rate = safe_withdrawal_rate(result)

    assert rate == pytest.approx(result.future_annual_expenses / result.projected_corpus_at_retirement * 100)
    assert rate == pytest.approx(4.0)
    assert is_withdrawal_rate_safe(3.5) is True
    assert is_withdrawal_rate_safe(4.5) is False
