import dataclasses
import math

import pytest

from fire_planner.backend import PROFILE_DEFAULTS, _frame_records, _sanitize_json_compat, _sanitize_records, app
from fire_planner.engine import compute, lifetime_frame, project_accumulation, project_withdrawals, safe_withdrawal_rate


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _request(**extra):
    payload = {"strategy": "lean", "profile": dict(PROFILE_DEFAULTS), "currentYear": 2025}
    payload.update(extra)
    return payload


def test_sanitize_json_compat_nulls_infinite_withdrawal_rate(profile, lean):
    result = compute(profile, lean, current_year=2025)
    drained = dataclasses.replace(result, projected_corpus_at_retirement=0.0)
    rate = safe_withdrawal_rate(drained)

    clean = _sanitize_json_compat({"result": drained.to_dict(), "metrics": {"safeWithdrawalRate": rate, "rates": [rate, 4.0]}})

    assert math.isinf(rate)
    assert clean["metrics"] == {"safeWithdrawalRate": None, "rates": [None, 4.0]}
    assert clean["result"]["strategy"] == "lean"
    assert clean["result"]["required_corpus"] == pytest.approx(result.required_corpus)


def test_frame_records_null_out_columns_missing_from_a_phase(profile, lean):
    result = compute(profile, lean, current_year=2025)
    points = project_accumulation(profile, result, start_year=2025)
    years = project_withdrawals(profile, result)

    rows = _frame_records(lifetime_frame(points, years))

    saving = [row for row in rows if row["Phase"] == "accumulation"]
    spending = [row for row in rows if row["Phase"] == "withdrawal"]
    assert saving[0]["DepletionRisk"] is None
    assert spending[0]["CalendarYear"] is None
    assert spending[0]["Withdrawal"] == pytest.approx(result.future_annual_expenses)
    assert _sanitize_records([{"Corpus": float("nan"), "Age": 45}]) == [{"Corpus": None, "Age": 45}]


def test_health_and_catalogs(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}
    strategies = client.get("/api/strategies").get_json()["strategies"]
    cities = client.get("/api/cities").get_json()["cities"]

    assert len(strategies) >= 8
    assert {"id", "multiplier", "hasIncomeComponent"} <= set(strategies[0])
    assert cities[0]["id"] == "mumbai"


def test_schema_lists_expense_tables(client):
    schema = client.get("/api/schema").get_json()

    assert schema["profileDefaults"]["retirementAge"] == 45
    assert schema["oneTimeExpenses"]["name"] == "one_time_expenses"
    assert "travel" in schema["recurringCategories"]


def test_calculate_returns_result_and_projections(client):
    response = client.post("/api/calculate", json=_request())

    assert response.status_code == 200
    body = response.get_json()
    result = body["result"]
    assert result["required_corpus"] == pytest.approx(40000 * 12 * 1.06**20 * 25)
    assert result["years_to_goal"] == 20
    assert result["formatted"]["required_corpus"] == "₹3.85 Cr"
    assert len(body["accumulation"]) == 21
    assert len(body["withdrawal"]) <= 40
    assert body["metrics"]["postRetirementReturn"] == 10
    assert body["metrics"]["safeWithdrawalRate"] == pytest.approx(4.0)
    assert body["expenseWarnings"] == []


def test_calculate_accepts_camel_case_keys_and_expenses(client):
    payload = {
        "fireType": "barista",
        "userInput": dict(PROFILE_DEFAULTS),
        "currentYear": 2025,
        "oneTimeExpenses": [{"id": "car", "name": "Car", "amount": 800000, "targetYear": 2028, "category": "car"}],
        "recurringExpenses": [{"id": "trip", "name": "Trips", "monthlyAmount": 5000, "startYear": 2026}],
    }

    body = client.post("/api/calculate", json=payload).get_json()

    assert body["result"]["strategy"] == "barista"
    assert body["result"]["one_time_total"] == pytest.approx(800000 * 1.06**3)
    assert body["result"]["monthly_required_income"] > 0


def test_invalid_profile_is_a_bad_request(client):
    profile = dict(PROFILE_DEFAULTS, retirementAge=20)

    response = client.post("/api/calculate", json=_request(profile=profile))

    assert response.status_code == 400
    assert "retirement age" in response.get_json()["error"]


def test_missing_profile_field(client):
    profile = dict(PROFILE_DEFAULTS)
    profile.pop("monthlyIncome")

    response = client.post("/api/calculate", json=_request(profile=profile))

    assert response.status_code == 400


def test_unknown_strategy_is_not_found(client):
    response = client.post("/api/calculate", json=_request(strategy="yolo"))

    assert response.status_code == 404


def test_past_expense_warns_or_rejects(client):
    expenses = [{"id": "old", "name": "Old", "amount": 1000, "targetYear": 2020}]

    lenient = client.post("/api/calculate", json=_request(oneTimeExpenses=expenses))
    strict = client.post("/api/calculate", json=_request(oneTimeExpenses=expenses, strictExpenses=True))

    assert lenient.status_code == 200
    assert lenient.get_json()["expenseWarnings"][0]["id"] == "old"
    assert strict.status_code == 400
    assert strict.get_json()["expenseId"] == "old"


def test_scenarios_endpoint_with_custom(client):
    body = client.post("/api/scenarios", json=_request(custom={"monthlyExpenses": 30000})).get_json()

    names = [row["name"] for row in body["scenarios"]]
    assert names[0] == "Current Plan"
    assert names[-1] == "Custom Scenario"
    assert len(names) == 6


def test_geo_endpoint_with_relocation(client):
    body = client.post("/api/geo", json=_request(currentCity="mumbai", targetCity="goa")).get_json()

    corpora = [row["result"]["required_corpus"] for row in body["ranking"]]
    assert corpora == sorted(corpora)
    assert body["relocation"]["monthlySavings"] == pytest.approx(16000)


def test_geo_unknown_city(client):
    response = client.post("/api/geo", json=_request(currentCity="mumbai", targetCity="atlantis"))

    assert response.status_code == 404


@pytest.mark.parametrize(
    "extra",
    [
        {"oneTimeExpenses": ["car"]},
        {"oneTimeExpenses": {"id": "car", "amount": 800000}},
        {"recurringExpenses": {"id": "x"}},
        {"recurringExpenses": [42]},
    ],
)
@pytest.mark.parametrize("endpoint", ["/api/calculate", "/api/scenarios", "/api/geo"])
def test_malformed_expense_containers_are_bad_requests(client, endpoint, extra):
    response = client.post(endpoint, json=_request(**extra))

    assert response.status_code == 400
    assert "expense" in response.get_json()["error"]


def test_calculate_includes_lifetime_table(client):
    body = client.post("/api/calculate", json=_request()).get_json()

    lifetime = body["lifetime"]
    assert len(lifetime) == len(body["accumulation"]) + len(body["withdrawal"])
    assert lifetime[0]["Phase"] == "accumulation"
    assert lifetime[0]["Corpus"] == 500000
    assert [row["Age"] for row in lifetime] == sorted(row["Age"] for row in lifetime)


def test_scenarios_and_geo_include_summary_tables(client):
    scenarios = client.post("/api/scenarios", json=_request()).get_json()
    geo = client.post("/api/geo", json=_request()).get_json()

    assert [row["Scenario"] for row in scenarios["summary"]] == [row["name"] for row in scenarios["scenarios"]]
    assert geo["table"][0]["Rank"] == 1
    assert geo["table"][0]["City"] == "Bhubaneswar"
