"""REST surface for the FIRE planning engine."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from fire_planner.config import EngineConfig, load_config_from_env
from fire_planner.data_model import (
    CITIES,
    ONE_TIME_CATEGORIES,
    RECURRING_CATEGORIES,
    STRATEGIES,
    FinancialProfile,
    OneTimeExpenseTableModel,
    RecurringExpenseTableModel,
    get_city,
    get_strategy,
    one_time_from_payload,
    recurring_from_payload,
    validate_expenses,
)
from fire_planner.engine import (
    city_frame,
    compare_cities,
    compute,
    corpus_breakdown,
    current_progress,
    first_depletion,
    is_withdrawal_rate_safe,
    lifetime_frame,
    post_retirement_return,
    project_accumulation,
    project_withdrawals,
    relocation_summary,
    required_savings_rate,
    run_custom_scenario,
    run_scenarios,
    safe_withdrawal_rate,
    savings_rate,
    scenario_frame,
    target_reached,
)
from fire_planner.engine.calculator import current_calendar_year
from fire_planner.errors import InvalidExpense, InvalidProfile
from fire_planner.formatting import format_currency

logger = logging.getLogger(__name__)

ONE_TIME_MODEL = OneTimeExpenseTableModel()
RECURRING_MODEL = RecurringExpenseTableModel()

PROFILE_DEFAULTS = {
    "currentAge": 25,
    "retirementAge": 45,
    "lifeExpectancy": 85,
    "currentSavings": 500000,
    "monthlyExpenses": 40000,
    "monthlyIncome": 80000,
    "currentMonthlySavings": 30000,
    "expectedReturn": 12,
    "inflationRate": 6,
}

CUSTOM_SCENARIO_FIELDS = (
    ("current_monthly_savings", "currentMonthlySavings", float),
    ("monthly_expenses", "monthlyExpenses", float),
    ("retirement_age", "retirementAge", int),
    ("expected_return", "expectedReturn", float),
)

FORMATTED_FIELDS = (
    "required_corpus",
    "monthly_required_savings",
    "projected_corpus_at_retirement",
    "shortfall",
    "monthly_passive_income",
)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_sanitize_json_compat(dict(row)) for row in records]


def _frame_records(df) -> List[Dict[str, Any]]:
    return _sanitize_records(df.to_dict(orient="records"))


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _is_truthy(value: Any) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _engine_config() -> EngineConfig:
    return app.config["ENGINE_CONFIG"]


def _parse_request(payload: dict):
    strategy_id = _extract_payload_value(payload, "strategy", "fireType", "strategyId", default="lean")
    strategy = get_strategy(strategy_id)
    profile_raw = _extract_payload_value(payload, "profile", "userInput", default={})
    if not isinstance(profile_raw, dict):
        raise InvalidProfile("'profile' must be an object")
    profile = FinancialProfile.from_payload(profile_raw)
    one_time = one_time_from_payload(_extract_payload_value(payload, "oneTimeExpenses", "one_time_expenses", default=[]))
    recurring = recurring_from_payload(
        _extract_payload_value(payload, "recurringExpenses", "recurring_expenses", default=[])
    )
    year = _extract_payload_value(payload, "currentYear", "current_year")
    current_year = current_calendar_year() if year is None else int(year)
    return strategy, profile, one_time, recurring, current_year


def _checked_expenses(payload: dict, one_time, recurring, current_year: int) -> List[Dict[str, Any]]:
    problems = validate_expenses(one_time, recurring, current_year)
    if problems and _is_truthy(payload.get("strictExpenses", False)):
        raise problems[0]
    return [{"id": exc.expense_id, "message": str(exc)} for exc in problems]


def _result_payload(result) -> Dict[str, Any]:
    data = result.to_dict()
    data["formatted"] = {key: format_currency(data[key]) for key in FORMATTED_FIELDS}
    return data


app = Flask(__name__)
app.config["ENGINE_CONFIG"] = load_config_from_env()


@app.errorhandler(InvalidProfile)
@app.errorhandler(InvalidExpense)
def handle_invalid_input(exc):
    logger.info("rejected request: %s", exc)
    body = {"error": str(exc)}
    expense_id = getattr(exc, "expense_id", None)
    if expense_id:
        body["expenseId"] = expense_id
    return jsonify(body), 400


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/strategies")
def list_strategies():
    return jsonify({"strategies": [s.to_dict() for s in STRATEGIES]})


@app.get("/api/cities")
def list_cities():
    return jsonify({"cities": [c.to_dict() for c in CITIES]})


@app.get("/api/schema")
def get_schema():
    return jsonify(
        {
            "profileDefaults": PROFILE_DEFAULTS,
            "oneTimeExpenses": ONE_TIME_MODEL.to_payload(),
            "recurringExpenses": RECURRING_MODEL.to_payload(),
            "oneTimeCategories": ONE_TIME_CATEGORIES,
            "recurringCategories": RECURRING_CATEGORIES,
        }
    )


@app.post("/api/calculate")
def calculate():
    payload = request.get_json(silent=True) or {}
    try:
        strategy, profile, one_time, recurring, current_year = _parse_request(payload)
    except KeyError as exc:
        return jsonify({"error": exc.args[0]}), 404
    except (TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid request: {exc}"}), 400
    warnings = _checked_expenses(payload, one_time, recurring, current_year)
    cfg = _engine_config()

    result = compute(profile, strategy, one_time, recurring, current_year=current_year, config=cfg)
    points = project_accumulation(profile, result, start_year=current_year)
    withdrawals = project_withdrawals(profile, result, config=cfg)
    swr = safe_withdrawal_rate(result)
    reached = target_reached(points)
    depletion = first_depletion(withdrawals)

    body = {
        "result": _result_payload(result),
        "breakdown": asdict(corpus_breakdown(profile, strategy)),
        "metrics": {
            "currentProgress": current_progress(profile, result),
            "savingsRate": savings_rate(profile),
            "requiredSavingsRate": required_savings_rate(profile, result),
            "postRetirementReturn": post_retirement_return(profile.expected_return, cfg),
            "safeWithdrawalRate": swr,
            "withdrawalRateSafe": is_withdrawal_rate_safe(swr, cfg),
            "targetReachedYear": reached.year if reached else None,
            "depletionAge": depletion.age if depletion else None,
        },
        "accumulation": _sanitize_records(asdict(p) for p in points),
        "withdrawal": _sanitize_records(asdict(w) for w in withdrawals),
        "lifetime": _frame_records(lifetime_frame(points, withdrawals)),
        "expenseWarnings": warnings,
    }
    return jsonify(_sanitize_json_compat(body))


@app.post("/api/scenarios")
def scenarios():
    payload = request.get_json(silent=True) or {}
    try:
        strategy, profile, one_time, recurring, current_year = _parse_request(payload)
    except KeyError as exc:
        return jsonify({"error": exc.args[0]}), 404
    except (TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid request: {exc}"}), 400
    cfg = _engine_config()

    outcomes = run_scenarios(profile, strategy, None, one_time, recurring, current_year=current_year, config=cfg)
    custom = payload.get("custom")
    if isinstance(custom, dict) and custom:
        changes = {}
        for field_name, camel, cast in CUSTOM_SCENARIO_FIELDS:
            value = _extract_payload_value(custom, field_name, camel)
            if value is None:
                continue
            try:
                changes[field_name] = cast(value)
            except (TypeError, ValueError):
                return jsonify({"error": f"'{camel}' must be numeric"}), 400
        outcomes.append(
            run_custom_scenario(
                profile, strategy, changes, one_time, recurring, current_year=current_year, config=cfg
            )
        )

    rows = [
        {"name": o.scenario.name, "changes": o.scenario.changes, "result": _result_payload(o.result)}
        for o in outcomes
    ]
    return jsonify(
        {
            "strategy": strategy.id,
            "scenarios": _sanitize_records(rows),
            "summary": _frame_records(scenario_frame(outcomes)),
        }
    )


@app.post("/api/geo")
def geo_compare():
    payload = request.get_json(silent=True) or {}
    try:
        strategy, profile, _, _, current_year = _parse_request(payload)
    except KeyError as exc:
        return jsonify({"error": exc.args[0]}), 404
    except (TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid request: {exc}"}), 400
    cfg = _engine_config()

    ranking = compare_cities(profile, strategy, current_year=current_year, config=cfg)
    body: Dict[str, Any] = {
        "strategy": strategy.id,
        "ranking": [
            {"city": c.city.to_dict(), "result": _result_payload(c.result)}
            for c in ranking
        ],
        "table": _frame_records(city_frame(ranking)),
    }
    current_id = payload.get("currentCity")
    target_id = payload.get("targetCity")
    if current_id and target_id:
        try:
            current_city, target_city = get_city(current_id), get_city(target_id)
        except KeyError as exc:
            return jsonify({"error": exc.args[0]}), 404
        summary = relocation_summary(
            profile, strategy, current_city, target_city, current_year=current_year, config=cfg
        )
        body["relocation"] = {
            "currentCity": summary.current.city.id,
            "targetCity": summary.target.city.id,
            "monthlySavings": summary.monthly_savings,
            "annualSavings": summary.annual_savings,
            "corpusReduction": summary.corpus_reduction,
        }
    return jsonify(_sanitize_json_compat(body))


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("FIRE_LOG_LEVEL", "INFO").upper())
    app.run(debug=False, port=int(os.getenv("FIRE_PORT", "8000")))
