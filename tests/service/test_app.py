"""Tests for the FastAPI service mode."""

from __future__ import annotations

import json

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from obdlint.config import RuleOverride
from obdlint.rules import RuleRegistry
from obdlint.service import create_app
from obdlint.stores import LintCache


@pytest.fixture
def client() -> TestClient:
    registry = RuleRegistry.default({"mode-01-filtering": RuleOverride(enabled=False)})
    return TestClient(create_app(lambda: registry, cache=LintCache()))


def _signalset(signal_id: str) -> str:
    return json.dumps(
        {
            "commands": [
                {
                    "hdr": "7E0",
                    "cmd": {"22": "1100"},
                    "signals": [{"id": signal_id, "path": "Misc", "name": "Value", "fmt": {"len": 8}}],
                }
            ]
        },
        indent=2,
    )


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_rules_endpoint_reflects_configuration(client: TestClient) -> None:
    response = client.get("/rules")

    assert response.status_code == 200
    rules = {rule["id"]: rule for rule in response.json()}
    assert rules["mode-01-filtering"]["enabled"] is False
    assert rules["signal-naming-convention"]["severity"] == "error"


def test_lint_endpoint_returns_results_with_fixes(client: TestClient) -> None:
    response = client.post("/lint", json={"text": _signalset("bad-id")})

    assert response.status_code == 200
    data = response.json()
    assert data["has_errors"] is True
    naming = [result for result in data["results"] if result["rule_id"] == "signal-naming-convention"]
    assert len(naming) == 1
    assert naming[0]["suggestion"]["edits"][0]["new_text"] == '"BAD_ID"'


def test_lint_endpoint_reports_parse_errors(client: TestClient) -> None:
    response = client.post("/lint", json={"text": '{"commands": ['})

    assert response.status_code == 200
    data = response.json()
    assert [result["rule_id"] for result in data["results"]] == ["parse-error"]


def test_debug_filter_calculated(client: TestClient) -> None:
    response = client.post(
        "/debug-filter",
        json={"supported_years": [2019, 2021], "start_year": 2015, "end_year": 2024},
    )

    assert response.status_code == 200
    assert response.json() == {
        "status": "calculated",
        "filter": {"to": 2018, "years": [2020], "from": 2022},
    }


def test_debug_filter_without_coverage(client: TestClient) -> None:
    response = client.post("/debug-filter", json={"supported_years": []})

    assert response.json() == {"status": "none", "filter": None}


def test_debug_filter_optimizes_existing(client: TestClient) -> None:
    optimized = client.post(
        "/debug-filter", json={"supported_years": [2019, 2022], "existing": {"to": 2020}}
    )
    removed = client.post(
        "/debug-filter", json={"supported_years": [2019], "existing": {"years": [2019]}}
    )
    unchanged = client.post(
        "/debug-filter", json={"supported_years": [2019], "existing": {"to": 2018}}
    )

    assert optimized.json() == {"status": "optimized", "filter": {"to": 2018}}
    assert removed.json()["status"] == "remove"
    assert unchanged.json()["status"] == "unchanged"


def test_lint_cache_drops_expired_documents() -> None:
    now = [0.0]
    cache = LintCache(ttl_seconds=60, clock=lambda: now[0])
    client = TestClient(create_app(RuleRegistry.default, cache=cache))

    for signal_id in ("FIRST", "SECOND", "THIRD"):
        assert client.post("/lint", json={"text": _signalset(signal_id)}).status_code == 200
    assert len(cache) == 3

    now[0] += 60
    client.post("/lint", json={"text": _signalset("FOURTH")})

    assert len(cache) == 1
