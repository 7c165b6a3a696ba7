"""Integration tests for the REST API."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from panelcut.web import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def load_job(jobs_path: Path, name: str) -> dict[str, Any]:
    return json.loads((jobs_path / name).read_text(encoding="utf-8"))


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestOptimizeEndpoint:
    """Tests for POST /api/v1/optimize."""

    def test_successful_job(self, client: TestClient, jobs_path: Path) -> None:
        response = client.post(
            "/api/v1/optimize", json={"job": load_job(jobs_path, "cabinet.json")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total_placements"] == 10
        assert data["cut_sequences"] is None
        placement = data["sheet_usages"][0]["placements"][0]
        assert data["sorted_parts"][placement["row"]]["name"] in {"Side", "Block"}

    def test_include_sequences(self, client: TestClient, jobs_path: Path) -> None:
        response = client.post(
            "/api/v1/optimize",
            json={"job": load_job(jobs_path, "simple.json"), "include_sequences": True},
        )

        assert response.status_code == 200
        sequences = response.json()["cut_sequences"]
        assert sequences[0]["sheet_id"] == "Sheet-1"
        assert sequences[0]["steps"][0]["cut_type"] == "rip"

    def test_unsatisfiable_job_is_not_an_http_error(
        self, client: TestClient, jobs_path: Path
    ) -> None:
        response = client.post(
            "/api/v1/optimize", json={"job": load_job(jobs_path, "too_large.json")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["failure_kind"] == "fit"
        assert "too large to fit" in data["message"]
        assert data["sheet_usages"] == []

    def test_invalid_job_is_422(self, client: TestClient, jobs_path: Path) -> None:
        response = client.post(
            "/api/v1/optimize", json={"job": load_job(jobs_path, "unknown_field.json")}
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "stocks[0].colour"

    def test_missing_job_body(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json={})
        assert response.status_code == 422


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_feasible_job(self, client: TestClient, jobs_path: Path) -> None:
        response = client.post(
            "/api/v1/validate", json={"job": load_job(jobs_path, "lumber.json")}
        )

        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "errors": []}

    def test_infeasible_job(self, client: TestClient) -> None:
        job = {
            "stocks": [{"length": 100, "width": 100, "thickness": 18}],
            "parts": [{"length": 60, "width": 60, "thickness": 18, "quantity": 3}],
        }

        response = client.post("/api/v1/validate", json={"job": job})

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"][0].startswith("Insufficient capacity")

    def test_schema_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/validate", json={"job": {"parts": []}})

        assert response.status_code == 422
        assert response.json()["error"].startswith("Job validation failed:")
