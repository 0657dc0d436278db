"""Tests for the HTTP API.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from py_vmsim.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNPROCESSABLE = 422

TINY_MACHINE = {
    "page_size": 16,
    "element_size": 4,
    "total_frames": 64,
    "user_frames": 4,
    "page_table_size": 32,
    "essential_pages": 2,
}


def _create_client(**kwargs: Any) -> Any:
    """Create a test client from a fresh app."""
    app = create_app(**kwargs)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)

    def test_defaults_endpoint(self) -> None:
        """GET /api/defaults returns the default machine."""
        response = _create_client().get("/api/defaults")
        assert response.status_code == HTTP_OK
        assert response.get_json()["user_frames"] == 12288


class TestSimulateEndpoint:
    """Verify POST /api/simulate."""

    def test_runs_workload(self) -> None:
        """A valid workload returns its report."""
        response = _create_client().post("/api/simulate", json={"workload": "2 1 1 0 1 0"})
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["report"] == {
            "page_accesses": 0,
            "page_faults": 0,
            "swaps": 0,
            "degree_of_multiprogramming": 2,
        }

    def test_machine_overrides_and_log(self) -> None:
        """Machine overrides apply and swap notices come back in the log."""
        response = _create_client().post(
            "/api/simulate",
            json={"workload": "3 1 1 0 1 0 1 0", "machine": TINY_MACHINE},
        )
        data = response.get_json()
        assert data["report"]["swaps"] == 1
        assert any("Swapping out process   2" in line for line in data["log"])

    def test_missing_workload(self) -> None:
        """A body without 'workload' is a bad request."""
        response = _create_client().post("/api/simulate", json={})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_non_json_body(self) -> None:
        """A non-JSON body is a bad request."""
        response = _create_client().post("/api/simulate", data="nope")
        assert response.status_code == HTTP_BAD_REQUEST

    def test_json_list_body(self) -> None:
        """A JSON body that is not an object is a bad request."""
        response = _create_client().post("/api/simulate", json=["1 1 1 0"])
        assert response.status_code == HTTP_BAD_REQUEST

    def test_invalid_workload(self) -> None:
        """Configuration errors surface as 400 with the message."""
        response = _create_client().post("/api/simulate", json={"workload": "0 1"})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "Invalid number of processes" in response.get_json()["error"]

    def test_unknown_machine_key(self) -> None:
        """Unknown machine settings are rejected."""
        response = _create_client().post(
            "/api/simulate",
            json={"workload": "1 1 1 0", "machine": {"bogus": 1}},
        )
        assert response.status_code == HTTP_BAD_REQUEST

    def test_machine_must_be_object(self) -> None:
        """'machine' must be a JSON object."""
        response = _create_client().post(
            "/api/simulate",
            json={"workload": "1 1 1 0", "machine": [1]},
        )
        assert response.status_code == HTTP_BAD_REQUEST

    def test_starvation_is_unprocessable(self) -> None:
        """A machine too small for the workload returns 422."""
        response = _create_client().post(
            "/api/simulate",
            json={"workload": "1 1 8 5", "machine": {**TINY_MACHINE, "user_frames": 1}},
        )
        assert response.status_code == HTTP_UNPROCESSABLE

    def test_turn_limit_is_unprocessable(self) -> None:
        """Hitting the turn limit returns 422."""
        response = _create_client(max_turns=1).post(
            "/api/simulate", json={"workload": "1 3 8 1 2 3"}
        )
        assert response.status_code == HTTP_UNPROCESSABLE
