"""Flask application factory for the py-vmsim HTTP API.

The ``create_app`` function returns a Flask app with two endpoints:

- ``GET /api/defaults`` — return the default ``MachineConfig``.
- ``POST /api/simulate`` — run a workload and return report and log.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from py_vmsim.config import ConfigError, MachineConfig
from py_vmsim.loader import parse_workload
from py_vmsim.logging import Logger, LogLevel
from py_vmsim.scheduler import MemoryStarvationError, Scheduler, SchedulerLimitError
from py_vmsim.system import SystemState

_HTTP_BAD_REQUEST = 400
_HTTP_UNPROCESSABLE = 422

# Keeps one request from tying up the server on a thrashing workload.
DEFAULT_MAX_TURNS = 1_000_000


def create_app(*, max_turns: int = DEFAULT_MAX_TURNS) -> Flask:
    """Create and configure the Flask application.

    Args:
        max_turns: Scheduler turn limit applied to every simulation.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/defaults")
    def defaults() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the default machine configuration as JSON."""
        return jsonify(MachineConfig().to_dict())

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a simulation and return its report.

        Expects JSON body: ``{"workload": "...", "machine": {...}, "verbose": false}``

        Returns:
            JSON with ``report`` and ``log`` fields, or ``error``.

        """
        data: Any = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("workload"), str):
            return jsonify({"error": "Missing 'workload' field"}), _HTTP_BAD_REQUEST

        overrides = data.get("machine", {})
        if not isinstance(overrides, dict):
            return jsonify({"error": "'machine' must be an object"}), _HTTP_BAD_REQUEST

        try:
            config = MachineConfig.from_dict(overrides)
            workload = parse_workload(data["workload"], config=config)
        except ConfigError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        threshold = LogLevel.DEBUG if data.get("verbose") else LogLevel.INFO
        logger = Logger(threshold=threshold)
        system = SystemState.create(workload, config=config, logger=logger)
        try:
            report = Scheduler(system, max_turns=max_turns).run()
        except (MemoryStarvationError, SchedulerLimitError) as e:
            return jsonify({"error": str(e)}), _HTTP_UNPROCESSABLE

        return jsonify(
            {
                "report": report.to_dict(),
                "log": [str(entry) for entry in logger.entries],
            }
        )

    return app


def main() -> None:
    """Run the API development server.

    This is the ``py-vmsim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
