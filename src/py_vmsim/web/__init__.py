"""HTTP API for py-vmsim.

This package provides a Flask application that runs simulations on
request.  It is an **optional** extra — install with::

    pip install py-vmsim[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``GET /api/defaults`` — the default machine configuration.
- ``POST /api/simulate`` — run a workload and return the report as JSON.
"""
