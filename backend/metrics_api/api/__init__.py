"""API Layer: FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Failures leave a route only as a raised MetricsError (via Result.unwrap)

Design Decisions:
    - Thin routes delegate to services; services are wired per request in
      dependencies.py
"""
