"""API Layer — FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is JSON in the {ok, ...} envelope, except the login page

Design Decisions:
    - Thin routes delegate to services; the admin gate lives in deps.py
"""
