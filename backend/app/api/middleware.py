"""HTTP Middleware — response headers applied to every route, errors included.

Invariants:
    - Every response carries X-Content-Type-Options: nosniff
    - /api/admin/* responses carry Cache-Control: no-store
    - CORS origin echo only on CORS_PATHS, decided by core/cors.py
    - apply_response_headers is also called by the catch-all 500 handler,
      which runs outside this middleware
"""

from fastapi import FastAPI, Request, Response

from app.config import get_settings
from app.core.cors import resolve_allowed_origin

CORS_PATHS = ("/api/gamesData",)
ADMIN_PREFIX = "/api/admin"


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def apply_response_headers(request: Request, response: Response) -> Response:
    path = request.url.path
    response.headers["X-Content-Type-Options"] = "nosniff"

    if is_admin_path(path):
        response.headers["Cache-Control"] = "no-store"

    if path.rstrip("/") in CORS_PATHS:
        origin = resolve_allowed_origin(
            request.headers.get("origin"),
            request.headers.get("host"),
            get_settings().cors_allow_origins,
        )
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
    return response


def register_middleware(app: FastAPI) -> None:

    @app.middleware("http")
    async def response_headers(request: Request, call_next):
        response = await call_next(request)
        return apply_response_headers(request, response)
