"""Error Handlers — global exception handlers rendering the {ok, error, code} envelope.

Invariants:
    - PortfolioError → its own envelope and status
    - RequestValidationError → 400 with a readable message plus field details
    - Starlette HTTPException (unknown route, wrong method) → same envelope
    - A framework 405 under /api/admin renders as the stealth 404 without an
      Allow header; gated 405s come from the routes, after the gate
    - Exception (catch-all) → 500, never leaks internal details, and carries
      the same security headers as every other response

Design Decisions:
    - Unknown routes and admin gate refusals render identically (stealth 404)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware import apply_response_headers, is_admin_path
from app.core.errors import PortfolioError, ErrorSeverity, StealthNotFoundError

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    404: "Not Found",
    405: "Method not allowed",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_portfolio_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def describe_validation_errors(errors: list) -> str:
    """First pydantic error as one human-readable line."""
    if not errors:
        return "Invalid request data"
    first = errors[0]
    message = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    location = [
        str(part) for part in first.get("loc", ())
        if part not in ("body", "query", "path", "header", "cookie")
    ]
    return f"{'.'.join(location)}: {message}" if location else message


def _register_portfolio_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        """Handle all domain/infrastructure errors."""
        level = (
            logging.ERROR if exc.severity == ErrorSeverity.CRITICAL
            else logging.INFO
        )
        logger.log(
            level,
            f"PortfolioError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_exception_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Framework-raised 404/405 in the same envelope as domain errors."""
        if (
            exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
            and is_admin_path(request.url.path)
        ):
            stealth = StealthNotFoundError("method")
            return JSONResponse(
                status_code=stealth.http_status, content=stealth.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "ok": False,
                "error": _HTTP_MESSAGES.get(exc.status_code, str(exc.detail)),
                "code": exc.status_code,
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "error": "An error occurred", "code": 500},
        )
        return apply_response_headers(request, response)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    return {
        "ok": False,
        "error": describe_validation_errors(errors),
        "code": status.HTTP_400_BAD_REQUEST,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ],
    }
