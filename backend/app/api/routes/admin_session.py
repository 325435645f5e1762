"""Admin Session Routes — login, logout and the login page.

Invariants:
    - Callers outside the admin allow-list get the stealth 404 on every method
    - Login sets an http-only session cookie and a readable CSRF cookie,
      both Secure, SameSite=Strict, Path=/, 1 hour
    - Logout clears both cookies
"""

import hmac
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse

from app.api.deps import (
    FALLBACK_METHODS, get_client_ip, parse_body, require_allowed_ip,
)
from app.api.routes.admin_login_page import LOGIN_PAGE_HTML, NOT_FOUND_HTML
from app.config import Settings, get_settings
from app.core.admin_access import is_ip_allowed, usable_secret
from app.core.errors import (
    ConfigurationError, InvalidCredentialsError, MethodNotAllowedError,
    OperationFailedError, RequestValidationFailed,
)
from app.infrastructure.session_tokens import (
    issue_session_token, new_csrf_token, verify_password,
)
from app.schemas.admin import LoginRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])

_SESSION_OTHER_METHODS = ["GET", "PUT", "DELETE", *FALLBACK_METHODS]
_PAGE_OTHER_METHODS = ["POST", "PUT", "DELETE", *FALLBACK_METHODS]


def _set_session_cookies(
    response: Response, settings: Settings, token: str, csrf: str,
) -> None:
    common = {
        "max_age": settings.admin_session_ttl_seconds,
        "path": "/",
        "secure": settings.cookie_secure,
        "samesite": "strict",
    }
    response.set_cookie(settings.session_cookie_name, token, httponly=True, **common)
    response.set_cookie(settings.csrf_cookie_name, csrf, httponly=False, **common)


@router.post("/login")
async def login(
    request: Request,
    response: Response,
    client_ip: str = Depends(require_allowed_ip),
):
    """Verify credentials and open a 1-hour admin session."""
    body = await parse_body(request, LoginRequest)
    if not body.username or not body.password:
        raise RequestValidationFailed("Username and password are required")

    settings = get_settings()
    if not settings.admin_user or not settings.admin_pass_hash:
        raise ConfigurationError("Admin credentials are not configured")

    user_ok = hmac.compare_digest(
        body.username.encode(), settings.admin_user.encode(),
    )
    if not user_ok or not verify_password(body.password, settings.admin_pass_hash):
        logger.info("Admin login rejected", extra={"client_ip": client_ip})
        raise InvalidCredentialsError()

    secret = usable_secret(settings.admin_jwt_secret)
    if not secret:
        logger.error("ADMIN_JWT_SECRET missing or shorter than 16 characters")
        raise OperationFailedError("Failed to login")

    token = issue_session_token(
        body.username, secret, ttl_seconds=settings.admin_session_ttl_seconds,
    )
    _set_session_cookies(response, settings, token, new_csrf_token())
    logger.info("Admin logged in", extra={"client_ip": client_ip})
    return {"ok": True, "message": "Logged in"}


@router.post("/logout")
async def logout(
    response: Response, client_ip: str = Depends(require_allowed_ip),
):
    """Clear the session and CSRF cookies."""
    settings = get_settings()
    for name, http_only in (
        (settings.session_cookie_name, True),
        (settings.csrf_cookie_name, False),
    ):
        response.delete_cookie(
            name, path="/", secure=settings.cookie_secure,
            httponly=http_only, samesite="strict",
        )
    logger.info("Admin logged out", extra={"client_ip": client_ip})
    return {"ok": True, "message": "Logged out"}


@router.api_route("/login", methods=_SESSION_OTHER_METHODS, include_in_schema=False)
@router.api_route("/logout", methods=_SESSION_OTHER_METHODS, include_in_schema=False)
async def session_method_not_allowed(_: str = Depends(require_allowed_ip)):
    raise MethodNotAllowedError()


@router.get("/page-login", response_class=HTMLResponse)
async def login_page(client_ip: str = Depends(get_client_ip)):
    """Admin login page; plain HTML 404 outside the allow-list."""
    if not is_ip_allowed(client_ip, get_settings().admin_allowlist):
        return HTMLResponse(NOT_FOUND_HTML, status_code=404)
    return HTMLResponse(LOGIN_PAGE_HTML, headers={"Cache-Control": "no-store"})


@router.api_route(
    "/page-login", methods=_PAGE_OTHER_METHODS, include_in_schema=False,
)
async def login_page_method_not_allowed(_: str = Depends(require_allowed_ip)):
    raise MethodNotAllowedError()
