"""Route Dependencies — injectable collaborators and the admin gate.

Invariants:
    - get_rate_limiter / get_upstream_client are the only way routes reach
      the limiter and the upstream APIs (tests override them)
    - require_admin checks IP allow-list, session token, then CSRF on writes;
      every refusal raises StealthNotFoundError (indistinguishable 404)
    - parse_body reads JSON only after the gate has passed

Design Decisions:
    - Rate limiter lives on app.state, created with the app — no module global
    - Upstream httpx client is per request (yield dependency closes it)
"""

import json
import logging
from dataclasses import dataclass
from typing import AsyncGenerator, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from app.api.error_handlers import describe_validation_errors
from app.config import get_settings
from app.core.admin_access import (
    csrf_matches, is_ip_allowed, is_write_method, usable_secret,
)
from app.core.client_ip import extract_client_ip
from app.core.domain_types import GateDenial
from app.core.errors import ErrorContext, RequestValidationFailed, StealthNotFoundError
from app.core.repository_protocols import GamesUpstream, RateLimiter
from app.infrastructure.roblox_client import RobloxGamesClient, build_http_client
from app.infrastructure.session_tokens import verify_session_token

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 200_000

# Methods without a handler on a gated path: they pass the gate, then get 405
FALLBACK_METHODS = ["PATCH", "OPTIONS", "HEAD"]

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_client_ip(request: Request) -> str:
    peer = request.client.host if request.client else None
    return extract_client_ip(request.headers, peer)


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


async def get_upstream_client() -> AsyncGenerator[GamesUpstream, None]:
    """Per-request upstream client; the underlying httpx client is closed after the response."""
    settings = get_settings()
    async with build_http_client(
        settings.upstream_timeout_seconds, settings.upstream_user_agent,
    ) as http:
        yield RobloxGamesClient(
            http, timeout_seconds=settings.upstream_timeout_seconds,
        )


# ─── Admin gate ──────────────────────────────────────────────────

@dataclass(frozen=True)
class AdminSession:
    username: str
    claims: dict


def _deny(reason: GateDenial, client_ip: str) -> StealthNotFoundError:
    logger.info(
        "Admin gate denied request",
        extra={"reason": reason.value, "client_ip": client_ip},
    )
    return StealthNotFoundError(reason.value, ErrorContext(client_ip=client_ip))


def require_allowed_ip(client_ip: str = Depends(get_client_ip)) -> str:
    """IP allow-list only — login/logout/login page."""
    if not is_ip_allowed(client_ip, get_settings().admin_allowlist):
        raise _deny(GateDenial.IP, client_ip)
    return client_ip


def require_admin(
    request: Request, client_ip: str = Depends(require_allowed_ip),
) -> AdminSession:
    """Full admin gate: allow-listed IP, valid session token, CSRF on writes."""
    settings = get_settings()
    secret = usable_secret(settings.admin_jwt_secret)
    if not secret:
        raise _deny(GateDenial.SECRET, client_ip)

    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise _deny(GateDenial.TOKEN, client_ip)
    claims = verify_session_token(token, secret)
    if claims is None:
        raise _deny(GateDenial.INVALID, client_ip)

    if is_write_method(request.method) and not csrf_matches(
        request.headers.get("x-csrf-token"),
        request.cookies.get(settings.csrf_cookie_name),
    ):
        raise _deny(GateDenial.CSRF, client_ip)

    return AdminSession(username=str(claims.get("username", "")), claims=claims)


# ─── Body parsing ────────────────────────────────────────────────

async def read_json_body(request: Request) -> dict:
    """Read a JSON object body; empty body reads as {}."""
    raw = await request.body()
    if len(raw) > MAX_BODY_BYTES:
        raise RequestValidationFailed("Payload too large")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise RequestValidationFailed("Invalid JSON")
    if not isinstance(data, dict):
        raise RequestValidationFailed("Invalid JSON")
    return data


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    data = await read_json_body(request)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationFailed(describe_validation_errors(e.errors()))
