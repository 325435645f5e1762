"""Admin Access — pure checks behind the admin gate.

Invariants:
    - Empty allow-list denies everyone (fail-closed)
    - CSRF check applies to write methods only, compared in constant time
    - A secret shorter than MIN_SECRET_LENGTH is treated as absent
"""

import hmac

from app.core.domain_types import WRITE_METHODS

MIN_SECRET_LENGTH = 16


def is_ip_allowed(client_ip: str, allow_list: list[str]) -> bool:
    if not allow_list:
        return False
    return client_ip in allow_list


def usable_secret(secret: str | None) -> str | None:
    if not secret or len(secret) < MIN_SECRET_LENGTH:
        return None
    return secret


def is_write_method(method: str) -> bool:
    return method.upper() in WRITE_METHODS


def csrf_matches(header_token: str | None, cookie_token: str | None) -> bool:
    """Double-submit check: header token must equal the cookie token."""
    if not header_token or not cookie_token:
        return False
    return hmac.compare_digest(header_token.encode(), cookie_token.encode())
