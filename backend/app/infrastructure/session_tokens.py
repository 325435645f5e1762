"""Admin Session Tokens — signed JWT sessions, bcrypt credential check, CSRF tokens.

Invariants:
    - Session tokens are HS256 JWTs carrying username, userId, iat and exp
    - verify_session_token returns None for any invalid, expired or tampered token
    - verify_password never raises on a malformed stored hash (returns False)
"""

import secrets
import time

import bcrypt
import jwt

ALGORITHM = "HS256"


def issue_session_token(
    username: str,
    secret: str,
    ttl_seconds: int = 3600,
    user_id: int = 1,
    now: int | None = None,
) -> str:
    issued_at = int(time.time()) if now is None else now
    payload = {
        "username": username,
        "userId": user_id,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_session_token(token: str, secret: str) -> dict | None:
    try:
        return jwt.decode(
            token, secret, algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError:
        return None


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def new_csrf_token() -> str:
    return secrets.token_hex(32)
