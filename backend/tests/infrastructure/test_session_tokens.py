"""Admin Session Tokens — JWT issue/verify, bcrypt check and CSRF token shape."""

import time

import bcrypt
import jwt

from app.infrastructure.session_tokens import (
    issue_session_token, new_csrf_token, verify_password, verify_session_token,
)

SECRET = "unit-test-secret-" + "0" * 48


def test_round_trip_carries_claims():
    token = issue_session_token("admin", SECRET, ttl_seconds=3600)
    claims = verify_session_token(token, SECRET)
    assert claims["username"] == "admin"
    assert claims["userId"] == 1
    assert claims["exp"] - claims["iat"] == 3600


def test_wrong_secret_rejected():
    token = issue_session_token("admin", SECRET)
    assert verify_session_token(token, "another-secret-" + "1" * 48) is None


def test_expired_token_rejected():
    issued = int(time.time()) - 7200
    token = issue_session_token("admin", SECRET, ttl_seconds=3600, now=issued)
    assert verify_session_token(token, SECRET) is None


def test_garbage_token_rejected():
    assert verify_session_token("not-a-jwt", SECRET) is None


def test_token_without_expiry_rejected():
    token = jwt.encode({"username": "admin", "iat": int(time.time())}, SECRET, algorithm="HS256")
    assert verify_session_token(token, SECRET) is None


def test_other_algorithm_rejected():
    token = jwt.encode(
        {"username": "admin", "iat": int(time.time()), "exp": int(time.time()) + 60},
        SECRET, algorithm="HS512",
    )
    assert verify_session_token(token, SECRET) is None


def test_verify_password():
    hashed = bcrypt.hashpw(b"s3cret", bcrypt.gensalt(rounds=4)).decode()
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_malformed_hash_returns_false():
    assert verify_password("s3cret", "not-a-bcrypt-hash") is False


def test_csrf_tokens_are_64_hex_chars_and_unique():
    first, second = new_csrf_token(), new_csrf_token()
    assert len(first) == 64
    int(first, 16)
    assert first != second
