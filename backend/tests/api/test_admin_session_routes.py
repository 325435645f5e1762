"""Admin session routes — login, logout, method guard and login page."""

import pytest

from app.config import get_settings
from app.infrastructure.session_tokens import verify_session_token
from tests.env_defaults import ADMIN_JWT_SECRET, ADMIN_PASSWORD, ADMIN_USER, OUTSIDER_IP


def set_cookies(response) -> dict[str, str]:
    """Map cookie name → full Set-Cookie header value."""
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        name = header.split("=", 1)[0]
        cookies[name] = header
    return cookies


def cookie_value(header: str) -> str:
    return header.split(";", 1)[0].split("=", 1)[1]


async def login(client, username=ADMIN_USER, password=ADMIN_PASSWORD, **kwargs):
    return await client.post(
        "/api/admin/login", json={"username": username, "password": password}, **kwargs,
    )


async def test_login_sets_session_and_csrf_cookies(client):
    r = await login(client)

    assert r.status_code == 200
    assert r.json() == {"ok": True, "message": "Logged in"}
    cookies = set_cookies(r)
    session, csrf = cookies["yd_admin"], cookies["yd_csrf"]

    assert "HttpOnly" in session
    assert "HttpOnly" not in csrf
    for header in (session, csrf):
        lowered = header.lower()
        assert "secure" in lowered
        assert "samesite=strict" in lowered
        assert "path=/" in lowered
        assert "max-age=3600" in lowered

    claims = verify_session_token(cookie_value(session), ADMIN_JWT_SECRET)
    assert claims["username"] == ADMIN_USER
    assert len(cookie_value(csrf)) == 64


async def test_login_username_is_trimmed(client):
    r = await login(client, username=f"  {ADMIN_USER} ")
    assert r.status_code == 200


async def test_login_wrong_password_is_401(client):
    r = await login(client, password="nope")
    assert r.status_code == 401
    assert r.json() == {"ok": False, "error": "Invalid username or password", "code": 401}
    assert "set-cookie" not in r.headers


async def test_login_wrong_user_is_401(client):
    r = await login(client, username="root")
    assert r.status_code == 401


@pytest.mark.parametrize("body", [
    {},
    {"username": "admin"},
    {"username": "", "password": "x"},
    {"username": "   ", "password": "x"},
])
async def test_login_missing_fields_is_400(client, body):
    r = await client.post("/api/admin/login", json=body)
    assert r.status_code == 400
    assert r.json()["error"] == "Username and password are required"


async def test_login_invalid_json_is_400(client):
    r = await client.post(
        "/api/admin/login", content=b"{oops",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid JSON"


async def test_login_oversized_body_is_400(client):
    r = await client.post(
        "/api/admin/login",
        json={"username": "admin", "password": "x" * 250_000},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Payload too large"


async def test_login_from_outsider_is_404(client):
    r = await login(client, headers={"X-Forwarded-For": OUTSIDER_IP})
    assert r.status_code == 404
    assert r.json() == {"ok": False, "error": "Not Found", "code": 404}


async def test_login_without_configured_credentials_is_500(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "admin_pass_hash", "")
    r = await login(client)
    assert r.status_code == 500


async def test_login_with_short_secret_fails_without_cookies(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "admin_jwt_secret", "short")
    r = await login(client)
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to login"
    assert "set-cookie" not in r.headers


async def test_logout_clears_both_cookies(client):
    r = await client.post("/api/admin/logout")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "message": "Logged out"}
    cookies = set_cookies(r)
    for name in ("yd_admin", "yd_csrf"):
        assert "max-age=0" in cookies[name].lower()


async def test_logout_from_outsider_is_404(client):
    r = await client.post("/api/admin/logout", headers={"X-Forwarded-For": OUTSIDER_IP})
    assert r.status_code == 404


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
async def test_other_methods_are_405_for_allowed_ip(client, method):
    for path in ("/api/admin/login", "/api/admin/logout"):
        r = await client.request(method, path)
        assert r.status_code == 405
        assert r.json() == {"ok": False, "error": "Method not allowed", "code": 405}


async def test_other_methods_are_404_for_outsider(client):
    r = await client.get("/api/admin/login", headers={"X-Forwarded-For": OUTSIDER_IP})
    assert r.status_code == 404


async def test_login_page_served_to_allowed_ip(client):
    r = await client.get("/api/admin/page-login")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert r.headers["cache-control"] == "no-store"
    assert "/api/admin/login" in r.text


async def test_login_page_is_plain_404_for_outsider(client):
    r = await client.get("/api/admin/page-login", headers={"X-Forwarded-For": OUTSIDER_IP})
    assert r.status_code == 404
    assert r.headers["content-type"].startswith("text/html")
    assert "Not Found" in r.text
    assert "/api/admin/login" not in r.text
