"""Roblox Games Client — host allow-list, failure mapping and URL shapes.

All HTTP traffic goes through httpx.MockTransport; nothing leaves the process.
"""

import httpx
import pytest

from app.core.domain_types import PlaceId, UniverseId, UpstreamFailure
from app.infrastructure.roblox_client import RobloxGamesClient, build_http_client


def make_client(handler, seen: list | None = None) -> RobloxGamesClient:
    def recording(request: httpx.Request):
        if seen is not None:
            seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(
        transport=httpx.MockTransport(recording), follow_redirects=False,
    )
    return RobloxGamesClient(http, timeout_seconds=1.0)


async def test_disallowed_host_is_never_requested():
    seen: list = []
    client = make_client(lambda r: httpx.Response(200, json={}), seen)

    result = await client.fetch_json("https://evil.example.com/steal")

    assert not result.ok
    assert result.reason == UpstreamFailure.HOST_NOT_ALLOWED
    assert seen == []


async def test_success_returns_decoded_json():
    client = make_client(lambda r: httpx.Response(200, json={"universeId": 42}))
    result = await client.place_to_universe(PlaceId("123"))
    assert result.ok
    assert result.payload == {"universeId": 42}


async def test_non_success_status_is_a_failure():
    client = make_client(lambda r: httpx.Response(503, json={"error": "down"}))
    result = await client.fetch_json("https://games.roblox.com/v1/games")
    assert result.reason == UpstreamFailure.HTTP_STATUS


async def test_redirect_is_not_followed():
    seen: list = []
    client = make_client(
        lambda r: httpx.Response(302, headers={"Location": "https://evil.example.com/"}),
        seen,
    )
    result = await client.fetch_json("https://games.roblox.com/v1/games")
    assert result.reason == UpstreamFailure.HTTP_STATUS
    assert len(seen) == 1


async def test_invalid_json_is_a_failure():
    client = make_client(lambda r: httpx.Response(200, text="<html>oops</html>"))
    result = await client.fetch_json("https://games.roblox.com/v1/games")
    assert result.reason == UpstreamFailure.INVALID_JSON


async def test_timeout_is_a_failure():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    result = await make_client(handler).fetch_json("https://apis.roblox.com/x")
    assert result.reason == UpstreamFailure.TIMEOUT


async def test_connection_error_is_a_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    result = await make_client(handler).fetch_json("https://apis.roblox.com/x")
    assert result.reason == UpstreamFailure.TRANSPORT_ERROR


async def test_failures_are_logged_with_reason(caplog):
    client = make_client(lambda r: httpx.Response(500))
    with caplog.at_level("WARNING"):
        await client.fetch_json("https://games.roblox.com/v1/games")
    record = next(r for r in caplog.records if "Upstream call failed" in r.message)
    assert record.reason == "http_status"
    assert record.upstream_host == "games.roblox.com"
    assert record.status_code == 500


async def test_request_urls_match_upstream_endpoints():
    seen: list = []
    client = make_client(lambda r: httpx.Response(200, json={"data": []}), seen)

    await client.place_to_universe(PlaceId("123"))
    await client.game_details([UniverseId("1"), UniverseId("2")])
    await client.game_icons([UniverseId("1")])

    urls = [str(r.url) for r in seen]
    assert urls[0] == "https://apis.roblox.com/universes/v1/places/123/universe"
    assert urls[1].startswith("https://games.roblox.com/v1/games?")
    assert seen[1].url.params["universeIds"] == "1,2"
    assert urls[2].startswith("https://thumbnails.roblox.com/v1/games/icons?")
    assert seen[2].url.params["universeIds"] == "1"
    assert seen[2].url.params["size"] == "420x420"
    assert seen[2].url.params["format"] == "Png"
    assert seen[2].url.params["isCircular"] == "false"


@pytest.mark.parametrize("header, expected", [
    ("accept", "application/json"),
    ("user-agent", "Test-Agent/1.0"),
])
async def test_http_client_sends_default_headers(header, expected):
    http = build_http_client(timeout_seconds=2.0, user_agent="Test-Agent/1.0")
    try:
        assert http.headers[header] == expected
        assert http.follow_redirects is False
    finally:
        await http.aclose()
