"""Roblox Games Client — outbound lookups behind a fixed host allow-list.

Invariants:
    - A URL whose host is not in allowed_hosts is never requested
    - Every call has an explicit timeout and never follows redirects
      (a 3xx answer counts as a failure)
    - No method raises for network/HTTP/JSON problems — each returns an
      UpstreamResult and logs the failure reason at WARNING
    - No retries: one attempt per call

Design Decisions:
    - httpx.AsyncClient injected, not created here: the dependency layer owns
      its lifecycle and tests pass a MockTransport-backed client
"""

import logging
from urllib.parse import urlsplit

import httpx

from app.core.domain_types import (
    UPSTREAM_HOSTS, PlaceId, UniverseId, UpstreamFailure,
)
from app.core.upstream_result import UpstreamResult

logger = logging.getLogger(__name__)

PLACE_UNIVERSE_URL = "https://apis.roblox.com/universes/v1/places/{place_id}/universe"
GAMES_URL = "https://games.roblox.com/v1/games"
ICONS_URL = "https://thumbnails.roblox.com/v1/games/icons"
ICON_QUERY = "size=420x420&format=Png&isCircular=false"


def build_http_client(
    timeout_seconds: float = 8.0, user_agent: str = "YoussefDesign-Portfolio/1.0",
) -> httpx.AsyncClient:
    """AsyncClient configured for upstream calls (JSON, no redirects)."""
    return httpx.AsyncClient(
        timeout=timeout_seconds,
        follow_redirects=False,
        headers={"Accept": "application/json", "User-Agent": user_agent},
    )


class RobloxGamesClient:
    """Implements the GamesUpstream protocol over HTTPS."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        allowed_hosts: frozenset[str] = UPSTREAM_HOSTS,
        timeout_seconds: float = 8.0,
    ):
        self.http = http
        self.allowed_hosts = allowed_hosts
        self.timeout_seconds = timeout_seconds

    async def fetch_json(self, url: str) -> UpstreamResult:
        """GET a JSON document from an allow-listed host."""
        host = urlsplit(url).netloc
        if host not in self.allowed_hosts:
            return self._fail(UpstreamFailure.HOST_NOT_ALLOWED, host)
        try:
            response = await self.http.get(
                url, timeout=self.timeout_seconds, follow_redirects=False,
            )
        except httpx.TimeoutException:
            return self._fail(UpstreamFailure.TIMEOUT, host)
        except httpx.HTTPError:
            return self._fail(UpstreamFailure.TRANSPORT_ERROR, host)

        if not response.is_success:
            return self._fail(
                UpstreamFailure.HTTP_STATUS, host, response.status_code,
            )
        try:
            return UpstreamResult.success(response.json())
        except ValueError:
            return self._fail(UpstreamFailure.INVALID_JSON, host)

    async def place_to_universe(self, place_id: PlaceId) -> UpstreamResult:
        return await self.fetch_json(PLACE_UNIVERSE_URL.format(place_id=place_id))

    async def game_details(self, universe_ids: list[UniverseId]) -> UpstreamResult:
        return await self.fetch_json(
            f"{GAMES_URL}?universeIds={','.join(universe_ids)}",
        )

    async def game_icons(self, universe_ids: list[UniverseId]) -> UpstreamResult:
        return await self.fetch_json(
            f"{ICONS_URL}?universeIds={','.join(universe_ids)}&{ICON_QUERY}",
        )

    @staticmethod
    def _fail(
        reason: UpstreamFailure, host: str, status_code: int | None = None,
    ) -> UpstreamResult:
        logger.warning(
            f"Upstream call failed: {reason.value}",
            extra={
                "reason": reason.value,
                "upstream_host": host,
                "status_code": status_code,
            },
        )
        return UpstreamResult.failure(reason)
