"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Rate limiting and upstream IO are reached only through these Protocols
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - RateLimiter.allow is sync: the in-memory implementation does no IO; a
      shared-store implementation can wrap its own client behind the same call
"""

from typing import Protocol

from app.core.domain_types import PlaceId, UniverseId
from app.core.upstream_result import UpstreamResult


class RateLimiter(Protocol):
    """Admits or rejects one request for a key (client address)."""
    def allow(self, key: str) -> bool: ...


class GamesUpstream(Protocol):
    """Contract for the three upstream game lookups — implemented by shell."""
    async def place_to_universe(self, place_id: PlaceId) -> UpstreamResult: ...
    async def game_details(
        self, universe_ids: list[UniverseId],
    ) -> UpstreamResult: ...
    async def game_icons(
        self, universe_ids: list[UniverseId],
    ) -> UpstreamResult: ...
