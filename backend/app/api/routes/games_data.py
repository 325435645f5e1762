"""Games Data Route — GET /api/gamesData?ids=<csv>.

Invariants:
    - Rate limit checked before any parsing or upstream call
    - Zero valid ids → 400, never an empty success
    - Upstream degradation never fails the request; only an unexpected
      exception in orchestration maps to the generic 500
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_client_ip, get_rate_limiter, get_upstream_client
from app.core.errors import (
    ErrorContext, OperationFailedError, RateLimitExceededError,
    RequestValidationFailed,
)
from app.core.place_ids import parse_place_ids
from app.core.repository_protocols import GamesUpstream, RateLimiter
from app.schemas.games import GamesDataResponse
from app.services.games_data import aggregate_games

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/gamesData", tags=["games"])

CACHE_CONTROL = "public, max-age=60, s-maxage=60"


@router.options("", status_code=status.HTTP_204_NO_CONTENT)
async def games_data_preflight():
    """CORS preflight."""
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={
            "Access-Control-Allow-Methods": "GET, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
            "Access-Control-Max-Age": "86400",
        },
    )


@router.get("", response_model=GamesDataResponse)
async def games_data(
    response: Response,
    ids: str = Query(""),
    client_ip: str = Depends(get_client_ip),
    limiter: RateLimiter = Depends(get_rate_limiter),
    upstream: GamesUpstream = Depends(get_upstream_client),
):
    """Aggregate name, visits and icon for up to 20 place ids."""
    if not limiter.allow(client_ip):
        logger.info("Rate limit exceeded", extra={"client_ip": client_ip})
        raise RateLimitExceededError(ErrorContext(client_ip=client_ip))

    place_ids = parse_place_ids(ids)
    if not place_ids:
        raise RequestValidationFailed(
            "No valid place IDs provided. IDs must be numeric.",
        )

    try:
        payload = await aggregate_games(place_ids, upstream)
    except Exception as e:
        logger.error(f"Games aggregation failed: {e}", exc_info=True)
        raise OperationFailedError(
            "An error occurred while fetching game data. Please try again.",
        )

    response.headers["Cache-Control"] = CACHE_CONTROL
    return payload
