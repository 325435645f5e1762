"""Games Data Service — fan-out to the upstream lookups and join the results.

Invariants:
    - One place→universe lookup per distinct place id
    - Exactly one metadata call and one icon call per request, over distinct universe ids
    - Upstream failures degrade fields to null; this function never raises for them
    - Output order equals the caller's place id order

Design Decisions:
    - Impureim sandwich: IO here, all shaping in core/games_aggregate.py
    - Lookups run concurrently in an asyncio.TaskGroup: an unexpected error in
      one cancels its siblings before the upstream client is closed, and
      surfaces as an ExceptionGroup
"""

import asyncio
import logging

from app.core.domain_types import PlaceId
from app.core.games_aggregate import (
    build_game_info,
    build_icon_map,
    join_game_records,
    resolve_universe_id,
    unique_universe_ids,
)
from app.core.repository_protocols import GamesUpstream
from app.schemas.games import GameRecordOut, GamesDataResponse

logger = logging.getLogger(__name__)


async def aggregate_games(
    place_ids: list[PlaceId], upstream: GamesUpstream,
) -> GamesDataResponse:
    """Resolve, batch-fetch and join game data for the given place ids."""
    distinct_places = list(dict.fromkeys(place_ids))
    async with asyncio.TaskGroup() as tg:
        lookups = {
            pid: tg.create_task(upstream.place_to_universe(pid))
            for pid in distinct_places
        }
    universe_map = {
        pid: resolve_universe_id(pid, task.result())
        for pid, task in lookups.items()
    }
    universe_ids = unique_universe_ids(list(universe_map.values()))

    async with asyncio.TaskGroup() as tg:
        details = tg.create_task(upstream.game_details(universe_ids))
        icons = tg.create_task(upstream.game_icons(universe_ids))
    records, total = join_game_records(
        place_ids,
        universe_map,
        build_game_info(details.result()),
        build_icon_map(icons.result()),
    )
    logger.info(
        f"Aggregated {len(records)} game records",
        extra={"place_count": len(place_ids)},
    )
    return GamesDataResponse(
        data=[GameRecordOut.from_record(r) for r in records],
        total_visits=str(total),
        count=len(records),
    )
