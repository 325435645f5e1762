"""Games Aggregate — pure join of upstream lookups onto the caller's place ids.

Invariants:
    - A failed or malformed universe lookup falls back to the place id itself
    - Output records follow the caller's order, one per input id (duplicates kept)
    - Upstream batch calls receive each universe id once, first-seen order
    - total_visits sums math.trunc(visits) over records with a finite numeric visit count
    - Never raises on malformed upstream payloads — bad entries are skipped

Design Decisions:
    - Fallback policy lives here, not in the HTTP client: the client reports
      success/failure, this module decides what a failure means
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from app.core.domain_types import PlaceId, UniverseId
from app.core.upstream_result import UpstreamResult

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class GameInfo:
    name: str | None
    visits: int | float | None


@dataclass(frozen=True)
class GameRecord:
    """One joined result row, aligned with one input place id."""
    input_id: PlaceId
    universe_id: UniverseId
    name: str | None
    visits: int | float | None
    icon: str | None


def resolve_universe_id(place_id: PlaceId, result: UpstreamResult) -> UniverseId:
    """Canonical id from a place→universe lookup, or the place id on any failure."""
    if not result.ok or not isinstance(result.payload, dict):
        return UniverseId(place_id)
    value = result.payload.get("universeId")
    if isinstance(value, bool):
        return UniverseId(place_id)
    if isinstance(value, int):
        return UniverseId(str(value))
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return UniverseId(str(int(value)))
    if isinstance(value, str) and _DIGITS_RE.fullmatch(value):
        return UniverseId(value)
    return UniverseId(place_id)


def unique_universe_ids(universe_ids: list[UniverseId]) -> list[UniverseId]:
    """Deduplicate, keeping first-seen order."""
    return list(dict.fromkeys(universe_ids))


def _finite_number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _data_entries(result: UpstreamResult) -> list:
    if not result.ok or not isinstance(result.payload, dict):
        return []
    data = result.payload.get("data")
    return data if isinstance(data, list) else []


def build_game_info(result: UpstreamResult) -> dict[str, GameInfo]:
    """Map universe id → name/visits from a games metadata response."""
    info: dict[str, GameInfo] = {}
    for entry in _data_entries(result):
        if not isinstance(entry, dict) or entry.get("id") is None:
            continue
        name = entry.get("name")
        info[str(entry["id"])] = GameInfo(
            name=name if isinstance(name, str) else None,
            visits=_finite_number(entry.get("visits")),
        )
    return info


def build_icon_map(result: UpstreamResult) -> dict[str, str]:
    """Map universe id → icon URL from a thumbnails response."""
    icons: dict[str, str] = {}
    for entry in _data_entries(result):
        if not isinstance(entry, dict) or entry.get("targetId") is None:
            continue
        url = entry.get("imageUrl")
        if isinstance(url, str) and url:
            icons[str(entry["targetId"])] = url
    return icons


def join_game_records(
    place_ids: list[PlaceId],
    universe_map: dict[PlaceId, UniverseId],
    info: dict[str, GameInfo],
    icons: dict[str, str],
) -> tuple[list[GameRecord], int]:
    """Join lookups onto place ids and total the visit counts. Pure."""
    records: list[GameRecord] = []
    total = 0
    for place_id in place_ids:
        universe_id = universe_map.get(place_id, UniverseId(place_id))
        game = info.get(universe_id, GameInfo(name=None, visits=None))
        records.append(GameRecord(
            input_id=place_id,
            universe_id=universe_id,
            name=game.name,
            visits=game.visits,
            icon=icons.get(universe_id),
        ))
        if game.visits is not None:
            total += math.trunc(game.visits)
    return records, total
