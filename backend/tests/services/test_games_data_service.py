"""Games Data Service — fan-out, dedupe and degradation against a fake upstream."""

import asyncio

import pytest

from app.core.domain_types import PlaceId
from app.services.games_data import aggregate_games
from tests.services.fake_upstream import FakeUpstream


def place_ids(*raw: str) -> list[PlaceId]:
    return [PlaceId(p) for p in raw]


@pytest.fixture
def upstream():
    return FakeUpstream(
        universes={"123": 1, "456": 2},
        games={
            "1": {"name": "A", "visits": 100},
            "2": {"name": "B", "visits": None},
        },
        icons={"1": "https://img/1.png"},
    )


async def test_duplicates_preserved_and_lookups_deduplicated(upstream):
    result = await aggregate_games(place_ids("123", "123", "456"), upstream)

    assert [r.input_id for r in result.data] == ["123", "123", "456"]
    assert [r.universe_id for r in result.data] == ["1", "1", "2"]
    assert result.data[0].name == "A"
    assert result.data[2].visits is None
    assert result.data[2].icon is None
    assert result.total_visits == "200"
    assert result.count == 3

    assert upstream.calls_of("universe") == ["123", "456"]
    assert upstream.calls_of("details") == [["1", "2"]]
    assert upstream.calls_of("icons") == [["1", "2"]]


async def test_unresolvable_place_falls_back_to_its_own_id(upstream):
    upstream.games["789"] = {"name": "Direct", "visits": 7}

    result = await aggregate_games(place_ids("789"), upstream)

    assert result.data[0].universe_id == "789"
    assert result.data[0].name == "Direct"
    assert upstream.calls_of("details") == [["789"]]


async def test_places_sharing_a_universe_share_one_batch_entry():
    upstream = FakeUpstream(
        universes={"10": 5, "20": 5},
        games={"5": {"name": "Shared", "visits": 3}},
    )
    result = await aggregate_games(place_ids("10", "20"), upstream)

    assert upstream.calls_of("details") == [["5"]]
    assert [r.name for r in result.data] == ["Shared", "Shared"]
    assert result.total_visits == "6"


async def test_failed_details_leave_names_and_visits_null(upstream):
    upstream.fail_details = True

    result = await aggregate_games(place_ids("123"), upstream)

    record = result.data[0]
    assert record.name is None
    assert record.visits is None
    assert record.icon == "https://img/1.png"
    assert result.total_visits == "0"


async def test_failed_icons_leave_icons_null(upstream):
    upstream.fail_icons = True
    result = await aggregate_games(place_ids("123"), upstream)
    assert result.data[0].icon is None
    assert result.data[0].name == "A"


async def test_fractional_visits_truncated_in_total():
    upstream = FakeUpstream(
        universes={"1": 1},
        games={"1": {"name": "F", "visits": 2500.9}},
    )
    result = await aggregate_games(place_ids("1"), upstream)
    assert result.data[0].visits == 2500.9
    assert result.total_visits == "2500"


async def test_wire_shape_uses_camel_case(upstream):
    result = await aggregate_games(place_ids("123"), upstream)
    body = result.model_dump(by_alias=True)
    assert set(body) == {"ok", "data", "totalVisits", "count"}
    assert set(body["data"][0]) == {"inputId", "universeId", "name", "visits", "icon"}


async def test_unexpected_exception_propagates(upstream):
    upstream.raise_on_details = RuntimeError("boom")
    with pytest.raises(ExceptionGroup) as exc:
        await aggregate_games(place_ids("123"), upstream)
    assert exc.group_contains(RuntimeError, match="boom")


class HangingIconsUpstream(FakeUpstream):
    """Details fail after a yield while the icon lookup is still waiting."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.icons_cancelled = False

    async def game_details(self, universe_ids):
        await asyncio.sleep(0)
        raise RuntimeError("details exploded")

    async def game_icons(self, universe_ids):
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.icons_cancelled = True
            raise


async def test_failure_cancels_sibling_lookups():
    upstream = HangingIconsUpstream(universes={"123": 1})

    with pytest.raises(ExceptionGroup):
        await aggregate_games(place_ids("123"), upstream)

    assert upstream.icons_cancelled
