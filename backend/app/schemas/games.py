"""Games Schemas — response envelope of GET /api/gamesData.

Invariants:
    - data has one GameRecordOut per requested place id, in request order
    - totalVisits is a decimal string (visit totals exceed JS safe integers)
    - Wire names are camelCase; Python attributes are snake_case
"""

from pydantic import BaseModel, ConfigDict, Field

from app.core.games_aggregate import GameRecord


class GameRecordOut(BaseModel):
    """One joined game row."""
    model_config = ConfigDict(populate_by_name=True)

    input_id: str = Field(alias="inputId")
    universe_id: str = Field(alias="universeId")
    name: str | None = None
    visits: int | float | None = None
    icon: str | None = None

    @classmethod
    def from_record(cls, record: GameRecord) -> "GameRecordOut":
        return cls(
            input_id=record.input_id,
            universe_id=record.universe_id,
            name=record.name,
            visits=record.visits,
            icon=record.icon,
        )


class GamesDataResponse(BaseModel):
    """Success envelope."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    data: list[GameRecordOut]
    total_visits: str = Field(alias="totalVisits")
    count: int
