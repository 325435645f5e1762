"""Admin Schemas — login body."""

from typing import Any

from pydantic import BaseModel, field_validator


class LoginRequest(BaseModel):
    """Body of POST /api/admin/login. Empty values are checked by the route."""
    username: str = ""
    password: str = ""

    @field_validator("username", "password", mode="before")
    @classmethod
    def as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()
