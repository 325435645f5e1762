"""Upstream Result — tagged outcome of a single outbound call.

Invariants:
    - ok=True implies reason is None; ok=False implies payload is None
    - Callers branch on `ok` instead of catching exceptions
"""

from dataclasses import dataclass
from typing import Any

from app.core.domain_types import UpstreamFailure


@dataclass(frozen=True)
class UpstreamResult:
    """Success carrying the decoded JSON body, or failure carrying a reason."""
    ok: bool
    payload: Any = None
    reason: UpstreamFailure | None = None

    @classmethod
    def success(cls, payload: Any) -> "UpstreamResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, reason: UpstreamFailure) -> "UpstreamResult":
        return cls(ok=False, reason=reason)
