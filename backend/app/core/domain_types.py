"""Domain Types — identifier types and fixed limits for the games aggregation.

Invariants:
    - PlaceId is a caller-supplied ASCII digit string, 1-20 chars
    - UniverseId is the canonical id (falls back to the PlaceId string)
    - UPSTREAM_HOSTS is the only set of hosts the service ever calls

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PlaceId = NewType("PlaceId", str)
UniverseId = NewType("UniverseId", str)


# ─── Limits ──────────────────────────────────────────────────────

MAX_PLACE_IDS = 20
MAX_PLACE_ID_DIGITS = 20

UPSTREAM_HOSTS = frozenset({
    "apis.roblox.com",
    "games.roblox.com",
    "thumbnails.roblox.com",
})

WRITE_METHODS = frozenset({"POST", "PUT", "DELETE", "PATCH"})


# ─── Enums ───────────────────────────────────────────────────────

class UpstreamFailure(str, Enum):
    """Why an outbound call produced no payload."""
    HOST_NOT_ALLOWED = "host_not_allowed"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS = "http_status"
    INVALID_JSON = "invalid_json"


class GateDenial(str, Enum):
    """Why the admin gate refused a request. Logged, never returned."""
    IP = "ip"
    SECRET = "secret"
    TOKEN = "token"
    INVALID = "invalid"
    CSRF = "csrf"
