"""Place ID parsing — turns the raw `ids` query value into a bounded id list.

Invariants:
    - Only tokens that are 1-20 ASCII digits survive (after trimming)
    - At most MAX_PLACE_IDS ids are returned, in input order
    - Malformed tokens are dropped silently, duplicates are kept
"""

import re

from app.core.domain_types import MAX_PLACE_IDS, MAX_PLACE_ID_DIGITS, PlaceId

_PLACE_ID_RE = re.compile(rf"[0-9]{{1,{MAX_PLACE_ID_DIGITS}}}")


def parse_place_ids(raw: str | None) -> list[PlaceId]:
    """Split a comma-separated id list and keep the valid tokens. Pure."""
    if not raw:
        return []
    out: list[PlaceId] = []
    for token in raw.split(","):
        token = token.strip()
        if _PLACE_ID_RE.fullmatch(token):
            out.append(PlaceId(token))
        if len(out) >= MAX_PLACE_IDS:
            break
    return out
