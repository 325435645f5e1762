"""CORS decision — which Origin, if any, gets echoed back.

Invariants:
    - Non-empty allow-list: only listed origins are echoed
    - Empty allow-list: only origins whose host[:port] matches the Host header
    - No Origin header → nothing to echo
"""

from urllib.parse import urlsplit


def resolve_allowed_origin(
    origin: str | None, host: str | None, allow_list: list[str],
) -> str | None:
    """Return the origin to echo in Access-Control-Allow-Origin, or None."""
    if not origin:
        return None
    if allow_list:
        return origin if origin in allow_list else None
    try:
        origin_host = urlsplit(origin).netloc
    except ValueError:
        return None
    if host and origin_host == host:
        return origin
    return None
