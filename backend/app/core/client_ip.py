"""Client IP — resolves the caller address behind proxies.

Invariants:
    - X-Forwarded-For first entry wins, then X-Real-IP, then the socket peer
    - Always returns a non-empty string ("0.0.0.0" when nothing is known)
"""

from collections.abc import Mapping

UNKNOWN_IP = "0.0.0.0"


def extract_client_ip(headers: Mapping[str, str], peer: str | None) -> str:
    """Pick the client address from forwarding headers or the peer. Pure."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return peer or UNKNOWN_IP
