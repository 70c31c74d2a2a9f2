"""
Client Origin
=============
Best-effort identification of the caller's network origin.
"""

import hashlib
import ipaddress
from typing import Mapping, Optional

UNKNOWN_ORIGIN = "0.0.0.0"


def _valid_ip(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    candidate = value.strip()
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return None
    return candidate


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, item in headers.items():
        if key.lower() == lowered:
            return item
    return None


def resolve_client_origin(
    remote_addr: Optional[str],
    headers: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Resolve the origin identifier used in rate limit keys.

    The socket peer address is preferred because proxy headers can be
    spoofed. Headers are only consulted when no peer address is available.

    Args:
        remote_addr: Peer address of the connection, if known
        headers: Request headers

    Returns:
        An IP address string; "0.0.0.0" when nothing valid is found
    """
    ip = _valid_ip(remote_addr)
    if ip:
        return ip

    headers = headers or {}

    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        ip = _valid_ip(forwarded.split(",")[0])
        if ip:
            return ip

    ip = _valid_ip(_header(headers, "Client-IP") or _header(headers, "X-Client-IP"))
    if ip:
        return ip

    return UNKNOWN_ORIGIN


def hash_rate_key(phone_key: str, origin: str) -> str:
    """Combine phone key and origin into an opaque counter id."""
    return hashlib.sha256(f"{phone_key}|{origin}".encode()).hexdigest()
