"""Proxy URL rewriting for the HTTP session and the player process.

The in-process session and the spawned player disagree on which SOCKS
scheme means "resolve hostnames through the proxy". Both helpers accept
``host:port`` optionally prefixed with ``socks4``, ``socks4a``, ``socks5``
or ``socks5h`` (written ``scheme://`` or ``scheme:``) and return a full URL.
"""

from __future__ import annotations

import re

SCHEME_PATTERN = re.compile(r"^(?P<scheme>socks4a?|socks5h?):(?://)?(?P<rest>.*)$", re.IGNORECASE)
HTTP_PROXY_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

TRANSPORT_SCHEMES = {
    "socks4": "socks4a",
    "socks4a": "socks4a",
    "socks5": "socks5",
    "socks5h": "socks5",
}

PLAYER_SCHEMES = {
    "socks4": "socks4a",
    "socks4a": "socks4a",
    "socks5": "socks5h",
    "socks5h": "socks5h",
}


def _split(spec: str) -> tuple[str | None, str]:
    value = (spec or "").strip()
    if not value:
        raise ValueError("proxy specification is empty")
    match = SCHEME_PATTERN.match(value)
    if not match:
        return None, value
    address = match.group("rest")
    if not address:
        raise ValueError(f"proxy specification {spec!r} has no host")
    return match.group("scheme").lower(), address


def _rewrite(spec: str, schemes: dict[str, str], default: str) -> str:
    if HTTP_PROXY_PATTERN.match(spec.strip()):
        return spec.strip()
    scheme, address = _split(spec)
    target = schemes[scheme] if scheme else default
    return f"{target}://{address}"


def for_transport(spec: str) -> str:
    """Proxy URL for the requests session (``socks5``/``socks4a``)."""

    return _rewrite(spec, TRANSPORT_SCHEMES, "socks5")


def for_player_process(spec: str) -> str:
    """Proxy URL for the player, with remote DNS spelled out (``socks5h``/``socks4a``)."""

    return _rewrite(spec, PLAYER_SCHEMES, "socks5h")
