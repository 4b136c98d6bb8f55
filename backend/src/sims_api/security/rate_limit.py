"""Login attempt limiting.

Every application builds its own slowapi ``Limiter`` from the settings it
was created with (see ``build_limiter``), so the login limit, the trusted
proxies and the counter storage all follow ``app.state.settings``.
"""

import math
import time
from functools import lru_cache
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network
from typing import Annotated

from fastapi import Depends, Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from sims_api.config import Settings
from sims_api.dependencies import get_request_settings
from sims_api.exceptions import LoginRateLimitedError
from sims_api.utils.security_events import SecurityEventType, log_security_event

LOGIN_SCOPE = "login"

Network = IPv4Network | IPv6Network


@lru_cache(maxsize=16)
def _trusted_networks(proxies: tuple[str, ...]) -> tuple[Network, ...]:
    return tuple(ip_network(proxy, strict=False) for proxy in proxies)


def _is_trusted(address: str, networks: tuple[Network, ...]) -> bool:
    try:
        addr = ip_address(address)
    except ValueError:
        return False
    return any(addr in network for network in networks)


def client_ip(request: Request) -> str:
    """Address of the client behind ``request``.

    Forwarding headers are honoured only when the direct peer is a trusted
    proxy. X-Forwarded-For is then read right to left, skipping trusted
    hops; the first untrusted hop is the client.

    Args:
        request: The incoming request

    Returns:
        Client IP address used as the rate limit key and in security logs
    """
    peer = get_remote_address(request)
    networks = _trusted_networks(tuple(request.app.state.settings.trusted_proxies_list))
    if not _is_trusted(peer, networks):
        return peer

    forwarded = request.headers.get("X-Forwarded-For", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    for hop in reversed(hops):
        if _is_trusted(hop, networks):
            continue
        try:
            return str(ip_address(hop))
        except ValueError:
            # Garbage in the chain: fall back to the proxy itself
            return peer

    return hops[0] if hops else peer


def build_limiter(settings: Settings) -> Limiter:
    """Create the login limiter for one application.

    Counters live in Redis when ``REDIS_URL`` is set, so replicas share
    them; otherwise in process memory.
    """
    return Limiter(
        key_func=client_ip,
        storage_uri=settings.redis_url or "memory://",
        strategy="fixed-window",
    )


async def enforce_login_limit(
    request: Request,
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> None:
    """Count one login attempt for the calling client.

    Every attempt counts, successful or not.

    Raises:
        LoginRateLimitedError: Once the client exceeds the configured limit
    """
    limiter: Limiter = request.app.state.limiter
    limit = parse(settings.login_rate_limit)
    key = client_ip(request)

    if limiter.limiter.hit(limit, LOGIN_SCOPE, key):
        return

    reset_at, _ = limiter.limiter.get_window_stats(limit, LOGIN_SCOPE, key)
    log_security_event(
        SecurityEventType.LOGIN_RATE_LIMITED,
        ip_address=key,
        details={"limit": settings.login_rate_limit},
        success=False,
    )
    raise LoginRateLimitedError(retry_after=max(1, math.ceil(reset_at - time.time())))
