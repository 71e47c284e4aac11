"""
Geo-Lookup Cache

Resolves client IPs through ip-api.com and memoises hits in process memory.
"""

import ipaddress
import logging
import time
from typing import Callable, Dict, Optional, Tuple

import httpx

from lead_admin.app.services.geo_lookup import IGeoLookup

logger = logging.getLogger(__name__)

_LOOKUP_FIELDS = "status,country,countryCode,region,city"


def routable_address(ip: Optional[str]) -> Optional[str]:
    """
    Normalise an address, or None when it is not worth looking up.

    Loopback, private, link-local, reserved and unparsable addresses all
    map to None. IPv4-mapped IPv6 addresses are unwrapped.
    """
    if not ip:
        return None
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError:
        return None

    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped

    if not address.is_global:
        return None
    return str(address)


class GeoLookupCache(IGeoLookup):
    """
    TTL-memoised IP geolocation.

    Only successful lookups are cached; a failure is retried on the next
    request for the same address. Expired entries are evicted on access and
    swept out whenever a new entry is stored.
    The cache dict is shared by all requests on the event loop without
    locking, so two concurrent misses for one address may both fetch.
    """

    def __init__(
        self,
        url_template: str = "http://ip-api.com/json/{ip}",
        timeout: float = 3.0,
        ttl_seconds: float = 24 * 60 * 60,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url_template = url_template
        self.timeout = timeout
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self.clock = clock
        self.transport = transport
        self._entries: Dict[str, Tuple[str, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def cached(self, ip: str) -> Optional[str]:
        entry = self._entries.get(ip)
        if entry is None:
            return None
        location, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[ip]
            return None
        return location

    def _sweep(self, now: float) -> None:
        """Drop every expired entry, including addresses never seen again"""
        expired = [ip for ip, (_, expires_at) in self._entries.items() if now >= expires_at]
        for ip in expired:
            del self._entries[ip]

    async def resolve(self, ip: Optional[str]) -> Optional[str]:
        address = routable_address(ip)
        if address is None or not self.enabled:
            return None

        location = self.cached(address)
        if location is not None:
            return location

        location = await self._fetch(address)
        if location is not None:
            now = self.clock()
            self._sweep(now)
            self._entries[address] = (location, now + self.ttl_seconds)
        return location

    async def _fetch(self, address: str) -> Optional[str]:
        url = self.url_template.format(ip=address)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params={"fields": _LOOKUP_FIELDS})
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as exc:
            logger.warning(f"Geo lookup failed for {address}: {exc.__class__.__name__}")
            return None
        except ValueError:
            logger.warning(f"Geo lookup returned invalid JSON for {address}")
            return None

        if not isinstance(body, dict) or body.get("status") != "success":
            return None

        parts = [part for part in (body.get("city"), body.get("country")) if part]
        return ", ".join(parts) if parts else None
