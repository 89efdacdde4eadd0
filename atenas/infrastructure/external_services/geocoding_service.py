"""Address geocoding through OpenStreetMap Nominatim"""

import logging
from typing import Dict, Optional, Tuple

import httpx

from ...core.config import settings

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float]

# Process-wide memo of address lookups; misses are stored as None
_cache: Dict[str, Optional[Coordinates]] = {}


def cache_key(address: str, city: Optional[str]) -> str:
    return f"{(address or '').lower()}_{(city or '').lower()}"


def clear_cache() -> None:
    _cache.clear()


class GeocodingService:

    def __init__(self, client: Optional[httpx.AsyncClient] = None, cache: Optional[dict] = None):
        self._client = client
        self.cache = _cache if cache is None else cache
        self.base_url = settings.NOMINATIM_URL

    async def geocode(self, address: Optional[str], city: Optional[str] = None) -> Optional[Coordinates]:
        """Return (lat, lng) for the address, or None if it cannot be resolved."""
        if not address:
            return None

        key = cache_key(address, city)
        if key in self.cache:
            return self.cache[key]

        query = ", ".join(part for part in (address, city) if part)
        coordinates = None
        try:
            coordinates = await self._search(query)
        except (httpx.HTTPError, ValueError, KeyError, IndexError) as e:
            logger.warning("Geocoding failed for %r: %s", query, e)

        self.cache[key] = coordinates
        return coordinates

    async def _search(self, query: str) -> Optional[Coordinates]:
        params = {"format": "json", "q": query, "limit": 1, "addressdetails": 1}
        headers = {"User-Agent": settings.GEOCODER_USER_AGENT}
        if self._client is not None:
            response = await self._client.get(self.base_url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=settings.GEOCODER_TIMEOUT) as client:
                response = await client.get(self.base_url, params=params, headers=headers)
        response.raise_for_status()
        results = response.json()
        if not results:
            return None
        return float(results[0]["lat"]), float(results[0]["lon"])
