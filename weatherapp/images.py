"""Weather icon download with a URL keyed response cache."""
from __future__ import annotations

import logging
from typing import Optional

from requests import Response

from .cache import CachedResponse, ResponseStore
from .exceptions import NetworkError
from .providers.base import HttpProvider

logger = logging.getLogger(__name__)

# 2xx codes a shared cache may store by default (RFC 9111).
CACHEABLE_STATUS_CODES = frozenset({200, 203, 204})


def is_cacheable(response: Response) -> bool:
    if response.status_code not in CACHEABLE_STATUS_CODES:
        return False
    directives = [d.strip().lower() for d in response.headers.get("Cache-Control", "").split(",")]
    return "no-store" not in directives


class ImageCache(HttpProvider):
    def __init__(self, store: Optional[ResponseStore] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.store = store if store is not None else ResponseStore()

    async def load_image(self, url: str) -> bytes:
        cached = self.store.get(url)
        if cached is not None:
            self._log.debug("Image cache hit for %s", url)
            return cached.data
        response = await self._arequest("GET", url)
        data = response.content
        if is_cacheable(response):
            self.store.set(
                url,
                CachedResponse(data=data, status_code=response.status_code, headers=dict(response.headers)),
            )
        else:
            self._log.debug("Response for %s is not cacheable", url)
        return data


class WeatherIcon:
    """Holds the icon currently on screen.

    A failed load leaves the previous image in place.
    """

    def __init__(self, cache: ImageCache) -> None:
        self._cache = cache
        self.image: bytes = b""
        self.url: Optional[str] = None

    async def update(self, url: Optional[str]) -> bool:
        if not url:
            return False
        try:
            image = await self._cache.load_image(url)
        except NetworkError as exc:
            logger.warning("Could not load icon %s: %s", url, exc)
            return False
        self.image = image
        self.url = url
        return True


__all__ = ["ImageCache", "WeatherIcon", "is_cacheable", "CACHEABLE_STATUS_CODES"]
