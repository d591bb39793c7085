"""External nutrition database lookups with caching and graceful failure."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from food_diary.domain.foods import RawFood
from food_diary.services.cache import Cache

_logger = logging.getLogger(__name__)

_MISSING = object()

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class ExternalFoodDatabase(Protocol):
    """Interface for a remote nutrition database."""

    name: str

    async def search_by_name(self, query: str, limit: int) -> list[RawFood]:
        """Search foods by free text."""

    async def get_by_barcode(self, code: str) -> RawFood | None:
        """Return the food for a barcode, if known."""


@dataclass
class NutritionLookupService:
    """Queries external databases in order; failures degrade to empty results."""

    clients: list[ExternalFoodDatabase]
    cache: Cache
    search_ttl_seconds: int = 3600
    barcode_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search_by_name(self, query: str, limit: int = 10) -> list[RawFood]:
        """Search every configured database and concatenate the results."""
        cleaned = query.strip()
        if not cleaned or not self.clients:
            return []
        cache_key = f"external:search:{cleaned.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        results: list[RawFood] = []
        failed = False
        for client in self.clients:
            found = await self._call_safely(
                lambda client=client: client.search_by_name(cleaned, limit),
                action=f"{client.name}:search",
                default=None,
            )
            if found is None:
                failed = True
                continue
            results.extend(found)
        # Partial results after a failure are returned but not cached.
        if not failed:
            self.cache.set(cache_key, results, ttl_seconds=self.search_ttl_seconds)
        _logger.info("External search: query=%s results=%s", cleaned, len(results))
        return results

    async def get_by_barcode(self, code: str) -> RawFood | None:
        """Return the first database hit for a barcode."""
        cleaned = code.strip()
        if not cleaned or not self.clients:
            return None
        cache_key = f"external:barcode:{cleaned}"
        cached = self.cache.get(cache_key)
        if cached is _MISSING:
            return None
        if isinstance(cached, RawFood):
            return cached

        failed = False
        for client in self.clients:
            found = await self._call_safely(
                lambda client=client: client.get_by_barcode(cleaned),
                action=f"{client.name}:barcode",
                default=_MISSING,
            )
            if found is _MISSING:
                failed = True
                continue
            if found is not None:
                self.cache.set(cache_key, found, ttl_seconds=self.barcode_ttl_seconds)
                return found
        if not failed:
            self.cache.set(cache_key, _MISSING, ttl_seconds=self.search_ttl_seconds)
        return None

    async def _call_safely(
        self, func: "Callable[[], Awaitable[Any]]", *, action: str, default: Any
    ) -> Any:
        """Call with a short retry; log and return ``default`` on failure."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:  # noqa: BLE001
                attempt += 1
                _logger.warning(
                    "External %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    return default
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
