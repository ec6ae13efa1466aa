"""
Suggestion Cache — one time-boxed `{timestamp, data}` record per key.

The key is a namespace (one per user), not a digest of the preferences
that produced the data. Within the TTL a hit is returned even if the
preferences have since changed; the allergen filter is still re-applied
against the caller's current allergies on every read.

The read-then-write pair is not atomic. Two concurrent misses for the same
key will both call the provider and the later write wins.
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable

from app.config import get_settings
from app.schemas.suggestion import FoodItem
from app.services.suggestion_parser import filter_allergens

logger = logging.getLogger(__name__)

CACHE_KEY_FOOD_ITEMS = "food_items_cache"


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryStore(KeyValueStore):
    """Process-lifetime store. Emptied when the server restarts."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisStore(KeyValueStore):
    """Redis-backed store so cached suggestions survive restarts."""

    def __init__(self, url: str, prefix: str = "grocery:"):
        import redis
        self._redis = redis.Redis.from_url(url, decode_responses=True)
        self._prefix = prefix

    def get(self, key: str) -> str | None:
        return self._redis.get(self._prefix + key)

    def set(self, key: str, value: str) -> None:
        self._redis.set(self._prefix + key, value)

    def delete(self, key: str) -> None:
        self._redis.delete(self._prefix + key)


class SuggestionCache:
    """Wraps a suggestion provider with a TTL cache."""

    def __init__(
        self,
        provider,
        store: KeyValueStore | None = None,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self.store = store or InMemoryStore()
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _key(self, namespace: str | None) -> str:
        return f"{CACHE_KEY_FOOD_ITEMS}:{namespace}" if namespace else CACHE_KEY_FOOD_ITEMS

    def _read(self, key: str) -> list[FoodItem] | None:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            record = json.loads(raw)
            timestamp = float(record["timestamp"])
            data = [FoodItem.model_validate(d) for d in record["data"]]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            self.store.delete(key)
            return None
        if self.clock() - timestamp >= self.ttl_seconds:
            return None
        return data

    def _write(self, key: str, items: list[FoodItem]) -> None:
        record = {
            "timestamp": self.clock(),
            "data": [i.model_dump() for i in items],
        }
        self.store.set(key, json.dumps(record))

    async def get_suggestions(self, preferences, namespace: str | None = None) -> list[FoodItem]:
        key = self._key(namespace)
        allergies = getattr(preferences, "allergies", None) or []

        cached = self._read(key)
        if cached is not None:
            logger.info(f"Using cached suggestions for {key}")
            return filter_allergens(cached, allergies)

        logger.info(f"Fetching new suggestions for {key}")
        items = await self.provider.suggest(preferences)
        if items:
            self._write(key, items)
        return filter_allergens(items, allergies)

    def invalidate(self, namespace: str | None = None) -> None:
        self.store.delete(self._key(namespace))


def _make_store() -> KeyValueStore:
    settings = get_settings()
    if settings.SUGGESTION_CACHE_BACKEND == "redis":
        return RedisStore(settings.REDIS_URL)
    return InMemoryStore()


@lru_cache
def get_suggestion_cache() -> SuggestionCache:
    from app.services.grocery_ai import get_grocery_ai

    settings = get_settings()
    return SuggestionCache(
        provider=get_grocery_ai(),
        store=_make_store(),
        ttl_seconds=settings.SUGGESTION_CACHE_TTL_SECONDS,
    )
