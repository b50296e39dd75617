"""In-memory TTL cache for search results and individual repositories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from reposearch.domain.models import RepositoryEntity, SearchKey, SearchResult
from reposearch.utils.datetime import Clock, utc_now

V = TypeVar("V")

Key = SearchKey | str

DEFAULT_TTL = timedelta(minutes=15)


@dataclass(frozen=True, slots=True)
class _CacheEntry(Generic[V]):
    value: V
    stored_at: datetime


class SearchCache:
    """Two-namespace cache keyed by normalized query and by repository id.

    Expired search entries stay in place until :meth:`clear` or
    :meth:`purge_expired` so the coordinator can still serve them as a
    fallback when the remote call fails. Entries are never evicted for size.
    """

    def __init__(self, ttl: timedelta = DEFAULT_TTL, *, clock: Clock = utc_now) -> None:
        self.ttl = ttl
        self._clock = clock
        self._searches: dict[SearchKey, _CacheEntry[SearchResult[RepositoryEntity]]] = {}
        self._repositories: dict[int, _CacheEntry[RepositoryEntity]] = {}

    @staticmethod
    def normalize(key: Key) -> SearchKey:
        """Plain strings address the first page at the default page size."""

        if isinstance(key, SearchKey):
            return SearchKey.normalized(*key)
        return SearchKey.normalized(key)

    def get(self, key: Key) -> SearchResult[RepositoryEntity] | None:
        """Return the stored result regardless of age."""

        entry = self._searches.get(self.normalize(key))
        return entry.value if entry is not None else None

    def get_fresh(self, key: Key) -> SearchResult[RepositoryEntity] | None:
        entry = self._searches.get(self.normalize(key))
        if entry is None or self._is_expired(entry):
            return None
        return entry.value

    def put(self, key: Key, value: SearchResult[RepositoryEntity]) -> None:
        self._searches[self.normalize(key)] = _CacheEntry(value, self._clock())

    def is_valid(self, key: Key) -> bool:
        entry = self._searches.get(self.normalize(key))
        return entry is not None and not self._is_expired(entry)

    def get_repository(self, repository_id: int) -> RepositoryEntity | None:
        entry = self._repositories.get(repository_id)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._repositories[repository_id]
            return None
        return entry.value

    def put_repository(self, repository: RepositoryEntity) -> None:
        self._repositories[repository.id] = _CacheEntry(repository, self._clock())

    def clear(self) -> None:
        self._searches.clear()
        self._repositories.clear()

    def purge_expired(self) -> int:
        removed = 0
        for store in (self._searches, self._repositories):
            expired = [key for key, entry in store.items() if self._is_expired(entry)]
            for key in expired:
                del store[key]
            removed += len(expired)
        return removed

    def stats(self) -> dict[str, Any]:
        return {
            "search_cache": self._namespace_stats(self._searches),
            "repository_cache": self._namespace_stats(self._repositories),
            "ttl_minutes": self.ttl.total_seconds() / 60,
        }

    def _namespace_stats(self, store: dict[Any, _CacheEntry[Any]]) -> dict[str, int]:
        expired = sum(1 for entry in store.values() if self._is_expired(entry))
        return {"valid": len(store) - expired, "expired": expired, "total": len(store)}

    def _is_expired(self, entry: _CacheEntry[Any]) -> bool:
        return self._clock() - entry.stored_at > self.ttl


__all__ = ["DEFAULT_TTL", "SearchCache"]
