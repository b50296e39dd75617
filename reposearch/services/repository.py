"""Cache-first repository access with stale-cache fallback."""

from __future__ import annotations

from typing import Protocol

from reposearch.domain.models import RepositoryEntity, SearchCriteria, SearchKey, SearchResult
from reposearch.logging import logger
from reposearch.services.cache import SearchCache
from reposearch.services.exceptions import map_exception
from reposearch.services.payloads import RepositoryPayload, SearchResultPayload


class RemoteSearchClient(Protocol):
    async def search(self, criteria: SearchCriteria) -> SearchResultPayload: ...

    async def get_by_id(self, repository_id: int) -> RepositoryPayload | None: ...


class RepositoryCoordinator:
    """Combines the remote client with :class:`SearchCache`.

    Search order: fresh cache, remote, stale cache, mapped error. Cache
    failures are logged and treated as misses so they never change the
    outcome of the remote call.
    """

    def __init__(self, remote: RemoteSearchClient, cache: SearchCache | None = None) -> None:
        self._remote = remote
        self._cache = cache

    async def search_repositories(self, criteria: SearchCriteria) -> SearchResult[RepositoryEntity]:
        key = criteria.cache_key

        cached = self._read_fresh(key)
        if cached is not None:
            logger.debug("search_cache_hit", **key._asdict(), items=len(cached.items))
            return cached

        try:
            payload = await self._remote.search(criteria)
            result = payload.to_domain()
        except Exception as exc:
            logger.warning("search_remote_failed", **key._asdict(), error=str(exc))
            fallback = self._read_stale(key)
            if fallback is not None:
                logger.info("search_stale_fallback", **key._asdict(), items=len(fallback.items))
                return fallback
            error = map_exception(exc)
            if error is exc:
                raise
            raise error from exc

        self._write(key, result)
        return result

    async def get_repository(self, repository_id: int) -> RepositoryEntity | None:
        cached = self._read_repository(repository_id)
        if cached is not None:
            logger.debug("repository_cache_hit", repository_id=repository_id)
            return cached

        try:
            payload = await self._remote.get_by_id(repository_id)
            repository = payload.to_domain() if payload is not None else None
        except Exception as exc:
            error = map_exception(exc)
            if error is exc:
                raise
            raise error from exc

        if repository is not None:
            self._write_repository(repository)
        return repository

    def _read_fresh(self, key: SearchKey) -> SearchResult[RepositoryEntity] | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get_fresh(key)
        except Exception as exc:
            logger.warning("cache_read_failed", **key._asdict(), error=str(exc))
            return None

    def _read_stale(self, key: SearchKey) -> SearchResult[RepositoryEntity] | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(key)
        except Exception as exc:
            logger.warning("cache_read_failed", **key._asdict(), error=str(exc), stale=True)
            return None

    def _read_repository(self, repository_id: int) -> RepositoryEntity | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get_repository(repository_id)
        except Exception as exc:
            logger.warning("cache_read_failed", repository_id=repository_id, error=str(exc))
            return None

    def _write(self, key: SearchKey, result: SearchResult[RepositoryEntity]) -> None:
        if self._cache is None:
            return
        try:
            self._cache.put(key, result)
        except Exception as exc:
            logger.warning("cache_write_failed", **key._asdict(), error=str(exc))
        for item in result.items:
            self._write_repository(item)

    def _write_repository(self, repository: RepositoryEntity) -> None:
        if self._cache is None:
            return
        try:
            self._cache.put_repository(repository)
        except Exception as exc:
            logger.warning("cache_write_failed", repository_id=repository.id, error=str(exc))


__all__ = ["RemoteSearchClient", "RepositoryCoordinator"]
