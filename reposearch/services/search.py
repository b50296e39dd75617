"""Search use cases: validate input, call the coordinator, wrap the outcome."""

from __future__ import annotations

from typing import Sequence

from reposearch.domain.models import RepositoryEntity, SearchCriteria
from reposearch.domain.result import Failure, Result, Success
from reposearch.logging import logger
from reposearch.services.exceptions import InvalidCriteriaError, NotFoundError, map_exception
from reposearch.services.repository import RepositoryCoordinator


class SearchRepositoriesUseCase:
    """Returns a :class:`Result`; never raises for pipeline failures."""

    def __init__(self, repository: RepositoryCoordinator) -> None:
        self._repository = repository

    async def execute(self, criteria: SearchCriteria) -> Result[Sequence[RepositoryEntity]]:
        if not criteria.is_completely_valid:
            return Failure(InvalidCriteriaError(criteria.validation_error))

        try:
            result = await self._repository.search_repositories(criteria)
        except Exception as exc:
            error = map_exception(exc)
            logger.info(
                "search_use_case_failed",
                query=criteria.trimmed_query,
                kind=error.kind.value,
                error=error.message,
            )
            return Failure(error)
        return Success(result.items)


class GetRepositoryUseCase:
    def __init__(self, repository: RepositoryCoordinator) -> None:
        self._repository = repository

    async def execute(self, repository_id: int) -> Result[RepositoryEntity]:
        try:
            repository = await self._repository.get_repository(repository_id)
        except Exception as exc:
            return Failure(map_exception(exc))
        if repository is None:
            return Failure(NotFoundError(repository_id))
        return Success(repository)


__all__ = ["GetRepositoryUseCase", "SearchRepositoriesUseCase"]
