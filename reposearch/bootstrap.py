"""Wire the search pipeline into a :class:`DependencyRegistry`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import httpx

from reposearch.config import SearchSettings, get_settings
from reposearch.container import DependencyRegistry, RegistryAlreadyInitialized, RegistryError
from reposearch.logging import configure_logging, logger
from reposearch.presentation.controller import SearchController
from reposearch.services.cache import SearchCache
from reposearch.services.github_client import GitHubClient
from reposearch.services.repository import RepositoryCoordinator
from reposearch.services.search import GetRepositoryUseCase, SearchRepositoriesUseCase


@dataclass(frozen=True, slots=True)
class _ClientOwnership:
    owned: bool


_REQUIRED: tuple[type, ...] = (
    SearchSettings,
    httpx.AsyncClient,
    GitHubClient,
    SearchCache,
    RepositoryCoordinator,
    SearchRepositoriesUseCase,
    GetRepositoryUseCase,
)


def initialize_registry(
    registry: DependencyRegistry,
    settings: SearchSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> DependencyRegistry:
    """Register every pipeline component once.

    Stateful components (HTTP client, cache, coordinator) are singletons so
    the cache survives across searches; use cases are factories.
    """

    if registry.is_registered(httpx.AsyncClient):
        raise RegistryAlreadyInitialized(
            "Registry is already initialized. Call reset_registry() first to reinitialize."
        )

    settings = settings or get_settings()
    configure_logging(settings.log_level)
    registry.register_singleton(SearchSettings, settings)
    registry.register_singleton(httpx.AsyncClient, http_client or httpx.AsyncClient(follow_redirects=True))
    registry.register_singleton(_ClientOwnership, _ClientOwnership(owned=http_client is None))
    registry.register_singleton(
        GitHubClient,
        GitHubClient(registry.get(httpx.AsyncClient), settings=settings.api),
    )
    registry.register_singleton(
        SearchCache,
        SearchCache(ttl=timedelta(minutes=settings.cache.ttl_minutes)),
    )
    registry.register_singleton(
        RepositoryCoordinator,
        RepositoryCoordinator(registry.get(GitHubClient), registry.get(SearchCache)),
    )
    registry.register_factory(
        SearchRepositoriesUseCase,
        lambda: SearchRepositoriesUseCase(registry.get(RepositoryCoordinator)),
    )
    registry.register_factory(
        GetRepositoryUseCase,
        lambda: GetRepositoryUseCase(registry.get(RepositoryCoordinator)),
    )

    _verify(registry)
    logger.info("registry_initialized", base_url=settings.api.root)
    return registry


def reset_registry(registry: DependencyRegistry) -> None:
    registry.clear()


async def shutdown_registry(registry: DependencyRegistry) -> None:
    """Close the HTTP client bootstrap created and clear all registrations.

    A client passed in through ``http_client=`` belongs to the caller and is
    left open.
    """

    if registry.is_registered(_ClientOwnership) and registry.get(_ClientOwnership).owned:
        await registry.get(httpx.AsyncClient).aclose()
    registry.clear()


def create_search_controller(registry: DependencyRegistry) -> SearchController:
    settings = registry.get(SearchSettings)
    return SearchController(
        registry.get(SearchRepositoriesUseCase),
        debounce_ms=settings.controller.debounce_ms,
        per_page=settings.controller.per_page,
    )


def _verify(registry: DependencyRegistry) -> None:
    for key in _REQUIRED:
        if not registry.is_registered(key):
            raise RegistryError(f"Critical service {key.__name__} was not registered during initialization")


__all__ = [
    "create_search_controller",
    "initialize_registry",
    "reset_registry",
    "shutdown_registry",
]
