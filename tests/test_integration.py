"""End-to-end scenarios: controller, use case, coordinator, cache and HTTP client together."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from reposearch.bootstrap import create_search_controller, initialize_registry, shutdown_registry
from reposearch.config import ApiSettings, ControllerSettings, SearchSettings
from reposearch.container import DependencyRegistry
from reposearch.presentation.controller import SearchController
from reposearch.presentation.states import ErrorState, SuccessState
from reposearch.services.cache import SearchCache
from reposearch.services.github_client import GitHubClient
from reposearch.services.repository import RepositoryCoordinator
from reposearch.services.search import SearchRepositoriesUseCase


class CountingApi:
    def __init__(self, body: dict) -> None:
        self.body = body
        self.status = 200
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"message": "API rate limit exceeded"})
        return httpx.Response(200, json=self.body)


@pytest.mark.asyncio
async def test_search_scenario_through_registry(repository_json, search_json):
    api = CountingApi(search_json(repository_json(1, "flutter")))
    registry = DependencyRegistry()
    settings = SearchSettings(controller=ControllerSettings(debounce_ms=10))
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(api))
    initialize_registry(registry, settings, http_client=http_client)
    controller = create_search_controller(registry)

    try:
        controller.on_text_changed("a")
        await controller.wait_until_idle()
        assert isinstance(controller.state, ErrorState)
        assert "at least 2 characters" in controller.state.message
        assert api.requests == []

        controller.on_text_changed("flutter")
        await controller.wait_until_idle()
        first = controller.state
        assert isinstance(first, SuccessState)
        assert [item.full_name for item in first.items] == ["flutter/flutter"]
        assert len(api.requests) == 1

        controller.on_text_changed("flutter")
        await controller.wait_until_idle()
        assert controller.state == first
        assert len(api.requests) == 1
    finally:
        controller.dispose()
        await shutdown_registry(registry)
        await http_client.aclose()


@pytest.mark.asyncio
async def test_rate_limit_served_from_expired_cache(repository_json, search_json, clock):
    api = CountingApi(search_json(repository_json(1, "flutter")))
    cache = SearchCache(ttl=timedelta(minutes=15), clock=clock)
    async with httpx.AsyncClient(transport=httpx.MockTransport(api)) as http_client:
        client = GitHubClient(http_client, settings=ApiSettings())
        use_case = SearchRepositoriesUseCase(RepositoryCoordinator(client, cache))
        controller = SearchController(use_case, debounce_ms=0)

        controller.on_text_changed("flutter")
        await controller.wait_until_idle()
        fresh = controller.state

        clock.advance(hours=1)
        api.status = 403
        controller.on_text_changed("flutter")
        await controller.wait_until_idle()

    assert isinstance(fresh, SuccessState)
    assert controller.state == fresh
    assert len(api.requests) == 2
    assert api.requests[0].url.host == "api.github.com"


@pytest.mark.asyncio
async def test_rate_limit_without_cache_reports_network_error(repository_json, search_json):
    api = CountingApi(search_json(repository_json()))
    api.status = 403
    async with httpx.AsyncClient(transport=httpx.MockTransport(api)) as http_client:
        use_case = SearchRepositoriesUseCase(
            RepositoryCoordinator(GitHubClient(http_client), SearchCache())
        )
        controller = SearchController(use_case, debounce_ms=0)

        controller.on_text_changed("flutter")
        await controller.wait_until_idle()

    assert isinstance(controller.state, ErrorState)
    assert "check your connection" in controller.state.message
    assert "rate limit" not in controller.state.message
