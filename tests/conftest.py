"""Shared pytest fixtures for the search pipeline tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from reposearch.domain.models import RepositoryEntity, SearchCriteria, UserEntity
from reposearch.services.payloads import RepositoryPayload, SearchResultPayload


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeRemote:
    """Stands in for GitHubClient; records calls and replays canned outcomes."""

    def __init__(self) -> None:
        self.search_calls: list[SearchCriteria] = []
        self.lookup_calls: list[int] = []
        self.search_response: SearchResultPayload | None = None
        self.search_error: BaseException | None = None
        self.repositories: dict[int, RepositoryPayload] = {}
        self.lookup_error: BaseException | None = None

    async def search(self, criteria: SearchCriteria) -> SearchResultPayload:
        self.search_calls.append(criteria)
        if self.search_error is not None:
            raise self.search_error
        assert self.search_response is not None
        return self.search_response

    async def get_by_id(self, repository_id: int) -> RepositoryPayload | None:
        self.lookup_calls.append(repository_id)
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.repositories.get(repository_id)


def _repository_json(
    repo_id: int = 1,
    name: str = "flutter",
    *,
    stars: int = 150_000,
    updated_at: str = "2024-05-01T12:00:00Z",
    **overrides: Any,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": repo_id,
        "name": name,
        "full_name": f"{name}/{name}",
        "description": f"{name} repository",
        "owner": {
            "id": 1000 + repo_id,
            "login": name,
            "avatar_url": f"https://avatars.example.com/{name}",
            "html_url": f"https://github.com/{name}",
        },
        "stargazers_count": stars,
        "language": "Dart",
        "updated_at": updated_at,
        "html_url": f"https://github.com/{name}/{name}",
    }
    data.update(overrides)
    return data


def _search_json(*items: dict[str, Any], total_count: int | None = None, incomplete: bool = False) -> dict[str, Any]:
    return {
        "total_count": len(items) if total_count is None else total_count,
        "incomplete_results": incomplete,
        "items": list(items),
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def repository_json():
    return _repository_json


@pytest.fixture
def search_json():
    return _search_json


@pytest.fixture
def search_payload():
    def _build(*names: str, total_count: int | None = None) -> SearchResultPayload:
        items = [_repository_json(index + 1, name) for index, name in enumerate(names)]
        return SearchResultPayload.model_validate(_search_json(*items, total_count=total_count))

    return _build


@pytest.fixture
def make_repository():
    def _build(repo_id: int = 1, name: str = "flutter", **overrides: Any) -> RepositoryEntity:
        fields: dict[str, Any] = {
            "id": repo_id,
            "name": name,
            "full_name": f"{name}/{name}",
            "owner": UserEntity(
                id=1000 + repo_id,
                login=name,
                avatar_url=f"https://avatars.example.com/{name}",
                html_url=f"https://github.com/{name}",
            ),
            "star_count": 10,
            "updated_at": datetime(2024, 5, 1, tzinfo=timezone.utc),
            "html_url": f"https://github.com/{name}/{name}",
        }
        fields.update(overrides)
        return RepositoryEntity(**fields)

    return _build
