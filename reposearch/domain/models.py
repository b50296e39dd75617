"""Pydantic models shared across the search pipeline layers."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from reposearch.utils.datetime import ensure_aware, utc_now

T = TypeVar("T")

MIN_QUERY_LENGTH = 2
MAX_PER_PAGE = 100
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30
POPULAR_STAR_THRESHOLD = 1000
ACTIVE_WINDOW = timedelta(days=180)


class SearchKey(NamedTuple):
    """Cache identity of a search: normalized query plus pagination.

    Pagination is kept out of the query text so no typed query can collide
    with another page of a different query.
    """

    query: str
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @classmethod
    def normalized(cls, query: str, page: int = DEFAULT_PAGE, per_page: int = DEFAULT_PER_PAGE) -> SearchKey:
        return cls(query.strip().lower(), page, per_page)


class SearchCriteria(BaseModel):
    """Search request parameters.

    Construction accepts out-of-range values; callers check
    :attr:`is_completely_valid` before acting on the criteria.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @property
    def trimmed_query(self) -> str:
        return self.query.strip()

    @property
    def is_valid(self) -> bool:
        return len(self.trimmed_query) >= MIN_QUERY_LENGTH

    @property
    def has_valid_page(self) -> bool:
        return self.page >= 1

    @property
    def has_valid_per_page(self) -> bool:
        return 1 <= self.per_page <= MAX_PER_PAGE

    @property
    def is_completely_valid(self) -> bool:
        return self.is_valid and self.has_valid_page and self.has_valid_per_page

    @property
    def validation_error(self) -> str | None:
        if not self.is_valid:
            return f"Query must be at least {MIN_QUERY_LENGTH} characters long"
        if not self.has_valid_page:
            return "Page must be greater than 0"
        if not self.has_valid_per_page:
            return f"Per page must be between 1 and {MAX_PER_PAGE}"
        return None

    @property
    def cache_key(self) -> SearchKey:
        return SearchKey.normalized(self.query, self.page, self.per_page)


class UserEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    login: str
    avatar_url: str
    html_url: str

    @property
    def has_valid_login(self) -> bool:
        return bool(self.login.strip())


class RepositoryEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    full_name: str
    description: str = ""
    owner: UserEntity
    star_count: int = Field(ge=0)
    language: str = ""
    updated_at: datetime
    html_url: str

    @property
    def is_popular(self) -> bool:
        return self.star_count > POPULAR_STAR_THRESHOLD

    @property
    def is_active(self) -> bool:
        return utc_now() - ensure_aware(self.updated_at) < ACTIVE_WINDOW

    @property
    def display_name(self) -> str:
        return self.full_name or self.name

    @property
    def has_language(self) -> bool:
        return bool(self.language)

    @property
    def has_description(self) -> bool:
        return bool(self.description)


class SearchResult(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    items: tuple[T, ...] = ()
    total_count: int = 0
    incomplete: bool = False

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    @property
    def has_more(self) -> bool:
        return self.total_count > len(self.items)

    @property
    def is_complete(self) -> bool:
        return not self.incomplete


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "MIN_QUERY_LENGTH",
    "RepositoryEntity",
    "SearchCriteria",
    "SearchKey",
    "SearchResult",
    "UserEntity",
]
