"""Wire models for the repository search API and their domain conversion."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from reposearch.domain.models import RepositoryEntity, SearchResult, UserEntity


class OwnerPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    login: str
    avatar_url: str
    html_url: str

    def to_domain(self) -> UserEntity:
        return UserEntity(
            id=self.id,
            login=self.login,
            avatar_url=self.avatar_url,
            html_url=self.html_url,
        )


class RepositoryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    full_name: str
    description: str | None = None
    owner: OwnerPayload
    stargazers_count: int = Field(ge=0)
    language: str | None = None
    updated_at: datetime
    html_url: str

    def to_domain(self) -> RepositoryEntity:
        return RepositoryEntity(
            id=self.id,
            name=self.name,
            full_name=self.full_name,
            description=self.description or "",
            owner=self.owner.to_domain(),
            star_count=self.stargazers_count,
            language=self.language or "",
            updated_at=self.updated_at,
            html_url=self.html_url,
        )


class SearchResultPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int
    incomplete_results: bool = False
    items: list[RepositoryPayload]

    def to_domain(self) -> SearchResult[RepositoryEntity]:
        return SearchResult[RepositoryEntity](
            items=tuple(item.to_domain() for item in self.items),
            total_count=self.total_count,
            incomplete=self.incomplete_results,
        )


__all__ = ["OwnerPayload", "RepositoryPayload", "SearchResultPayload"]
