"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: AnyHttpUrl = Field(
        default="https://api.github.com",
        description="Root of the repository search API.",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=300)
    user_agent: str = Field(default="reposearch", min_length=1)

    @property
    def root(self) -> str:
        return str(self.base_url).rstrip("/")


class CacheSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    ttl_minutes: int = Field(default=15, ge=1)


class ControllerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    debounce_ms: int = Field(default=300, ge=0)
    per_page: int = Field(default=30, ge=1, le=100)


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REPOSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        frozen=True,
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    controller: ControllerSettings = Field(default_factory=ControllerSettings)
    log_level: str = Field(default="INFO", description="Level for the reposearch logger.")


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "ApiSettings",
    "CacheSettings",
    "ControllerSettings",
    "SearchSettings",
    "get_settings",
]
