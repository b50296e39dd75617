"""HTTP client for the GitHub-style repository search API."""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from reposearch.config import ApiSettings
from reposearch.domain.models import SearchCriteria
from reposearch.logging import logger
from reposearch.services.exceptions import (
    InvalidCriteriaError,
    NetworkError,
    ParsingError,
    map_exception,
)
from reposearch.services.payloads import RepositoryPayload, SearchResultPayload

ERROR_BODY_LIMIT = 500


class GitHubClient:
    """Issues one logical request per call and converts every failure.

    Redirects are followed, since GitHub answers lookups of renamed or
    transferred repositories with 301.

    Callers only ever see payload models or :class:`DomainError` subclasses.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        settings: ApiSettings | None = None,
    ) -> None:
        self._settings = settings or ApiSettings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(follow_redirects=True)

    @property
    def base_url(self) -> str:
        return self._settings.root

    async def search(self, criteria: SearchCriteria) -> SearchResultPayload:
        params = {
            "q": criteria.trimmed_query,
            "page": str(criteria.page),
            "per_page": str(criteria.per_page),
        }
        response = await self._get(f"{self.base_url}/search/repositories", params=params)
        self._raise_for_status(response)
        return self._decode(response, SearchResultPayload)

    async def get_by_id(self, repository_id: int) -> RepositoryPayload | None:
        response = await self._get(f"{self.base_url}/repositories/{repository_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._decode(response, RepositoryPayload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        try:
            return await self._client.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self._settings.request_timeout_seconds,
                follow_redirects=True,
            )
        except httpx.TimeoutException as exc:
            logger.warning("remote_request_timeout", url=url)
            raise NetworkError("request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("remote_request_failed", url=url, error=str(exc))
            raise map_exception(exc) from exc
        except Exception as exc:
            raise map_exception(exc) from exc

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "User-Agent": self._settings.user_agent,
        }

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        status_code = response.status_code
        if status_code == 200:
            return
        if status_code == 403:
            raise NetworkError("rate limit exceeded")
        if status_code == 422:
            raise InvalidCriteriaError("Invalid search query format")
        if status_code >= 500:
            raise NetworkError("service unavailable")
        body = response.text[:ERROR_BODY_LIMIT] if response.text else "Unknown error"
        raise NetworkError(f"API request failed with status {status_code}: {body}")

    @staticmethod
    def _decode(response: httpx.Response, model: type[BaseModel]) -> Any:
        try:
            return model.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ParsingError(f"Failed to parse API response: {exc}") from exc
        except Exception as exc:
            raise map_exception(exc) from exc


__all__ = ["GitHubClient"]
