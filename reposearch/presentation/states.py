"""UI-agnostic states emitted by the search controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from reposearch.domain.models import RepositoryEntity


@dataclass(frozen=True, slots=True)
class EmptyState:
    pass


@dataclass(frozen=True, slots=True)
class LoadingState:
    pass


@dataclass(frozen=True, slots=True)
class SuccessState:
    items: tuple[RepositoryEntity, ...]

    def __repr__(self) -> str:
        return f"SuccessState(items={len(self.items)})"


@dataclass(frozen=True, slots=True)
class ErrorState:
    message: str


SearchState = Union[EmptyState, LoadingState, SuccessState, ErrorState]


__all__ = ["EmptyState", "ErrorState", "LoadingState", "SearchState", "SuccessState"]
