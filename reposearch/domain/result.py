"""Success/failure wrapper returned by use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from reposearch.services.exceptions import DomainError, map_exception

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[DomainError], R]) -> R:
        return on_success(self.value)

    def map(self, mapper: Callable[[T], R]) -> "Result[R]":
        try:
            return Success(mapper(self.value))
        except Exception as exc:
            return Failure(map_exception(exc))


@dataclass(frozen=True, slots=True)
class Failure:
    error: DomainError

    def __post_init__(self) -> None:
        if not isinstance(self.error, DomainError):
            raise TypeError(
                f"Failure requires a DomainError, got {type(self.error).__name__}"
            )

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        raise self.error

    def fold(self, on_success: Callable[[object], R], on_failure: Callable[[DomainError], R]) -> R:
        return on_failure(self.error)

    def map(self, mapper: Callable[[object], R]) -> "Failure":
        return self


Result = Union[Success[T], Failure]


__all__ = ["Failure", "Result", "Success"]
