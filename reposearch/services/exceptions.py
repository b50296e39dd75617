"""Domain error taxonomy and the mapper that funnels failures into it."""

from __future__ import annotations

import asyncio
import json
from enum import Enum

import httpx
from pydantic import ValidationError


class ErrorKind(str, Enum):
    INVALID_CRITERIA = "invalid_criteria"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    PARSING = "parsing"
    UNKNOWN = "unknown"


class DomainError(Exception):
    """Base class for the closed set of pipeline failures.

    Two errors are equal when both the kind and the message match, which keeps
    test assertions independent of object identity.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainError):
            return NotImplemented
        return self.kind is other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidCriteriaError(DomainError):
    kind = ErrorKind.INVALID_CRITERIA

    def __init__(self, details: str | None = None) -> None:
        super().__init__(details or "Search criteria is invalid")


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, repository_id: int) -> None:
        super().__init__(f"Repository with id {repository_id} not found")
        self.repository_id = repository_id


class NetworkError(DomainError):
    kind = ErrorKind.NETWORK

    def __init__(self, detail: str) -> None:
        super().__init__(f"Network error occurred: {detail}")
        self.detail = detail


class ParsingError(DomainError):
    kind = ErrorKind.PARSING

    def __init__(self, detail: str) -> None:
        super().__init__(f"Data parsing error: {detail}")
        self.detail = detail


class UnknownError(DomainError):
    kind = ErrorKind.UNKNOWN

    def __init__(self, detail: str) -> None:
        super().__init__(f"An unexpected error occurred: {detail}")
        self.detail = detail


def map_exception(exc: BaseException) -> DomainError:
    """Convert any failure into a :class:`DomainError`.

    Domain errors pass through untouched.
    """

    if isinstance(exc, DomainError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return NetworkError("request timed out")
    if isinstance(exc, httpx.ConnectError):
        return NetworkError("no internet connection available")
    if isinstance(exc, httpx.HTTPStatusError):
        return NetworkError(f"HTTP error: {exc.response.status_code}")
    if isinstance(exc, (httpx.RequestError, ConnectionError)):
        return NetworkError(f"HTTP error: {exc}")
    if isinstance(exc, (ValidationError, json.JSONDecodeError)):
        return ParsingError(f"invalid data format: {exc}")
    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return ParsingError(f"invalid data format: {exc}")
    return UnknownError(f"{type(exc).__name__}: {exc}")


def is_network_error(error: DomainError) -> bool:
    return error.kind is ErrorKind.NETWORK


def is_validation_error(error: DomainError) -> bool:
    return error.kind is ErrorKind.INVALID_CRITERIA


_USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_CRITERIA: "Please enter at least 2 characters.",
    ErrorKind.NETWORK: "Network error. Please check your connection and try again.",
    ErrorKind.PARSING: "Could not process results. Please try again.",
    ErrorKind.NOT_FOUND: "No repositories found.",
    ErrorKind.UNKNOWN: "Something went wrong. Please try again.",
}

GENERIC_USER_MESSAGE = _USER_MESSAGES[ErrorKind.UNKNOWN]


def user_message(error: DomainError) -> str:
    """Fixed, user-facing text for an error kind. Never echoes raw details."""

    return _USER_MESSAGES.get(error.kind, GENERIC_USER_MESSAGE)


__all__ = [
    "DomainError",
    "ErrorKind",
    "GENERIC_USER_MESSAGE",
    "InvalidCriteriaError",
    "NetworkError",
    "NotFoundError",
    "ParsingError",
    "UnknownError",
    "is_network_error",
    "is_validation_error",
    "map_exception",
    "user_message",
]
