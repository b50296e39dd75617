from reposearch.bootstrap import (
    create_search_controller,
    initialize_registry,
    reset_registry,
    shutdown_registry,
)
from reposearch.config import SearchSettings, get_settings
from reposearch.container import DependencyNotRegistered, DependencyRegistry, RegistryAlreadyInitialized
from reposearch.domain.models import RepositoryEntity, SearchCriteria, SearchKey, SearchResult, UserEntity
from reposearch.domain.result import Failure, Result, Success
from reposearch.presentation.controller import SearchController
from reposearch.presentation.states import EmptyState, ErrorState, LoadingState, SearchState, SuccessState
from reposearch.services.exceptions import (
    DomainError,
    ErrorKind,
    InvalidCriteriaError,
    NetworkError,
    NotFoundError,
    ParsingError,
    UnknownError,
)

__all__ = [
    "DependencyNotRegistered",
    "DependencyRegistry",
    "DomainError",
    "EmptyState",
    "ErrorKind",
    "ErrorState",
    "Failure",
    "InvalidCriteriaError",
    "LoadingState",
    "NetworkError",
    "NotFoundError",
    "ParsingError",
    "RegistryAlreadyInitialized",
    "RepositoryEntity",
    "Result",
    "SearchController",
    "SearchCriteria",
    "SearchKey",
    "SearchResult",
    "SearchSettings",
    "SearchState",
    "Success",
    "SuccessState",
    "UnknownError",
    "UserEntity",
    "create_search_controller",
    "get_settings",
    "initialize_registry",
    "reset_registry",
    "shutdown_registry",
]
