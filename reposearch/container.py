"""Explicit dependency registry with singleton and factory lifecycles."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


class RegistryError(RuntimeError):
    """Base error for registry misuse."""


class DependencyNotRegistered(RegistryError):
    pass


class RegistryAlreadyInitialized(RegistryError):
    pass


class DependencyRegistry:
    """Type-keyed registry passed by reference to consumers.

    Factories run on every :meth:`get` and may resolve their own dependencies
    through the same registry. Cyclic factories are not detected and recurse
    until ``RecursionError``.
    """

    def __init__(self) -> None:
        self._singletons: dict[type, Any] = {}
        self._factories: dict[type, Callable[[], Any]] = {}

    def register_singleton(self, key: type[T], instance: T) -> None:
        self._factories.pop(key, None)
        self._singletons[key] = instance

    def register_factory(self, key: type[T], factory: Callable[[], T]) -> None:
        self._singletons.pop(key, None)
        self._factories[key] = factory

    def get(self, key: type[T]) -> T:
        if key in self._singletons:
            return self._singletons[key]
        factory = self._factories.get(key)
        if factory is not None:
            return factory()
        raise DependencyNotRegistered(f"Type {key.__name__} not registered")

    def is_registered(self, key: type) -> bool:
        return key in self._singletons or key in self._factories

    def clear(self) -> None:
        self._singletons.clear()
        self._factories.clear()

    @property
    def registered_singletons(self) -> list[type]:
        return list(self._singletons)

    @property
    def registered_factories(self) -> list[type]:
        return list(self._factories)


__all__ = [
    "DependencyNotRegistered",
    "DependencyRegistry",
    "RegistryAlreadyInitialized",
    "RegistryError",
]
