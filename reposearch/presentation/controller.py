"""Debounced, switch-latest search state machine driven by text input."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, Sequence

from reposearch.domain.models import DEFAULT_PER_PAGE, RepositoryEntity, SearchCriteria
from reposearch.domain.result import Result
from reposearch.logging import logger
from reposearch.presentation.states import (
    EmptyState,
    ErrorState,
    LoadingState,
    SearchState,
    SuccessState,
)
from reposearch.services.exceptions import DomainError, user_message

DEFAULT_DEBOUNCE_MS = 300

StateListener = Callable[[SearchState], None]


class SearchExecutor(Protocol):
    async def execute(self, criteria: SearchCriteria) -> Result[Sequence[RepositoryEntity]]: ...


class SearchController:
    """Turns raw text-change events into :class:`SearchState` transitions.

    Non-blank input restarts a trailing-edge debounce timer. When it fires the
    controller emits ``LoadingState`` and runs the use case in a task tagged
    with a generation number; a result is applied only if its generation is
    still the latest dispatched one. Superseded searches are not aborted,
    their results are dropped on arrival.
    """

    def __init__(
        self,
        use_case: SearchExecutor,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self._use_case = use_case
        self._debounce_seconds = debounce_ms / 1000
        self._per_page = per_page
        self._state: SearchState = EmptyState()
        self._listeners: list[StateListener] = []
        self._debounce_task: asyncio.Task[None] | None = None
        self._search_tasks: set[asyncio.Task[None]] = set()
        self._generation = 0
        self._disposed = False

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_text_changed(self, text: str) -> None:
        if self._disposed:
            raise RuntimeError("SearchController has been disposed")

        self._cancel_debounce()
        if not text.strip():
            # Invalidates any in-flight search.
            self._generation += 1
            self._emit(EmptyState())
            return

        loop = asyncio.get_running_loop()
        self._debounce_task = loop.create_task(self._debounce(text))

    async def wait_until_idle(self) -> None:
        """Wait for the pending debounce and all in-flight searches to settle."""

        while True:
            pending = [task for task in self._search_tasks if not task.done()]
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.append(self._debounce_task)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._cancel_debounce()
        for task in list(self._search_tasks):
            task.cancel()
        self._listeners.clear()

    async def _debounce(self, text: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self._debounce_task = None
        self._dispatch(text)

    def _dispatch(self, text: str) -> None:
        self._generation += 1
        generation = self._generation
        criteria = SearchCriteria(query=text, page=1, per_page=self._per_page)

        self._emit(LoadingState())
        logger.debug("search_dispatched", query=criteria.trimmed_query, generation=generation)

        task = asyncio.get_running_loop().create_task(self._run(criteria, generation))
        self._search_tasks.add(task)
        task.add_done_callback(self._on_search_done)

    async def _run(self, criteria: SearchCriteria, generation: int) -> None:
        result = await self._use_case.execute(criteria)
        if self._disposed or generation != self._generation:
            logger.debug(
                "stale_search_result_discarded",
                query=criteria.trimmed_query,
                generation=generation,
                latest_generation=self._generation,
            )
            return
        self._emit(result.fold(self._success_state, self._error_state))

    @staticmethod
    def _success_state(items: Sequence[RepositoryEntity]) -> SearchState:
        return SuccessState(tuple(items))

    @staticmethod
    def _error_state(error: DomainError) -> SearchState:
        return ErrorState(user_message(error))

    def _on_search_done(self, task: asyncio.Task[None]) -> None:
        self._search_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("search_task_failed", error=str(exc), exc_info=exc)

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def _emit(self, state: SearchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


__all__ = ["DEFAULT_DEBOUNCE_MS", "SearchController", "SearchExecutor", "StateListener"]
