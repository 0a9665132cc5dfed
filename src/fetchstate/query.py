"""
fetchstate.query

Query handle: a read operation with status tracking and result caching.

Responsibilities:
- Expose `execute(filter)` plus read-only `status`, `error`, `data` and predicates.
- Expose per-query cache controls (`caching_enabled`, `cache_key`, `invalidate`).
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from fetchstate.context import FunctionContext
from fetchstate.engine import Engine
from fetchstate.results import ErrorInfo, Outcome
from fetchstate.status import OperationState, Status

T = TypeVar("T")
F = TypeVar("F")
C = TypeVar("C", bound=FunctionContext)


class Query(Generic[T, F, C]):
    """
    Long-lived handle meant to be kept (e.g. on a view/component) and executed repeatedly
    with different filters. `data` keeps the last successful result: it is not cleared
    when a new execution starts or fails, only replaced by the next success.

    `execute` never raises for execution failures; inspect `status` / `error`, or the
    returned `Ok | Failed` outcome.
    """

    def __init__(self, engine: Engine[F, C]) -> None:
        self._engine = engine

    def __repr__(self) -> str:
        return f"Query(name={self.name!r}, status={self.status.value})"

    @property
    def name(self) -> str:
        return self._engine.name

    @property
    def state(self) -> OperationState:
        return self._engine.state

    @property
    def status(self) -> Status:
        return self._engine.state.status

    @property
    def error(self) -> ErrorInfo | None:
        return self._engine.state.error

    @property
    def data(self) -> T | None:
        return self._engine.state.data

    @property
    def is_idle(self) -> bool:
        return self._engine.state.is_idle

    @property
    def is_pending(self) -> bool:
        return self._engine.state.is_pending

    @property
    def is_success(self) -> bool:
        return self._engine.state.is_success

    @property
    def is_error(self) -> bool:
        return self._engine.state.is_error

    @property
    def caching_enabled(self) -> bool:
        return self._engine.cache is not None and self._engine.cache.enabled

    @caching_enabled.setter
    def caching_enabled(self, value: bool) -> None:
        if self._engine.cache is None:
            raise ValueError(f"query {self.name!r} was created without a cache store")
        self._engine.cache.enabled = value

    def bind(self, function: Any) -> Query[T, F, C]:
        self._engine.bind(function)
        return self

    def cache_key(self, filter_value: F) -> str | None:
        if self._engine.cache is None:
            return None
        return self._engine.cache.key_for(filter_value)

    def invalidate(self, filter_value: F) -> bool:
        """Drop the cached entry for `filter_value`, if the store supports removal."""
        if self._engine.cache is None:
            return False
        return self._engine.cache.remove(self._engine.cache.key_for(filter_value))

    async def execute(self, filter_value: F) -> Outcome:
        return await self._engine.execute(filter_value)


# --- Module Notes -----------------------------------------------------------
# The handle adds no state of its own; everything observable lives in the engine snapshot.
