"""
fetchstate.engine

The execution state machine shared by queries and mutations.

Responsibilities:
- Drive one execution cycle: IDLE/SUCCESS/ERROR -> PENDING -> SUCCESS | ERROR.
- Consult and populate the cache when a `CachePolicy` is composed in (queries).
- Resolve a fresh function context per execution.
- Absorb execution failures (raised exceptions, `error_message`, `Failed` returns) into
  state; never let them escape `execute`.
- Publish each transition as a single immutable `OperationState`.
"""

from __future__ import annotations

import enum
import inspect
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from fetchstate.cache import CachePolicy
from fetchstate.context import FunctionContext
from fetchstate.errors import FunctionNotBoundError
from fetchstate.observability.logging import get_logger
from fetchstate.results import ErrorInfo, Failed, Ok, Outcome
from fetchstate.status import OperationState

A = TypeVar("A")
C = TypeVar("C", bound=FunctionContext)

# (filter-or-input, context) -> result; may be sync or async and may return Ok/Failed.
UserFunction = Callable[[Any, Any], Any]

log = get_logger(__name__)


class OperationKind(enum.StrEnum):
    QUERY = "QUERY"
    MUTATION = "MUTATION"


class Engine(Generic[A, C]):
    """
    Single engine type; queries and mutations differ only in the capabilities passed in:
    a `CachePolicy` (queries) or none (mutations), and whether successful results are
    retained as `data`.
    """

    def __init__(
        self,
        *,
        name: str,
        kind: OperationKind,
        context_factory: Callable[[], C],
        cache: CachePolicy | None = None,
        function: UserFunction | None = None,
        initial_data: Any = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self.cache = cache
        self._context_factory = context_factory
        self._function = function
        self._state = OperationState(data=initial_data)
        self._log = log.bind(operation=name, kind=str(kind))

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def is_bound(self) -> bool:
        return self._function is not None

    def bind(self, function: UserFunction) -> None:
        if function is None:
            raise ValueError("function must not be None")
        self._function = function

    async def execute(self, arg: A) -> Outcome:
        function = self._function
        if function is None:
            raise FunctionNotBoundError(self.name)

        # Configuration errors surface here, before any state change.
        context = self._context_factory()
        context.reset()

        previous = self._state
        pending = previous.pending()
        self._state = pending

        try:
            key = self.cache.key_for(arg) if self.cache is not None else None
        except Exception as exc:
            return self._fail(Failed(ErrorInfo.from_exception(exc)), self._log)
        log_ = self._log.bind(cache_key=key) if key is not None else self._log
        log_.debug("operation.started")

        if key is not None:
            cached = self.cache.lookup(key)
            if cached is not None:
                self._state = self._state.succeeded(cached)
                log_.debug("operation.cache_hit")
                return Ok(cached)

        try:
            outcome = self._interpret(await _call(function, arg, context), context)
        except Exception as exc:
            outcome = Failed(ErrorInfo.from_exception(exc))
        except BaseException:
            # Cancellation, SystemExit and the like. No cancelled status exists, so put back
            # what readers saw before this call unless another call has published since.
            if self._state is pending:
                self._state = previous
            raise
        finally:
            context.reset()

        if isinstance(outcome, Failed):
            return self._fail(outcome, log_)

        if self.kind is OperationKind.MUTATION:
            self._state = self._state.succeeded(None)
            log_.debug("operation.succeeded")
            return Ok(None)

        self._state = self._state.succeeded(outcome.value)
        if key is not None:
            self.cache.write(key, outcome.value)
        log_.debug("operation.succeeded", cached=key is not None and self.cache.enabled)
        return outcome

    def _fail(self, outcome: Failed, log_: Any) -> Failed:
        self._state = self._state.failed(outcome.error)
        exc = outcome.error.exception
        log_.info(
            "operation.failed",
            error=outcome.error.message,
            exc_type=type(exc).__name__ if exc is not None else None,
        )
        return outcome

    @staticmethod
    def _interpret(returned: Any, context: FunctionContext) -> Outcome:
        if isinstance(returned, Failed):
            return returned
        if context.error_message:
            return Failed(ErrorInfo(message=context.error_message))
        if isinstance(returned, Ok):
            return returned
        return Ok(returned)


async def _call(function: UserFunction, arg: Any, context: FunctionContext) -> Any:
    result = function(arg, context)
    if inspect.isawaitable(result):
        result = await result
    return result


# --- Module Notes -----------------------------------------------------------
# Concurrent `execute` calls on one engine are not deduplicated; the last transition to
# be published wins. Each call does get its own context, so error messages never cross.
