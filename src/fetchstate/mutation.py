"""
fetchstate.mutation

Mutation handle: a write operation with status tracking and no caching.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from fetchstate.context import FunctionContext
from fetchstate.engine import Engine
from fetchstate.results import ErrorInfo, Outcome
from fetchstate.status import OperationState, Status

InputT = TypeVar("InputT")
C = TypeVar("C", bound=FunctionContext)


class Mutation(Generic[InputT, C]):
    # The contract is "did the side effect succeed"; there is no `data`.

    def __init__(self, engine: Engine[InputT, C]) -> None:
        self._engine = engine

    def __repr__(self) -> str:
        return f"Mutation(name={self.name!r}, status={self.status.value})"

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

    def bind(self, function: Any) -> Mutation[InputT, C]:
        self._engine.bind(function)
        return self

    async def execute(self, input_value: InputT) -> Outcome:
        return await self._engine.execute(input_value)


# --- Module Notes -----------------------------------------------------------
# Callers typically re-execute (or `invalidate`) the affected queries after a successful
# mutation; nothing here does that automatically.
