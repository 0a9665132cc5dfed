"""
fetchstate.status

Lifecycle status shared by queries and mutations.

Responsibilities:
- Define the closed set of lifecycle states.
- Provide the immutable state snapshot published at every transition.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from fetchstate.results import ErrorInfo


class Status(enum.StrEnum):
    # No "cancelled" state: an execution always ends in SUCCESS or ERROR.
    IDLE = "IDLE"
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class OperationState:
    """
    One consistent view of an operation.

    A new instance replaces the previous one at each transition, so readers on another
    task or thread always see status, data and error from the same transition.
    """

    status: Status = Status.IDLE
    data: Any = None
    error: ErrorInfo | None = None

    @property
    def is_idle(self) -> bool:
        return self.status is Status.IDLE

    @property
    def is_pending(self) -> bool:
        return self.status is Status.PENDING

    @property
    def is_success(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is Status.ERROR

    def pending(self) -> OperationState:
        # Previous data is kept while a new execution runs.
        return OperationState(status=Status.PENDING, data=self.data, error=None)

    def succeeded(self, data: Any) -> OperationState:
        return OperationState(status=Status.SUCCESS, data=data, error=None)

    def failed(self, error: ErrorInfo) -> OperationState:
        # Last good data survives a failure.
        return OperationState(status=Status.ERROR, data=self.data, error=error)


# --- Module Notes -----------------------------------------------------------
# Predicates are derived from `status`; there is no way to set them independently.
