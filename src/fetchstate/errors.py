"""
fetchstate.errors

Programmer-error taxonomy.

Responsibilities:
- Configuration errors: provider missing, dependency not registered.
- Invocation-order errors: executing a handle whose function was never bound.

Execution failures are never raised; they are captured into operation state
(see `fetchstate.engine`).
"""

from __future__ import annotations

from typing import Any


class FetchStateError(Exception):
    pass


class NotInitializedError(FetchStateError):
    def __init__(self, message: str = "QueryFactory.configure must be called before creating queries.") -> None:
        super().__init__(message)


class DependencyNotFoundError(FetchStateError):
    def __init__(self, service_type: Any) -> None:
        self.service_type = service_type
        name = getattr(service_type, "__qualname__", repr(service_type))
        super().__init__(f"No service registered for type {name!r}.")


class ProviderClosedError(FetchStateError):
    def __init__(self, service_type: Any) -> None:
        self.service_type = service_type
        name = getattr(service_type, "__qualname__", repr(service_type))
        super().__init__(f"Cannot resolve {name!r}: the provider has been closed.")


class FunctionNotBoundError(FetchStateError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation!r} has no function bound; call bind() before execute().")


# --- Module Notes -----------------------------------------------------------
# Keep these few and specific: callers are expected to let them propagate.
