"""
fetchstate.context

Capability bag handed to query and mutation functions.

Responsibilities:
- Carry the non-exceptional error channel (`error_message`).
- Resolve ambient resources (HTTP transport, custom services) by type.
"""

from __future__ import annotations

from typing import TypeVar

import httpx

from fetchstate.errors import DependencyNotFoundError
from fetchstate.registry import ServiceProvider

T = TypeVar("T")


class FunctionContext:
    """
    Passed as the second argument to every user function.

    A function reports a semantic failure (e.g. "no results matched") by setting
    `error_message` and returning normally; the engine treats a non-empty message as a
    failed execution. The engine resets the message before each call.

    Subclass this to expose extra resources, register the subclass with the provider
    and pass it as `context_type=` when creating a query or mutation.
    """

    def __init__(self, services: ServiceProvider | None = None) -> None:
        self._services = services
        self.error_message = ""

    def get(self, service_type: type[T]) -> T | None:
        if self._services is None:
            return None
        return self._services.get(service_type)

    def get_required(self, service_type: type[T]) -> T:
        if self._services is None:
            raise DependencyNotFoundError(service_type)
        return self._services.get_required(service_type)

    def reset(self) -> None:
        self.error_message = ""


class DefaultFunctionContext(FunctionContext):
    @property
    def http(self) -> httpx.AsyncClient:
        # Shared transport registered by `fetchstate.bootstrap.add_fetchstate`.
        return self.get_required(httpx.AsyncClient)


# --- Module Notes -----------------------------------------------------------
# Contexts are registered as transient: every execution gets a fresh instance, so one
# call's error message can never be observed by another call's check.
