"""
fetchstate.registry

Type-keyed dependency registry.

Responsibilities:
- Collect service registrations (`ServiceRegistry`) with singleton / scoped / transient
  lifetimes.
- Resolve services by type (`ServiceProvider.get` / `get_required`).
- Create child scopes so scoped services (e.g. a cache store) live once per user session.
- Close owned resources that expose `aclose()` / `close()`.
"""

from __future__ import annotations

import enum
import inspect
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from fetchstate.errors import DependencyNotFoundError, ProviderClosedError
from fetchstate.observability.logging import get_logger

T = TypeVar("T")

Factory = Callable[["ServiceProvider"], Any]

log = get_logger(__name__)


class Lifetime(enum.StrEnum):
    SINGLETON = "SINGLETON"
    SCOPED = "SCOPED"
    TRANSIENT = "TRANSIENT"


@dataclass(frozen=True, slots=True)
class Registration:
    service_type: Any
    factory: Factory
    lifetime: Lifetime


class ServiceRegistry:
    """
    Mutable collection of registrations; call `build()` once wiring is complete.
    Later registrations for the same type replace earlier ones.
    """

    def __init__(self) -> None:
        self._registrations: dict[Any, Registration] = {}

    def add(self, service_type: Any, factory: Factory, lifetime: Lifetime) -> ServiceRegistry:
        self._registrations[service_type] = Registration(service_type, factory, lifetime)
        return self

    def add_singleton(
        self,
        service_type: Any,
        instance: Any = None,
        *,
        factory: Factory | None = None,
    ) -> ServiceRegistry:
        if factory is None:
            if instance is None:
                raise ValueError("add_singleton requires an instance or a factory")
            return self.add(service_type, lambda _: instance, Lifetime.SINGLETON)
        return self.add(service_type, factory, Lifetime.SINGLETON)

    def add_scoped(self, service_type: Any, factory: Factory) -> ServiceRegistry:
        return self.add(service_type, factory, Lifetime.SCOPED)

    def add_transient(self, service_type: Any, factory: Factory) -> ServiceRegistry:
        return self.add(service_type, factory, Lifetime.TRANSIENT)

    def __contains__(self, service_type: Any) -> bool:
        return service_type in self._registrations

    def build(self) -> ServiceProvider:
        return ServiceProvider(dict(self._registrations))


class ServiceProvider:
    """
    Resolves services registered in a `ServiceRegistry`.

    The root provider holds singletons. `create_scope()` returns a child provider that
    shares the root's singletons and keeps its own scoped instances. Resolving a scoped
    service from the root treats it as a singleton of the root.
    """

    def __init__(
        self,
        registrations: dict[Any, Registration],
        *,
        root: ServiceProvider | None = None,
    ) -> None:
        self._registrations = registrations
        self._root = root
        self._instances: dict[Any, Any] = {}
        self._owned: list[Any] = []
        self._lock = threading.RLock()
        self._closed = False

    @property
    def is_root(self) -> bool:
        return self._root is None

    def is_registered(self, service_type: Any) -> bool:
        return service_type in self._registrations

    def create_scope(self) -> ServiceProvider:
        return ServiceProvider(self._registrations, root=self._root or self)

    def get(self, service_type: type[T]) -> T | None:
        reg = self._registrations.get(service_type)
        if reg is None:
            return None
        if reg.lifetime is Lifetime.TRANSIENT:
            return reg.factory(self)
        if reg.lifetime is Lifetime.SINGLETON and self._root is not None:
            return self._root.get(service_type)
        return self._cached(reg)

    def get_required(self, service_type: type[T]) -> T:
        instance = self.get(service_type)
        if instance is None:
            raise DependencyNotFoundError(service_type)
        return instance

    def _cached(self, reg: Registration) -> Any:
        with self._lock:
            # Nothing created after aclose() would ever be closed.
            if self._closed:
                raise ProviderClosedError(reg.service_type)
            if reg.service_type not in self._instances:
                instance = reg.factory(self)
                self._instances[reg.service_type] = instance
                self._owned.append(instance)
            return self._instances[reg.service_type]

    async def aclose(self) -> None:
        """
        Close instances this provider created, newest first.
        A scope closes only its scoped instances; singletons belong to the root.
        """

        with self._lock:
            if self._closed:
                return
            self._closed = True
            owned = list(reversed(self._owned))
            self._owned.clear()
            self._instances.clear()

        for instance in owned:
            closer = getattr(instance, "aclose", None) or getattr(instance, "close", None)
            if closer is None:
                continue
            result = closer()
            if inspect.isawaitable(result):
                await result
        log.debug("provider.closed", root=self.is_root, closed=len(owned))


# --- Module Notes -----------------------------------------------------------
# Registrations are keyed by the type object itself, so protocols (e.g. `CacheStore`)
# work as keys just like concrete classes.
