"""
fetchstate.bootstrap

Default service registrations.

Responsibilities:
- Register the HTTP transport (singleton), the cache store (scoped: one per user
  session) and the function contexts (transient: one per execution).
- Offer a one-call `build_provider` for hosts and tests.
"""

from __future__ import annotations

import httpx

from fetchstate.cache import CacheStore, MemoryCacheStore
from fetchstate.context import DefaultFunctionContext, FunctionContext
from fetchstate.registry import ServiceProvider, ServiceRegistry
from fetchstate.settings import Settings, get_settings
from fetchstate.transport import create_http_client


def add_fetchstate(
    registry: ServiceRegistry,
    *,
    settings: Settings | None = None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceRegistry:
    settings = settings or get_settings()

    registry.add_singleton(Settings, settings)

    # An application-provided client wins over the default one.
    if httpx.AsyncClient not in registry:
        registry.add_singleton(
            httpx.AsyncClient,
            factory=lambda _: create_http_client(settings, transport=http_transport),
        )

    # Scoped so that each session (scope) gets its own cache.
    if CacheStore not in registry:
        registry.add_scoped(
            CacheStore,
            lambda _: MemoryCacheStore(max_entries=settings.cache_max_entries),
        )

    registry.add_transient(FunctionContext, lambda sp: FunctionContext(sp))
    registry.add_transient(DefaultFunctionContext, lambda sp: DefaultFunctionContext(sp))
    return registry


def build_provider(
    settings: Settings | None = None,
    *,
    registry: ServiceRegistry | None = None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceProvider:
    registry = registry or ServiceRegistry()
    return add_fetchstate(registry, settings=settings, http_transport=http_transport).build()


# --- Module Notes -----------------------------------------------------------
# Custom context types are registered by the application, e.g.
#   registry.add_transient(MyContext, lambda sp: MyContext(sp))
