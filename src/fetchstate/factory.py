"""
fetchstate.factory

Builds Query and Mutation handles bound to a service provider.

Responsibilities:
- Resolve the cache store and validate the context type against the provider.
- Compose the engine from a cache policy and a per-execution context resolver.
- Refuse to build anything before a provider has been configured.
"""

from __future__ import annotations

from typing import Any

from fetchstate.cache import CachePolicy, CacheStore, KeyFunction, qualified_name
from fetchstate.context import DefaultFunctionContext, FunctionContext
from fetchstate.engine import Engine, OperationKind, UserFunction
from fetchstate.errors import DependencyNotFoundError, NotInitializedError
from fetchstate.mutation import Mutation
from fetchstate.observability.logging import get_logger
from fetchstate.query import Query
from fetchstate.registry import ServiceProvider
from fetchstate.settings import Settings, get_settings

log = get_logger(__name__)


class QueryFactory:
    """
    Explicitly constructed factory; tests and sessions each hold their own instance.

    The provider may be supplied later through `configure()` (e.g. once a host has
    finished building its services), but `create_query` / `create_mutation` fail with
    `NotInitializedError` until it is.
    """

    def __init__(
        self,
        provider: ServiceProvider | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings

    @property
    def is_configured(self) -> bool:
        return self._provider is not None

    def configure(self, provider: ServiceProvider) -> None:
        if provider is None:
            raise ValueError("provider must not be None")
        self._provider = provider

    def create_query(
        self,
        function: UserFunction,
        *,
        result_type: type | None = None,
        context_type: type[FunctionContext] = DefaultFunctionContext,
        key: KeyFunction | None = None,
        cache: bool | None = None,
        name: str | None = None,
        initial_data: Any = None,
    ) -> Query[Any, Any, Any]:
        """
        `result_type` (or, without it, the function itself) namespaces cache keys so that
        queries for different results never share entries. `key` replaces the derived
        filter stringification. `cache=None` follows `Settings.cache_enabled`.
        """

        provider = self._require_provider()
        context_factory = self._context_factory(provider, context_type)
        store = provider.get_required(CacheStore)

        namespace = qualified_name(result_type if result_type is not None else function)
        enabled = self._resolve_settings(provider).cache_enabled if cache is None else cache
        policy = CachePolicy(store, namespace=namespace, key=key, enabled=enabled)

        engine: Engine[Any, Any] = Engine(
            name=name or _display_name(result_type or function),
            kind=OperationKind.QUERY,
            context_factory=context_factory,
            cache=policy,
            function=function,
            initial_data=initial_data,
        )
        log.debug("factory.query_created", operation=engine.name, cache_enabled=enabled)
        return Query(engine)

    def create_mutation(
        self,
        function: UserFunction,
        *,
        context_type: type[FunctionContext] = DefaultFunctionContext,
        name: str | None = None,
    ) -> Mutation[Any, Any]:
        provider = self._require_provider()
        engine: Engine[Any, Any] = Engine(
            name=name or _display_name(function),
            kind=OperationKind.MUTATION,
            context_factory=self._context_factory(provider, context_type),
            function=function,
        )
        log.debug("factory.mutation_created", operation=engine.name)
        return Mutation(engine)

    def _require_provider(self) -> ServiceProvider:
        if self._provider is None:
            raise NotInitializedError()
        return self._provider

    def _resolve_settings(self, provider: ServiceProvider) -> Settings:
        return self._settings or provider.get(Settings) or get_settings()

    @staticmethod
    def _context_factory(provider: ServiceProvider, context_type: type[FunctionContext]):
        if not provider.is_registered(context_type):
            raise DependencyNotFoundError(context_type)
        return lambda: provider.get_required(context_type)


def _display_name(obj: Any) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)


# --- Module Notes -----------------------------------------------------------
# Handles resolve a new context on every execute; the provider's registration lifetime
# for the context type decides whether that is a fresh instance (transient, the default).
