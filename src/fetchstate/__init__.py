"""
fetchstate

Top-level package for query/mutation state machines with result caching.

Responsibilities:
- Expose package version metadata.
- Re-export the public API used by application code.
"""

from fetchstate.bootstrap import add_fetchstate, build_provider
from fetchstate.cache import CachePolicy, CacheStore, MemoryCacheStore, default_cache_key
from fetchstate.context import DefaultFunctionContext, FunctionContext
from fetchstate.errors import (
    DependencyNotFoundError,
    FetchStateError,
    FunctionNotBoundError,
    NotInitializedError,
    ProviderClosedError,
)
from fetchstate.factory import QueryFactory
from fetchstate.mutation import Mutation
from fetchstate.query import Query
from fetchstate.registry import Lifetime, ServiceProvider, ServiceRegistry
from fetchstate.results import ErrorInfo, Failed, Ok, Outcome
from fetchstate.status import OperationState, Status

__all__ = [
    "__version__",
    "CachePolicy",
    "CacheStore",
    "DefaultFunctionContext",
    "DependencyNotFoundError",
    "ErrorInfo",
    "Failed",
    "FetchStateError",
    "FunctionContext",
    "FunctionNotBoundError",
    "Lifetime",
    "MemoryCacheStore",
    "Mutation",
    "NotInitializedError",
    "Ok",
    "OperationState",
    "Outcome",
    "ProviderClosedError",
    "Query",
    "QueryFactory",
    "ServiceProvider",
    "ServiceRegistry",
    "Status",
    "add_fetchstate",
    "build_provider",
    "default_cache_key",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# The web integration (`fetchstate.web`) is not re-exported so that importing the core
# does not pull FastAPI in.
