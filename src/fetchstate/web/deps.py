"""
fetchstate.web.deps

FastAPI dependencies for route handlers.
"""

from __future__ import annotations

from fastapi import Depends, Request

from fetchstate.errors import NotInitializedError
from fetchstate.factory import QueryFactory
from fetchstate.registry import ServiceProvider


def session_scope_dep(request: Request) -> ServiceProvider:
    # Set by `SessionScopeMiddleware`, installed through `install_fetchstate`.
    scope = getattr(request.state, "fetchstate_scope", None)
    if scope is None:
        raise NotInitializedError("install_fetchstate(app, ...) must be called before serving queries.")
    return scope


def query_factory_dep(scope: ServiceProvider = Depends(session_scope_dep)) -> QueryFactory:
    return QueryFactory(scope)


# --- Module Notes -----------------------------------------------------------
# Query handles built per request share the session's cache, so repeated requests with
# the same filter are served from cache.
