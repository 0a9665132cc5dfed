"""
fetchstate.web

FastAPI host integration.

Responsibilities:
- Wire a root provider into an application (`install_fetchstate`).
- Give each user session its own provider scope (and therefore its own cache).
- Hand route handlers a `QueryFactory` bound to the caller's session.
"""

from fetchstate.web.app import install_fetchstate
from fetchstate.web.deps import query_factory_dep, session_scope_dep
from fetchstate.web.middleware import SessionScopeMiddleware, SessionScopes

__all__ = [
    "SessionScopeMiddleware",
    "SessionScopes",
    "install_fetchstate",
    "query_factory_dep",
    "session_scope_dep",
]


# --- Module Notes -----------------------------------------------------------
# Importing this package requires FastAPI/Starlette; the core engine does not.
