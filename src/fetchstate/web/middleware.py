"""
fetchstate.web.middleware

HTTP middleware for session-scoped services.

Responsibilities:
- Map a session id (request header) to a long-lived provider scope.
- Generate session ids for new callers and echo them on the response.
- Bind the session id into structlog contextvars for the request's log lines.
"""

from __future__ import annotations

import asyncio
import uuid
from collections import OrderedDict

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from fetchstate.observability.logging import get_logger
from fetchstate.registry import ServiceProvider

log = get_logger(__name__)


class SessionScopes:
    """
    Bounded map of session id -> provider scope. When full, the least recently used
    session is dropped and its scope closed.
    """

    def __init__(self, provider: ServiceProvider, *, max_sessions: int) -> None:
        self._provider = provider
        self._max_sessions = max_sessions
        self._scopes: OrderedDict[str, ServiceProvider] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._scopes)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._scopes

    async def get_or_create(self, session_id: str) -> ServiceProvider:
        evicted: list[ServiceProvider] = []
        async with self._lock:
            scope = self._scopes.get(session_id)
            if scope is None:
                scope = self._provider.create_scope()
                self._scopes[session_id] = scope
                while len(self._scopes) > self._max_sessions:
                    _, old = self._scopes.popitem(last=False)
                    evicted.append(old)
            else:
                self._scopes.move_to_end(session_id)

        for old in evicted:
            await old.aclose()
        if evicted:
            log.info("session.evicted", count=len(evicted))
        return scope

    async def end(self, session_id: str) -> bool:
        async with self._lock:
            scope = self._scopes.pop(session_id, None)
        if scope is None:
            return False
        await scope.aclose()
        return True

    async def aclose(self) -> None:
        async with self._lock:
            scopes = list(self._scopes.values())
            self._scopes.clear()
        for scope in scopes:
            await scope.aclose()


class SessionScopeMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, scopes: SessionScopes, header: str) -> None:
        super().__init__(app)
        self._scopes = scopes
        self._header = header

    async def dispatch(self, request: Request, call_next) -> Response:
        session_id = request.headers.get(self._header) or str(uuid.uuid4())
        request.state.fetchstate_session_id = session_id
        request.state.fetchstate_scope = await self._scopes.get_or_create(session_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(session_id=session_id, path=request.url.path)
        try:
            response: Response = await call_next(request)
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers[self._header] = session_id
        return response


# --- Module Notes -----------------------------------------------------------
# Session ids are opaque; authenticating them is the host application's concern.
