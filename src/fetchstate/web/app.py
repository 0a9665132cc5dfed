"""
fetchstate.web.app

Application wiring for FastAPI hosts.

Responsibilities:
- Configure structured logging when the host has not configured its own.
- Stash the root provider and session scopes on `app.state`.
- Register the session scope middleware.
- Close session scopes and the root provider on shutdown.
"""

from __future__ import annotations

from fastapi import FastAPI

from fetchstate.observability.logging import configure_logging, get_logger
from fetchstate.registry import ServiceProvider
from fetchstate.settings import Settings
from fetchstate.web.middleware import SessionScopeMiddleware, SessionScopes

log = get_logger(__name__)


def install_fetchstate(
    app: FastAPI,
    *,
    provider: ServiceProvider,
    settings: Settings,
    configure_logs: bool = True,
) -> FastAPI:
    if not provider.is_root:
        raise ValueError("install_fetchstate expects the root provider, not a scope")
    if configure_logs:
        configure_logging(service_name=settings.service_name, level=settings.log_level)

    scopes = SessionScopes(provider, max_sessions=settings.max_sessions)
    app.state.fetchstate_provider = provider
    app.state.fetchstate_scopes = scopes
    app.add_middleware(SessionScopeMiddleware, scopes=scopes, header=settings.session_header)

    @app.on_event("shutdown")
    async def _shutdown_fetchstate() -> None:
        await scopes.aclose()
        await provider.aclose()
        log.info("fetchstate.shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# Hosts call this once from their app factory, after building the provider with
# `fetchstate.bootstrap.build_provider`.
