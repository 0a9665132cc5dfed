"""
fetchstate.transport

Ambient HTTP transport handed to query/mutation functions through their context.

Responsibilities:
- Build the shared `httpx.AsyncClient` from settings (base URL, timeout).
"""

from __future__ import annotations

import httpx

from fetchstate.settings import Settings


def create_http_client(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    # `transport` lets hosts and tests plug in ASGI/mock transports without touching settings.
    return httpx.AsyncClient(
        base_url=settings.http_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        transport=transport,
    )


# --- Module Notes -----------------------------------------------------------
# Retries and auth headers belong to the caller's query function (or a custom transport);
# the engine itself never retries.
