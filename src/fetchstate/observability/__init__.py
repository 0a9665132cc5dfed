"""
fetchstate.observability

Observability package.

Responsibilities:
- Structured logging configuration.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Request/session context is bound into structlog contextvars by `fetchstate.web.middleware`.
