"""Application services."""

from .session import (
    SessionService,
    configure_session_service,
    get_session_service,
    reset_session_state,
)

__all__ = [
    "SessionService",
    "configure_session_service",
    "get_session_service",
    "reset_session_state",
]
