"""Session Layer - session model and registries."""

from .session_registry import FileSessionRegistry, InMemorySessionRegistry, SessionRegistry
from .session_schema import Session, SessionStatus, api_of

__all__ = [
    "FileSessionRegistry",
    "InMemorySessionRegistry",
    "Session",
    "SessionRegistry",
    "SessionStatus",
    "api_of",
]
