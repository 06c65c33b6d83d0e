"""
Session registries.

The results layer only needs three operations from a registry: look a
session up, write it back, and add a new one. Two implementations are
provided: an in-memory registry and one that keeps a JSON document per
token on disk.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from ..file_system import read_json, write_text_atomic
from .session_schema import Session

logger = logging.getLogger(__name__)


class SessionRegistry(Protocol):
    """Interface the results layer consumes."""

    async def get_session(self, token: str) -> Session | None:
        ...

    async def update_session(self, session: Session) -> None:
        ...

    async def add_session(self, session: Session) -> None:
        ...


class InMemorySessionRegistry:
    """Registry backed by a dict. Sessions are copied in and out."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    async def get_session(self, token: str) -> Session | None:
        session = self._sessions.get(token)
        return session.model_copy(deep=True) if session else None

    async def update_session(self, session: Session) -> None:
        self._sessions[session.token] = session.model_copy(deep=True)

    async def add_session(self, session: Session) -> None:
        self._sessions[session.token] = session.model_copy(deep=True)

    def __contains__(self, token: str) -> bool:
        return token in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


class FileSessionRegistry:
    """
    Registry storing {base_dir}/{token}.json per session.

    Writes are atomic so a crash never leaves a truncated session file.
    """

    def __init__(self, base_dir: Path | str):
        """
        Initialize the registry.

        Args:
            base_dir: Directory holding one JSON file per session
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def get_session_file(self, token: str) -> Path:
        """Get the session file path."""
        return self.base_dir / f"{token}.json"

    async def get_session(self, token: str) -> Session | None:
        session_file = self.get_session_file(token)
        if not session_file.exists():
            return None

        data = await asyncio.to_thread(read_json, session_file)
        return Session(**data)

    async def update_session(self, session: Session) -> None:
        await asyncio.to_thread(
            write_text_atomic,
            self.get_session_file(session.token),
            session.model_dump_json(indent=2),
        )

    async def add_session(self, session: Session) -> None:
        logger.debug(f"Registering session {session.token}")
        await self.update_session(session)

    def list_tokens(self) -> list[str]:
        """List all stored session tokens."""
        return sorted(p.stem for p in self.base_dir.glob("*.json"))


__all__ = [
    "SessionRegistry",
    "InMemorySessionRegistry",
    "FileSessionRegistry",
]
