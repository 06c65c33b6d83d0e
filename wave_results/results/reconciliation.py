"""ReconciliationLoader - import result archives left on disk by earlier runs."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ArchiveError
from ..file_system import read_json
from ..session.session_registry import SessionRegistry
from ..session.session_schema import Session, SessionStatus
from ..user_agent import parse_user_agent
from .result_store import ResultStore

logger = logging.getLogger(__name__)

RESULT_FILE_PATTERN = re.compile(r"^[A-Za-z]{2}\d{1,3}\.json$")


class LoadStatus(Enum):
    """Per-directory result of a reconciliation scan."""

    LOADED = "loaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class LoadOutcome:
    """What happened to one entry of the results root."""

    token: str
    status: LoadStatus
    detail: str = ""
    results_loaded: int = 0


@dataclass
class LoadSummary:
    """All outcomes of one load_results pass."""

    outcomes: list[LoadOutcome] = field(default_factory=list)

    def _tokens(self, status: LoadStatus) -> list[str]:
        return [o.token for o in self.outcomes if o.status == status]

    @property
    def loaded(self) -> list[str]:
        return self._tokens(LoadStatus.LOADED)

    @property
    def skipped(self) -> list[str]:
        return self._tokens(LoadStatus.SKIPPED)

    @property
    def failed(self) -> list[str]:
        return self._tokens(LoadStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "loaded": self.loaded,
            "skipped": self.skipped,
            "failed": self.failed,
            "results_loaded": sum(o.results_loaded for o in self.outcomes),
        }


def find_result_file(api_dir: Path) -> Path | None:
    """First file in an API directory named like "Ch120.json"."""
    for name in sorted(p.name for p in api_dir.iterdir()):
        if RESULT_FILE_PATTERN.match(name):
            return api_dir / name
    return None


class ReconciliationLoader:
    """
    Replays {root}/{token}/{api}/{abbrev}{version}.json archives into the
    result store and registers each archived session as completed.

    Meant to run once at startup, before live submissions are accepted.
    Tokens the registry already knows are trusted as-is and not re-read.
    """

    def __init__(self, results_root: Path | str, sessions: SessionRegistry, store: ResultStore):
        self.results_root = Path(results_root)
        self.sessions = sessions
        self.store = store

    async def load_results(self, strict: bool = False) -> LoadSummary:
        """
        Scan the results root and import unknown sessions.

        Args:
            strict: Raise ArchiveError on the first malformed archive
                instead of recording it and moving on

        Returns:
            LoadSummary with one outcome per directory entry
        """
        summary = LoadSummary()
        if not self.results_root.exists():
            return summary

        for entry in sorted(self.results_root.iterdir()):
            if not entry.is_dir():
                continue
            try:
                outcome = await self._load_session(entry)
            except ArchiveError as e:
                if strict:
                    raise
                logger.warning(str(e))
                outcome = LoadOutcome(token=entry.name, status=LoadStatus.FAILED, detail=e.reason)
            summary.outcomes.append(outcome)

        return summary

    async def _load_session(self, session_dir: Path) -> LoadOutcome:
        token = session_dir.name
        info_file = session_dir / "info.json"
        if not info_file.exists():
            return LoadOutcome(token=token, status=LoadStatus.SKIPPED, detail="no info.json")

        info = await self._read_archive_json(token, info_file)
        if not isinstance(info, dict):
            raise ArchiveError(token, "info.json is not an object")

        if await self.sessions.get_session(token) is not None:
            return LoadOutcome(token=token, status=LoadStatus.SKIPPED, detail="already known")

        user_agent = info.get("user_agent") or ""
        if not isinstance(user_agent, str):
            raise ArchiveError(token, "user_agent in info.json is not a string")
        browser = parse_user_agent(user_agent)
        logger.info(f"Loading {browser.name} {browser.version} results for {token}")

        # Read every archive before touching the registry or store so a bad
        # file leaves nothing half imported.
        results: list[dict[str, Any]] = []
        for api_dir in sorted(p for p in session_dir.iterdir() if p.is_dir()):
            result_file = find_result_file(api_dir)
            if result_file is None:
                continue
            data = await self._read_archive_json(token, result_file)
            if not isinstance(data, dict) or not isinstance(data.get("results"), list):
                raise ArchiveError(token, f"{result_file.name} in {api_dir.name} has no results list")
            for result in data["results"]:
                if not isinstance(result, dict) or not isinstance(result.get("test"), str):
                    raise ArchiveError(
                        token, f"{result_file.name} in {api_dir.name} has an entry without a test id"
                    )
            results.extend(data["results"])

        try:
            session = Session(
                token=token,
                user_agent=user_agent,
                path=info.get("path"),
                types=info.get("types") or [],
                status=SessionStatus.COMPLETED,
            )
        except ValidationError as e:
            raise ArchiveError(token, f"invalid info.json: {e}") from e
        await self.sessions.add_session(session)
        for result in results:
            await self.store.create_result(token, result)

        logger.info(f"Loaded {len(results)} results for {token}")
        return LoadOutcome(token=token, status=LoadStatus.LOADED, results_loaded=len(results))

    @staticmethod
    async def _read_archive_json(token: str, path: Path) -> Any:
        try:
            return await asyncio.to_thread(read_json, path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ArchiveError(token, f"cannot parse {path.name}: {e}") from e


__all__ = [
    "LoadOutcome",
    "LoadStatus",
    "LoadSummary",
    "ReconciliationLoader",
    "RESULT_FILE_PATTERN",
    "find_result_file",
]
