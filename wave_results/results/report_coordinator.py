"""ReportCoordinator - writes result bundles and drives report generation."""

from __future__ import annotations

import asyncio
import logging
import re
import weakref
from typing import Iterable

from ..errors import SessionNotFoundError
from ..file_system import replace_directory, write_json_atomic
from ..reporting.renderer import ReportRenderer
from ..session.session_registry import SessionRegistry
from ..session.session_schema import Session
from .aggregator import ResultAggregator
from .paths import PathResolver, compute_comparison_key, report_path

logger = logging.getLogger(__name__)

_COMPARISON_FILE = re.compile(r"^(.+)-[a-zA-Z]{2}\d+\.json$")


class ReportCoordinator:
    """
    Owns the on-disk layout under the results root.

    Single-session bundles live in {root}/{token}/{api}/ and are rendered
    in place. Comparison reports live in {root}/{key}/{api}/ and are
    rebuilt from scratch on every request.
    """

    def __init__(
        self,
        paths: PathResolver,
        sessions: SessionRegistry,
        aggregator: ResultAggregator,
        renderer: ReportRenderer,
        indent: int = 2,
    ):
        self.paths = paths
        self.sessions = sessions
        self.aggregator = aggregator
        self.renderer = renderer
        self.indent = indent
        # Entries drop out once no request holds or waits on the lock.
        self._comparison_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    async def _get_session(self, token: str) -> Session:
        session = await self.sessions.get_session(token)
        if session is None:
            raise SessionNotFoundError(token)
        return session

    def _comparison_lock(self, key: str) -> asyncio.Lock:
        lock = self._comparison_locks.get(key)
        if lock is None:
            lock = self._comparison_locks[key] = asyncio.Lock()
        return lock

    def _ensure_results_directory(self, session: Session, api: str) -> None:
        """Create root, session and API directories and write info.json once."""
        session_dir = self.paths.session_directory(session.token)
        session_dir.mkdir(parents=True, exist_ok=True)

        info_file = self.paths.info_file(session.token)
        if not info_file.exists():
            write_json_atomic(
                info_file,
                {
                    "user_agent": session.user_agent,
                    "path": session.path,
                    "types": session.types,
                },
                indent=self.indent,
            )

        self.paths.api_directory(session.token, api).mkdir(exist_ok=True)

    async def save_api_results(self, token: str, api: str) -> None:
        """Write {"results": [...]} for one (token, api) to its bundle path."""
        session = await self._get_session(token)
        results = (await self.aggregator.aggregate(token)).get(api, [])

        await asyncio.to_thread(self._ensure_results_directory, session, api)

        file_path = await self.paths.json_path(token, api)
        await asyncio.to_thread(
            write_json_atomic, file_path, {"results": results}, indent=self.indent
        )
        logger.info(f"Saved {len(results)} {api} results for {token} to {file_path}")

    async def generate_report(self, token: str, api: str) -> None:
        """Render the single-session report next to its bundle."""
        directory = (await self.paths.json_path(token, api)).parent
        await self.renderer.generate_report(
            input_dir=directory,
            output_dir=directory,
            spec_name=api,
        )
        logger.info(f"Generated {api} report for {token}")

    async def generate_api_report(self, token: str, api: str) -> None:
        await self.save_api_results(token, api)
        await self.generate_report(token, api)

    async def generate_comparison_report(
        self,
        tokens: Iterable[str],
        api: str,
        reference_token: str | None = None,
    ) -> str:
        """
        Rebuild the comparison report for a set of sessions.

        Bundles are expected to exist already; the renderer skips missing
        ones. Requests for the same key are serialized. If rendering fails
        the API subdirectory is left absent.

        Returns:
            Report path relative to the results root
        """
        tokens = list(tokens)
        key = compute_comparison_key(tokens, reference_token)

        lock = self._comparison_lock(key)
        async with lock:
            comparison_dir = self.paths.results_root / key

            locations = [await self.paths.json_location(token, api) for token in tokens]
            reference_dir = (
                self.paths.api_directory(reference_token, api) if reference_token else None
            )

            async with replace_directory(comparison_dir / api) as staging:
                await self.renderer.generate_multi_report(
                    output_dir=staging,
                    spec_name=api,
                    result_locations=locations,
                    reference_dir=reference_dir,
                )

        logger.info(f"Generated {api} comparison report {key} for {len(tokens)} sessions")
        return report_path(key, api, filtered=bool(reference_token))

    async def get_html_path(
        self,
        api: str,
        token: str | None = None,
        tokens: Iterable[str] | None = None,
        reference_token: str | None = None,
    ) -> str:
        """
        Relative path of the report for one session or a comparison.

        A single token refers to the report already rendered on API
        completion. A token set triggers generate_comparison_report.
        """
        if token:
            return report_path(token, api, filtered=bool(reference_token))
        return await self.generate_comparison_report(tokens or [], api, reference_token)

    def tokens_from_comparison_key(self, key: str) -> list[str]:
        """Recover the session tokens that make up an existing comparison."""
        comparison_dir = self.paths.results_root / key
        if not comparison_dir.exists():
            return []

        api_dirs = sorted(
            p for p in comparison_dir.iterdir() if p.is_dir() and not p.name.startswith(".")
        )
        if not api_dirs:
            return []

        tokens = []
        for entry in sorted(p.name for p in api_dirs[0].iterdir()):
            match = _COMPARISON_FILE.match(entry)
            if match:
                tokens.append(match.group(1))
        return tokens


__all__ = ["ReportCoordinator"]
