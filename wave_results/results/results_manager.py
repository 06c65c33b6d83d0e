"""
ResultsManager - wires the results components together.

Constructed once at process start with the registry, store and renderer
it should use; nothing here is module-global.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from ..config import ResultsConfig
from ..reporting.renderer import ReportRenderer, WptReportRenderer
from ..session.session_registry import FileSessionRegistry, SessionRegistry
from .aggregator import ResultAggregator
from .completion_tracker import CompletionTracker, RecordOutcome
from .paths import PathResolver
from .reconciliation import LoadSummary, ReconciliationLoader
from .report_coordinator import ReportCoordinator
from .result_store import JsonlResultStore, ResultStore


class ResultsManager:
    """Facade over tracker, aggregator, path resolver, reports and loader."""

    def __init__(
        self,
        results_root: Path | str,
        sessions: SessionRegistry,
        store: ResultStore,
        renderer: ReportRenderer,
        indent: int = 2,
    ):
        self.results_root = Path(results_root)
        self.sessions = sessions
        self.store = store
        self.aggregator = ResultAggregator(store)
        self.paths = PathResolver(self.results_root, sessions)
        self.reports = ReportCoordinator(
            self.paths, sessions, self.aggregator, renderer, indent=indent
        )
        self.tracker = CompletionTracker(sessions, store, self.reports)
        self.loader = ReconciliationLoader(self.results_root, sessions, store)

    @classmethod
    def from_config(cls, config: ResultsConfig) -> "ResultsManager":
        """Build a manager backed by the file registry, JSONL store and wptreport."""
        return cls(
            results_root=config.results_path,
            sessions=FileSessionRegistry(config.sessions_path),
            store=JsonlResultStore(config.store_path),
            renderer=WptReportRenderer(config.report_command),
            indent=config.indent,
        )

    async def save_result(self, token: str, test: str, result: dict[str, Any]) -> RecordOutcome:
        return await self.tracker.record_result(token, test, result)

    async def get_results(self, token: str) -> dict[str, list[dict[str, Any]]]:
        return await self.aggregator.aggregate(token)

    async def get_json_path(self, token: str, api: str) -> Path:
        return await self.paths.json_path(token, api)

    async def get_html_path(
        self,
        api: str,
        token: str | None = None,
        tokens: Iterable[str] | None = None,
        reference_token: str | None = None,
    ) -> str:
        return await self.reports.get_html_path(
            api, token=token, tokens=tokens, reference_token=reference_token
        )

    def get_tokens_from_hash(self, key: str) -> list[str]:
        return self.reports.tokens_from_comparison_key(key)

    async def load_results(self, strict: bool = False) -> LoadSummary:
        return await self.loader.load_results(strict=strict)


__all__ = ["ResultsManager"]
