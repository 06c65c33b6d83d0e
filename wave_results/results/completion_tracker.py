"""CompletionTracker - entry point for every incoming test result."""

from __future__ import annotations

import asyncio
import logging
import weakref
from enum import Enum
from typing import Any

from ..session.session_registry import SessionRegistry
from ..session.session_schema import api_of
from .normalizer import normalize_result
from .report_coordinator import ReportCoordinator
from .result_store import ResultStore

logger = logging.getLogger(__name__)


class RecordOutcome(Enum):
    """What record_result did with a submission."""

    IGNORED_UNKNOWN_SESSION = "ignored_unknown_session"
    IGNORED_UNKNOWN_TEST = "ignored_unknown_test"
    IGNORED_DUPLICATE = "ignored_duplicate"
    RECORDED = "recorded"
    API_COMPLETED = "api_completed"


class CompletionTracker:
    """
    Records each test result at most once and fires API completion.

    Submissions for one token are serialized; different tokens proceed
    concurrently. Late, unknown and duplicate submissions are expected
    from distributed runners and are ignored rather than raised.
    """

    def __init__(
        self,
        sessions: SessionRegistry,
        store: ResultStore,
        reports: ReportCoordinator,
    ):
        self.sessions = sessions
        self.store = store
        self.reports = reports
        # Entries drop out once no submission holds or waits on the lock.
        self._token_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _token_lock(self, token: str) -> asyncio.Lock:
        lock = self._token_locks.get(token)
        if lock is None:
            lock = self._token_locks[token] = asyncio.Lock()
        return lock

    async def record_result(self, token: str, test: str, result: dict[str, Any]) -> RecordOutcome:
        """
        Record the result of one test.

        When this completes the last outstanding test of an API, the API's
        bundle is written and its report rendered. The session is written
        back to the registry whenever it exists, even if that step raises.

        Args:
            token: Session token
            test: Test identifier, e.g. "/dom/nodes/a.html"
            result: Raw testharness result

        Returns:
            RecordOutcome describing what happened
        """
        lock = self._token_lock(token)
        async with lock:
            session = await self.sessions.get_session(token)
            if session is None:
                logger.debug(f"Ignoring result for unknown session {token}")
                return RecordOutcome.IGNORED_UNKNOWN_SESSION

            if not session.test_exists(test):
                logger.debug(f"Ignoring result for {test}, not part of session {token}")
                return RecordOutcome.IGNORED_UNKNOWN_TEST

            try:
                if session.is_test_complete(test):
                    logger.debug(f"Ignoring duplicate result for {test} in session {token}")
                    return RecordOutcome.IGNORED_DUPLICATE

                record = normalize_result(result)
                record["test"] = test
                await self.store.create_result(token, record)
                session.complete_test(test)

                api = api_of(test)
                if not session.is_api_complete(api):
                    return RecordOutcome.RECORDED

                logger.info(f"All {api} tests complete for session {token}")
                await self.reports.generate_api_report(token, api)
                return RecordOutcome.API_COMPLETED
            finally:
                await self.sessions.update_session(session)


__all__ = [
    "CompletionTracker",
    "RecordOutcome",
]
