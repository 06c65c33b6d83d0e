"""
Session model for a single test run.

Pydantic model persisted by the session registry. A session is one
browser/device instance running a declared list of tests.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Lifecycle state of a test session."""

    PENDING = "pending"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABORTED = "aborted"


def api_of(test: str) -> str:
    """
    API module of a test identifier: its first non-empty path segment.

    "/dom/nodes/a.html" and "dom/nodes/a.html" both belong to "dom".
    """
    if test.startswith("/"):
        return test.split("/")[1]
    return test.split("/")[0]


class Session(BaseModel):
    """Session state owned by the registry."""

    token: str
    user_agent: str = ""
    path: str | None = None
    types: list[str] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.PENDING
    tests: list[str] = Field(default_factory=list)
    completed_tests: list[str] = Field(default_factory=list)

    def test_exists(self, test: str) -> bool:
        return test in self.tests

    def is_test_complete(self, test: str) -> bool:
        return test in self.completed_tests

    def complete_test(self, test: str) -> None:
        """Mark a declared test complete. Repeated calls have no effect."""
        if test not in self.completed_tests:
            self.completed_tests.append(test)

    def apis(self) -> list[str]:
        """APIs covered by the declared tests, in first-seen order."""
        seen: list[str] = []
        for test in self.tests:
            api = api_of(test)
            if api not in seen:
                seen.append(api)
        return seen

    def is_api_complete(self, api: str) -> bool:
        """True when every declared test of the API has been completed."""
        api_tests = [t for t in self.tests if api_of(t) == api]
        if not api_tests:
            return False
        completed = set(self.completed_tests)
        return all(t in completed for t in api_tests)


__all__ = [
    "Session",
    "SessionStatus",
    "api_of",
]
