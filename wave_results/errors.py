"""Exception types raised by the results layer."""

from __future__ import annotations


class ResultsError(Exception):
    """Base class for results-layer failures."""


class SessionNotFoundError(ResultsError):
    """A token is not known to the session registry."""

    def __init__(self, token: str):
        super().__init__(f"Session not found: {token}")
        self.token = token


class ReportGenerationError(ResultsError):
    """The external report renderer failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ArchiveError(ResultsError):
    """A result archive on disk could not be read."""

    def __init__(self, token: str, reason: str):
        super().__init__(f"Malformed archive for {token}: {reason}")
        self.token = token
        self.reason = reason


__all__ = [
    "ResultsError",
    "SessionNotFoundError",
    "ReportGenerationError",
    "ArchiveError",
]
