"""wave-results: persistence and reporting for conformance test sessions.

Test results arrive one at a time from browser sessions. Once every test
of an API has reported for a session, its results are written as a JSON
bundle and rendered with wptreport. Several sessions can be compared in
a report addressed by a hash of their tokens.
"""

__version__ = "0.1.0"

# Session Layer
from .session import (
    FileSessionRegistry,
    InMemorySessionRegistry,
    Session,
    SessionRegistry,
    SessionStatus,
    api_of,
)

# Results Layer
from .results import (
    BundleLocation,
    CompletionTracker,
    InMemoryResultStore,
    JsonlResultStore,
    LoadSummary,
    PathResolver,
    ReconciliationLoader,
    RecordOutcome,
    ReportCoordinator,
    ResultAggregator,
    ResultStore,
    ResultsManager,
    compute_comparison_key,
    normalize_result,
)

# Reporting, Errors & Config
from .reporting import ReportRenderer, WptReportRenderer
from .errors import ArchiveError, ReportGenerationError, ResultsError, SessionNotFoundError
from .config import ResultsConfig, default_config

__all__ = [
    # Session
    "FileSessionRegistry",
    "InMemorySessionRegistry",
    "Session",
    "SessionRegistry",
    "SessionStatus",
    "api_of",
    # Results
    "BundleLocation",
    "CompletionTracker",
    "InMemoryResultStore",
    "JsonlResultStore",
    "LoadSummary",
    "PathResolver",
    "ReconciliationLoader",
    "RecordOutcome",
    "ReportCoordinator",
    "ResultAggregator",
    "ResultStore",
    "ResultsManager",
    "compute_comparison_key",
    "normalize_result",
    # Reporting, Errors & Config
    "ReportRenderer",
    "WptReportRenderer",
    "ArchiveError",
    "ReportGenerationError",
    "ResultsError",
    "SessionNotFoundError",
    "ResultsConfig",
    "default_config",
]
