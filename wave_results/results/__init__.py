"""Results Layer - recording, aggregation, reports and archive loading."""

from .aggregator import ResultAggregator
from .completion_tracker import CompletionTracker, RecordOutcome
from .normalizer import normalize_result
from .paths import BundleLocation, PathResolver, compute_comparison_key
from .reconciliation import LoadOutcome, LoadStatus, LoadSummary, ReconciliationLoader
from .report_coordinator import ReportCoordinator
from .result_store import InMemoryResultStore, JsonlResultStore, ResultStore
from .results_manager import ResultsManager

__all__ = [
    "BundleLocation",
    "CompletionTracker",
    "InMemoryResultStore",
    "JsonlResultStore",
    "LoadOutcome",
    "LoadStatus",
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
]
