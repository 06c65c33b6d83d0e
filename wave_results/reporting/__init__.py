"""Reporting Layer - external HTML report renderer."""

from .renderer import ReportRenderer, WptReportRenderer, comparison_file_name

__all__ = [
    "ReportRenderer",
    "WptReportRenderer",
    "comparison_file_name",
]
