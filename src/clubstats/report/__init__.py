"""Report utilities (CSV export)."""

from .export import ReportExportError, export_corner_summary_to_csv, export_scores_to_csv

__all__ = [
    "ReportExportError",
    "export_corner_summary_to_csv",
    "export_scores_to_csv",
]
