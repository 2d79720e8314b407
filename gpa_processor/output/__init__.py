"""Output formatting modules."""

from .formatters import (
    format_curriculum,
    format_department_report,
    format_gpa,
    format_grade,
    format_json,
    format_transcript,
)
from .csv_export import export_report_to_csv, export_results_to_csv
from .csv_import import read_score_entries

__all__ = [
    "format_curriculum",
    "format_grade",
    "format_gpa",
    "format_transcript",
    "format_department_report",
    "format_json",
    "export_report_to_csv",
    "export_results_to_csv",
    "read_score_entries",
]
