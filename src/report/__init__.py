"""Report output: plain text on stdout and JSON/CSV export."""

from .text import build_report, render_report
from .export import export_csv, export_json, export_pairs

__all__ = [
    "build_report",
    "render_report",
    "export_csv",
    "export_json",
    "export_pairs",
]
