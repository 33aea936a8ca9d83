"""Report generation modules."""

from .report_generator import ReportData, ReportGenerator
from .exporters import JSONExporter, MarkdownExporter, get_exporter

__all__ = [
    "ReportData",
    "ReportGenerator",
    "MarkdownExporter",
    "JSONExporter",
    "get_exporter",
]
