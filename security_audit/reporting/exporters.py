"""Report export modules for Markdown and JSON formats."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..utils.logger import get_logger
from .report_generator import ReportData

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
MARKDOWN_TEMPLATE = "report.md.j2"


class BaseExporter(ABC):
    """Abstract base class for report exporters."""

    @abstractmethod
    def render(self, report_data: ReportData) -> str:
        """Render report to a string."""
        pass

    def export(self, report_data: ReportData, output_path: str) -> str:
        """
        Export report to file.

        Args:
            report_data: Report data to export
            output_path: Output file path

        Returns:
            Path to exported file
        """
        logger.info(f"Exporting report with {self.__class__.__name__}: {output_path}")

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(report_data), encoding="utf-8")

        logger.info(f"Report exported: {output_path}")
        return str(path.absolute())


class MarkdownExporter(BaseExporter):
    """Export reports to Markdown format."""

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize Markdown exporter.

        Args:
            template_dir: Directory containing a report.md.j2 that replaces
                the bundled template
        """
        self.env = Environment(
            loader=FileSystemLoader([template_dir, str(TEMPLATE_DIR)] if template_dir else str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, report_data: ReportData) -> str:
        template = self.env.get_template(MARKDOWN_TEMPLATE)
        return template.render(**report_data.to_dict())


class JSONExporter(BaseExporter):
    """Export reports to JSON format."""

    def __init__(self, indent: int = 2):
        """
        Initialize JSON exporter.

        Args:
            indent: JSON indentation level
        """
        self.indent = indent

    def render(self, report_data: ReportData) -> str:
        return json.dumps(report_data.to_dict(), indent=self.indent, ensure_ascii=False, default=str)


def get_exporter(format_type: str, template_dir: Optional[str] = None) -> BaseExporter:
    """
    Get appropriate exporter for format type.

    Args:
        format_type: Export format (markdown, json)
        template_dir: Optional template directory

    Returns:
        Appropriate exporter instance
    """
    format_type = format_type.lower()

    if format_type in ["markdown", "md"]:
        return MarkdownExporter(template_dir)
    elif format_type == "json":
        return JSONExporter()
    else:
        raise ValueError(f"Unsupported export format: {format_type}")
