"""Results summary page generation."""

from .generator import generate_report, build_report_html, ReportGenerationError

__all__ = [
    'generate_report',
    'build_report_html',
    'ReportGenerationError',
]
