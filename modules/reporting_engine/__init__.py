"""
Reporting Module.

Builder/director pair that assembles a header/content/footer report and
renders it as plain text or escaped HTML.
"""

from .report_builder import (
    Report,
    ReportFormat,
    ReportBuilder,
    TextReportBuilder,
    HtmlReportBuilder,
    ReportDirector,
    create_builder,
)
from .reporting_engine import ReportingEngine

__all__ = [
    'Report',
    'ReportFormat',
    'ReportBuilder',
    'TextReportBuilder',
    'HtmlReportBuilder',
    'ReportDirector',
    'create_builder',
    'ReportingEngine'
]
