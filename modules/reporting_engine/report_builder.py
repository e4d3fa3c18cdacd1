import abc
from enum import Enum
from typing import Optional, Union

from utils.exceptions import ReportError
from utils import constants


class ReportFormat(Enum):
    TEXT = constants.REPORT_FORMAT_TEXT
    HTML = constants.REPORT_FORMAT_HTML

    @classmethod
    def parse(cls, value: Union[str, "ReportFormat"]) -> "ReportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ReportError(f"Unsupported report format: {value!r}")


def _escape(text: Optional[str]) -> str:
    if text is None:
        return ""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class Report:
    """Header/content/footer triple rendered in a format fixed at construction."""

    def __init__(self, fmt: Union[str, ReportFormat]):
        self.format = ReportFormat.parse(fmt)
        self.header: Optional[str] = None
        self.content: Optional[str] = None
        self.footer: Optional[str] = None

    def render(self) -> str:
        if self.format is ReportFormat.HTML:
            return (
                "<html>\n"
                "  <body>\n"
                f"    <h1>{_escape(self.header)}</h1>\n"
                f"    <p>{_escape(self.content)}</p>\n"
                f"    <footer>{_escape(self.footer)}</footer>\n"
                "  </body>\n"
                "</html>"
            )
        return (
            f"=== {self.header or ''} ===\n"
            f"{self.content or ''}\n"
            f"--- {self.footer or ''} ---\n"
        )


class ReportBuilder(abc.ABC):
    """Builder interface: assembles one Report step by step."""

    report_format: ReportFormat

    def __init__(self):
        self._report = Report(self.report_format)

    def set_header(self, header: str) -> None:
        self._report.header = header

    def set_content(self, content: str) -> None:
        self._report.content = content

    def set_footer(self, footer: str) -> None:
        self._report.footer = footer

    def get_report(self) -> Report:
        return self._report


class TextReportBuilder(ReportBuilder):
    report_format = ReportFormat.TEXT


class HtmlReportBuilder(ReportBuilder):
    report_format = ReportFormat.HTML


_BUILDERS = {
    ReportFormat.TEXT: TextReportBuilder,
    ReportFormat.HTML: HtmlReportBuilder,
}


def create_builder(fmt: Union[str, ReportFormat]) -> ReportBuilder:
    """Return a fresh builder for ``fmt`` ('TEXT' or 'HTML')."""
    return _BUILDERS[ReportFormat.parse(fmt)]()


class ReportDirector:
    """Drives a builder through the fixed header/content/footer sequence."""

    def construct_report(self, builder: ReportBuilder, header: str, content: str, footer: str) -> None:
        builder.set_header(header)
        builder.set_content(content)
        builder.set_footer(footer)
