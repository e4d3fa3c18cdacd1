import logging
from pathlib import Path
from typing import Dict, Iterable, Union

from modules.base.base_engine import BaseEngine
from utils.error_handling import handle_engine_errors
from utils.exceptions import ReportError
from utils import constants

from .report_builder import ReportDirector, ReportFormat, create_builder


class ReportingEngine(BaseEngine):
    """
    Renders one report in several formats via the builder/director pair
    and writes each rendering to the engine's output directory.
    """

    def __init__(self, config: dict, logger: logging.Logger):
        super().__init__(config, logger)
        self.director = ReportDirector()

    def _get_engine_directory_name(self) -> str:
        return constants.REPORTS_DIR

    def render(self, fmt: Union[str, ReportFormat], header: str, content: str, footer: str) -> str:
        """Build and render a single report without touching disk."""
        builder = create_builder(fmt)
        self.director.construct_report(builder, header, content, footer)
        return builder.get_report().render()

    @handle_engine_errors("Report generation", wrap_as=ReportError)
    def execute(self,
                header: str,
                content: str,
                footer: str,
                formats: Iterable[Union[str, ReportFormat]] = (ReportFormat.TEXT, ReportFormat.HTML)
                ) -> Dict[str, Path]:
        """
        Render the report once per format and save it.

        Returns:
            Mapping of format name ('TEXT', 'HTML') to the written file path.
        """
        written: Dict[str, Path] = {}
        for fmt in formats:
            fmt = ReportFormat.parse(fmt)
            rendered = self.render(fmt, header, content, footer)

            path = self.output_dir / constants.REPORT_FILE_NAMES[fmt.value]
            path.write_text(rendered, encoding='utf-8')
            self.logger.info(f"Generated {fmt.value} report: {path}")
            written[fmt.value] = path
        return written
