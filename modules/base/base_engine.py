import abc
import logging
from pathlib import Path
from typing import Dict, Any
from utils import constants

class BaseEngine(abc.ABC):
    """
    Abstract base class for demo engines that write artifacts.

    Provides common functionality for:
    - Configuration and logger attachment.
    - Output directory management under ``outputs.base_results_dir``.
    """

    def __init__(self, config: Dict[str, Any], logger: logging.Logger):
        self.config = config
        self.logger = logger
        self.base_dir = Path(
            self.config.get('outputs', {}).get('base_results_dir', constants.DEFAULT_RESULTS_DIR)
        )
        self.output_dir = self.base_dir / self._get_engine_directory_name()

        self._setup_directories()

    @abc.abstractmethod
    def _get_engine_directory_name(self) -> str:
        """
        Determines the directory name for the engine's output, e.g. '01_Reports'.
        This should be implemented by subclasses.
        """
        raise NotImplementedError("Subclasses must implement _get_engine_directory_name.")

    def _setup_directories(self):
        """
        Creates the main output directory for the engine.
        """
        if self.config.get('outputs', {}).get('skip_dir_creation', False):
            # Directory creation explicitly disabled (render-only use)
            return

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info(f"Output directory for {self.__class__.__name__}: {self.output_dir}")

    @abc.abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """
        Main execution method for the engine.
        This must be implemented by all subclasses.
        """
        pass
