import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Mapping

from colorama import Fore, Style, just_fix_windows_console

from utils import constants

just_fix_windows_console()

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _as_bool(value, default: bool) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in _TRUE_VALUES


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""
    COLORS = {
        'DEBUG': Fore.WHITE + Style.DIM,
        'INFO': Fore.CYAN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT
    }
    RESET = Style.RESET_ALL

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class LoggingConfigurator:
    """
    Configures system-wide logging from flat ``log.*`` settings.

    Accepts any string mapping, typically ``ConfigurationManager.snapshot()``.
    """

    def __init__(self, settings: Mapping[str, str]):
        self.settings = dict(settings)
        level_name = self.settings.get(constants.LOG_LEVEL_KEY, 'INFO').upper()
        self.log_level = getattr(logging, level_name, logging.INFO)
        self.log_dir = Path(self.settings.get(constants.LOG_DIR_KEY, constants.DEFAULT_LOG_DIR))

    def setup(self) -> None:
        """Setup root logger with console and UTF-8 file handlers."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        if _as_bool(self.settings.get(constants.LOG_TO_CONSOLE_KEY), True):
            if sys.platform == 'win32':
                sys.stdout.reconfigure(encoding='utf-8')

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.log_level)

            fmt = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
            if _as_bool(self.settings.get(constants.LOG_COLORFUL_CONSOLE_KEY), True):
                formatter = ColoredFormatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')
            else:
                formatter = logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')

            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if _as_bool(self.settings.get(constants.LOG_TO_FILE_KEY), True):
            self._add_file_handler(root_logger, constants.LOG_FILE_NAME)

    def _add_file_handler(self, logger: logging.Logger, filename: str):
        self.log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=constants.LOG_MAX_BYTES,
            backupCount=constants.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter('[%(asctime)s] [%(levelname)s] [%(name)s] [%(funcName)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)
