import os
import sys
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, TextIO, Tuple

from utils.exceptions import ConfigSourceMissing, ConfigIOError, ConfigNotFound
from utils import constants


class LookupKind(Enum):
    FOUND = "found"
    MISSING = "missing"


class LookupResult(NamedTuple):
    """Outcome of a non-raising key probe."""
    key: str
    value: Optional[str]
    kind: LookupKind

    @property
    def found(self) -> bool:
        return self.kind is LookupKind.FOUND


def parse_settings(lines: Iterable[str]) -> Tuple[Dict[str, str], List[int]]:
    """
    Parse ``key=value`` lines.

    Blank lines and ``#`` comments are skipped. Only the first ``=`` splits,
    so values may contain ``=``. Lines without a separator are ignored.

    Returns:
        Tuple of (parsed settings, 1-based numbers of ignored malformed lines).
    """
    settings: Dict[str, str] = {}
    malformed: List[int] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(constants.CONFIG_COMMENT_PREFIX):
            continue
        key, sep, value = line.partition(constants.CONFIG_SEPARATOR)
        if not sep:
            malformed.append(lineno)
            continue
        settings[key.strip()] = value.strip()
    return settings, malformed


class ConfigurationManager:
    """
    Process-wide key/value settings store.

    Use ``get_instance()`` for the shared handle; direct construction gives an
    independent store (composition roots and tests).

    - Loaded at most once from a backing text file (``load_once``).
    - Mutable afterwards and persistable (``save``).
    - Every operation runs under a single instance lock.
    """

    _instance: Optional["ConfigurationManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self._settings: Dict[str, str] = {}
        self._loaded = False
        self._lock = threading.Lock()
        self.logger = logging.getLogger("config_manager")

    @classmethod
    def get_instance(cls) -> "ConfigurationManager":
        """Return the shared store, constructing it exactly once under races."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def loaded(self) -> bool:
        with self._lock:
            return self._loaded

    def load_once(self, path) -> None:
        """
        Populate the store from ``path`` unless a load already succeeded.

        Raises:
            ConfigSourceMissing: If ``path`` does not exist.
            ConfigIOError: If the file exists but cannot be read.
        """
        with self._lock:
            if self._loaded:
                self.logger.debug(f"Configuration already loaded; skipping {path}")
                return

            if not os.path.exists(path):
                raise ConfigSourceMissing(path)

            try:
                with open(path, 'r', encoding=constants.CONFIG_ENCODING) as f:
                    parsed, malformed = parse_settings(f)
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigIOError(path, e) from e

            for lineno in malformed:
                self.logger.debug(f"Ignoring line {lineno} without '=' in {path}")

            self._settings.update(parsed)
            self._loaded = True
            self.logger.info(f"Loaded {len(parsed)} settings from {path}")

    def save(self, path) -> None:
        """
        Write all settings to ``path`` as ``key=value`` lines, overwriting it.

        Raises:
            ConfigIOError: If the file cannot be written.
        """
        with self._lock:
            lines = [f"{k}{constants.CONFIG_SEPARATOR}{v}\n" for k, v in sorted(self._settings.items())]
            try:
                Path(path).parent.mkdir(parents=True, exist_ok=True)
                with open(path, 'w', encoding=constants.CONFIG_ENCODING) as f:
                    f.writelines(lines)
            except OSError as e:
                raise ConfigIOError(path, e) from e
            self.logger.info(f"Saved {len(lines)} settings to {path}")

    def get(self, key: str) -> str:
        with self._lock:
            if key not in self._settings:
                raise ConfigNotFound(key)
            return self._settings[key]

    def get_or_default(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._settings.get(key, default)

    def lookup(self, key: str) -> LookupResult:
        """Probe ``key`` without raising; distinguishes absence from failure."""
        with self._lock:
            if key in self._settings:
                return LookupResult(key, self._settings[key], LookupKind.FOUND)
            return LookupResult(key, None, LookupKind.MISSING)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._settings[key] = value

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._settings)

    def dump_all(self, stream: Optional[TextIO] = None) -> str:
        """Write a human-readable listing of every setting and return it."""
        with self._lock:
            lines = [constants.CONFIG_DUMP_HEADER]
            lines.extend(f"{k} = {v}" for k, v in sorted(self._settings.items()))
            listing = "\n".join(lines) + "\n"
            (stream or sys.stdout).write(listing)
        return listing


def get_configuration_manager() -> ConfigurationManager:
    """Shared configuration store for this process."""
    return ConfigurationManager.get_instance()
