"""
Custom exception hierarchy for the Creational Patterns Demo.
"""

class PatternsDemoException(Exception):
    """Base exception for all system errors."""
    pass

class ConfigurationError(PatternsDemoException):
    """Configuration store operation failed."""
    pass

class ConfigSourceMissing(ConfigurationError):
    """Backing configuration file does not exist."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Configuration file not found: {self.path}")

class ConfigIOError(ConfigurationError):
    """Reading or writing a configuration file failed."""

    def __init__(self, path, cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Configuration I/O failed for {self.path}: {cause}")

class ConfigNotFound(ConfigurationError):
    """Requested setting is absent from the store."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Setting not found: {key}")

class ReportError(PatternsDemoException):
    """Report construction or rendering failed."""
    pass

class OrderError(PatternsDemoException):
    """Order snapshot received invalid values."""
    pass
