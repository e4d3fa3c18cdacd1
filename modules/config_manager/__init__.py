"""
Configuration Manager Module
============================

Responsibility:
- Process-wide key/value settings store, constructed once under concurrent access.
- Single load from a ``key=value`` text file; later loads are no-ops.
- Thread-safe reads, writes and persistence back to text.
"""

from .config_manager import (
    ConfigurationManager,
    LookupKind,
    LookupResult,
    get_configuration_manager,
    parse_settings,
)

__all__ = [
    'ConfigurationManager',
    'LookupKind',
    'LookupResult',
    'get_configuration_manager',
    'parse_settings',
]
