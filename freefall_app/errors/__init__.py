"""
Error classification for the freefall stopwatch.

Separates recoverable data quality problems (malformed persisted history)
from system failures (storage and configuration) and caller contract
violations (history index out of range).
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    HistoryIndexError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "HistoryIndexError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "ConfigurationError",
]
