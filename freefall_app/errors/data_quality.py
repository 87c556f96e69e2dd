"""
Data quality error classifications for measurement history.

These exceptions describe problems with history data itself, either as
read back from storage or as addressed by a caller.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """Persisted data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class HistoryIndexError(DataQualityError, IndexError):
    """History position outside ``0 <= index < length``."""

    def __init__(self, message: str, index: Optional[int] = None,
                 length: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.length = length
        self.recoverable = False
