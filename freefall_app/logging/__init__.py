"""
Logging configuration and utilities for the freefall stopwatch.
"""
from .config import (
    configure_logging, configure_logging_from_params, get_logger, get_state_logger,
    log_state_transition
)

__all__ = [
    "configure_logging", "configure_logging_from_params", "get_logger",
    "get_state_logger", "log_state_transition"
]
