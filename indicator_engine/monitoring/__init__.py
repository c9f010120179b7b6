"""
Monitoring module: structured logging for indicator calculations.
"""

from .logger import (
    TRACE,
    ContextLogger,
    JsonFormatter,
    LogCategory,
    LogFormat,
    TextFormatter,
    get_logger,
    log_trace,
    setup_logging,
    setup_logging_from_settings,
    trace_calculation,
)

__all__ = [
    "TRACE",
    "ContextLogger",
    "JsonFormatter",
    "LogCategory",
    "LogFormat",
    "TextFormatter",
    "get_logger",
    "log_trace",
    "setup_logging",
    "setup_logging_from_settings",
    "trace_calculation",
]
