"""
Structured logging for the indicator engine.

Provides:
- JSON and human-readable log formats
- Contextual metadata (indicator name, correlation IDs)
- Log categories for different components
- TRACE level logging for per-calculation detail
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from indicator_engine.config.settings import EngineSettings


# =============================================================================
# TRACE Level Logging (below DEBUG)
# =============================================================================

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    """Log a message at TRACE level.

    TRACE level is for per-calculation detail such as the inputs and
    effective parameters of every indicator call.
    """
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace  # type: ignore[attr-defined]


class LogCategory(str, Enum):
    """Log categories for different components."""

    SYSTEM = "SYSTEM"
    CALCULATION = "CALCULATION"
    VALIDATION = "VALIDATION"
    REGISTRY = "REGISTRY"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


# Calculation parameters lifted out of extra_data into their own block
CALCULATION_FIELDS = ("length", "source", "multiplier", "bars", "computation_time_ms")


def _split_calculation(
    extra_data: dict[str, Any] | None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    calculation: dict[str, Any] = {}
    rest: dict[str, Any] = {}
    for key, value in (extra_data or {}).items():
        if key in CALCULATION_FIELDS:
            calculation[key] = value
        elif key != "indicator":
            rest[key] = value
    return calculation, rest


class JsonFormatter(logging.Formatter):
    """JSON formatter emitting one object per record.

    Calculation parameters (length, source, multiplier, bars, timing)
    are grouped under ``calculation``; other context stays in
    ``extra_data``.
    """

    def __init__(self, category: LogCategory = LogCategory.SYSTEM) -> None:
        super().__init__()
        self.category = category

    def format(self, record: logging.LogRecord) -> str:
        extra_data = getattr(record, "extra_data", None)
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "category": getattr(record, "category", self.category.value),
            "message": record.getMessage(),
            "logger": record.name,
            "line": record.lineno,
        }

        indicator = getattr(record, "indicator", None) or (extra_data or {}).get("indicator")
        if indicator:
            log_data["indicator"] = indicator
        if getattr(record, "correlation_id", None):
            log_data["correlation_id"] = record.correlation_id

        calculation, rest = _split_calculation(extra_data)
        if calculation:
            log_data["calculation"] = calculation
        if rest:
            log_data["extra_data"] = rest

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line formatter for terminals.

    Renders as ``time [LEVEL] [CATEGORY] [corr] [INDICATOR key=value ...]
    message | extra``.
    """

    def __init__(self, category: LogCategory = LogCategory.SYSTEM) -> None:
        super().__init__()
        self.category = category

    def format(self, record: logging.LogRecord) -> str:
        extra_data = getattr(record, "extra_data", None)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        category = getattr(record, "category", self.category.value)
        width = max(len(c.value) for c in LogCategory)

        parts = [timestamp, f"[{record.levelname:8s}]", f"[{category:{width}s}]"]

        if getattr(record, "correlation_id", None):
            parts.append(f"[{record.correlation_id[:8]}]")

        indicator = getattr(record, "indicator", None) or (extra_data or {}).get("indicator")
        calculation, rest = _split_calculation(extra_data)
        if indicator or calculation:
            fields = [f"{key}={value}" for key, value in calculation.items()]
            parts.append("[" + " ".join(filter(None, [indicator, *fields])) + "]")

        parts.append(record.getMessage())

        if rest:
            parts.append(f"| {rest}")

        message = " ".join(parts)

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter with context support."""

    def __init__(
        self,
        logger: logging.Logger,
        category: LogCategory = LogCategory.SYSTEM,
        correlation_id: str | None = None,
        indicator: str | None = None,
        extra_data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the context logger.

        Args:
            logger: Base logger instance.
            category: Log category.
            correlation_id: Optional correlation ID for tracing one batch run.
            indicator: Optional indicator name attached to every record.
            extra_data: Optional context attached to every record.
        """
        super().__init__(logger, {})
        self.category = category
        self.correlation_id = correlation_id or str(uuid4())
        self.indicator = indicator
        self.extra_data = extra_data or {}

    def process(
        self,
        msg: str,
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        """Attach category, correlation ID and context to the record."""
        extra = kwargs.get("extra", {})
        extra["category"] = self.category.value
        extra["correlation_id"] = self.correlation_id
        if self.indicator and "indicator" not in extra:
            extra["indicator"] = self.indicator
        if self.extra_data:
            extra["extra_data"] = {**self.extra_data, **extra.get("extra_data", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(
        self,
        indicator: str | None = None,
        **extra_data: Any,
    ) -> ContextLogger:
        """Create a new logger with additional context.

        Args:
            indicator: Indicator name.
            **extra_data: Additional context data.

        Returns:
            New ContextLogger sharing this logger's category and correlation ID.
        """
        return ContextLogger(
            self.logger,
            self.category,
            self.correlation_id,
            indicator or self.indicator,
            {**self.extra_data, **extra_data},
        )

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(TRACE, msg, *args, **kwargs)


def setup_logging(
    level: str = "INFO",
    log_format: LogFormat = LogFormat.TEXT,
    log_file: Path | None = None,
) -> None:
    """Set up logging for the application.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json or text).
        log_file: Optional log file path.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    root_logger.handlers.clear()

    if LogFormat(log_format) == LogFormat.JSON:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=30,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging_from_settings(settings: EngineSettings) -> None:
    """Set up logging from the ``logging`` section of the engine settings."""
    setup_logging(
        level=settings.logging.level,
        log_format=LogFormat(settings.logging.format),
        log_file=settings.logging.file_path,
    )


@lru_cache(maxsize=32)
def get_logger(
    name: str,
    category: LogCategory = LogCategory.SYSTEM,
    correlation_id: str | None = None,
) -> ContextLogger:
    """Get a context logger for a component.

    Args:
        name: Logger name.
        category: Log category.
        correlation_id: Optional correlation ID.

    Returns:
        ContextLogger instance.
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(base_logger, category, correlation_id)


# =============================================================================
# TRACE Level Convenience Functions
# =============================================================================


def log_trace(
    category: LogCategory,
    message: str,
    **kwargs: Any,
) -> None:
    """Log a trace-level message.

    Args:
        category: Log category.
        message: Log message.
        **kwargs: Additional context data.
    """
    logger = get_logger(f"indicator_engine.{category.value.lower()}", category)
    logger.log(TRACE, message, extra={"extra_data": kwargs})


def trace_calculation(
    indicator: str,
    length: int | None,
    source: str | None,
    bars: int,
    computation_time_ms: float | None = None,
) -> None:
    """Trace-log one indicator calculation.

    Args:
        indicator: Indicator name.
        length: Effective window length.
        source: Effective source tag.
        bars: Number of input bars.
        computation_time_ms: Optional computation time in milliseconds.
    """
    data: dict[str, Any] = {"length": length, "source": source, "bars": bars}
    if computation_time_ms is not None:
        data["computation_time_ms"] = computation_time_ms
    log_trace(LogCategory.CALCULATION, f"Calculated {indicator}", indicator=indicator, **data)
