"""
Structured Logging for the performance analysis engine.

JSON structured logs carrying the analysis session, the scenario being
analyzed, a correlation ID and (when a span is active) OpenTelemetry trace
context. DEBUG output can be sampled, since recording calls log at DEBUG and
instrumentation may record thousands of samples per session.
"""

import json
import logging
import sys
import time
import uuid
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from functools import wraps
from typing import Any

from opentelemetry import trace

# Context variables for correlation tracking
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
session_id_var: ContextVar[str | None] = ContextVar("session_id", default=None)
scenario_var: ContextVar[str | None] = ContextVar("scenario", default=None)

CONTEXT_FIELDS = (
    "correlation_id",
    "session_id",
    "scenario",
    "trace_id",
    "span_id",
    "operation_type",
)

# Attributes every LogRecord carries, plus the ones AnalysisLogRecord adds
STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "correlation_id",
        "session_id",
        "scenario",
        "trace_id",
        "span_id",
        "operation_type",
    }
)


@dataclass
class LogSamplingConfig:
    """Configuration for log sampling."""

    # Operations that are always logged
    critical_operations: set[str] = field(
        default_factory=lambda: {"report_generation", "baseline_update", "error"}
    )

    # Sampling rates by log level
    level_sample_rates: dict[str, float] = field(
        default_factory=lambda: {
            "DEBUG": 0.1,
            "INFO": 1.0,
            "WARNING": 1.0,
            "ERROR": 1.0,
            "CRITICAL": 1.0,
        }
    )


class AnalysisLogRecord(logging.LogRecord):
    """
    Log record enriched with analysis context.

    operation_type is left to `extra`; Logger.makeRecord refuses extra keys
    that already exist on the record.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)

        self.correlation_id = correlation_id_var.get()
        self.session_id = session_id_var.get()
        self.scenario = scenario_var.get()

        # Add tracing context
        span = trace.get_current_span()
        if span.is_recording():
            span_context = span.get_span_context()
            self.trace_id = format(span_context.trace_id, "032x") if span_context.trace_id else None
            self.span_id = format(span_context.span_id, "016x") if span_context.span_id else None
        else:
            self.trace_id = None
            self.span_id = None


class LogSampler:
    """Counter-based sampling of low-severity log records."""

    def __init__(self, config: LogSamplingConfig) -> None:
        self.config = config
        self._counters: dict[str, int] = {}

    def should_log(self, record: logging.LogRecord) -> bool:
        """Determine if a log record should be emitted."""
        operation_type = getattr(record, "operation_type", None) or ""
        if operation_type in self.config.critical_operations:
            return True

        if record.levelno >= logging.WARNING:
            return True

        sample_rate = self.config.level_sample_rates.get(record.levelname, 1.0)
        if sample_rate >= 1.0:
            return True
        if sample_rate <= 0:
            return False

        counter_key = f"{record.levelname}:{operation_type}"
        count = self._counters.get(counter_key, 0) + 1
        self._counters[counter_key] = count

        return (count % int(1 / sample_rate)) == 0


class AnalysisJSONFormatter(logging.Formatter):
    """JSON formatter for structured analysis logs."""

    def __init__(self, include_extra: bool = True, sort_keys: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra
        self.sort_keys = sort_keys

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in CONTEXT_FIELDS:
            value = getattr(record, attr, None)
            if value:
                log_entry[attr] = value

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            extra = {
                key: value
                for key, value in record.__dict__.items()
                if key not in STANDARD_FIELDS and not key.startswith("_")
            }
            if extra:
                log_entry["extra"] = extra

        return json.dumps(log_entry, sort_keys=self.sort_keys, default=self._serialize_value)

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Serialize complex values for JSON output."""
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (set, frozenset, tuple)):
            return list(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)


class AnalysisLogFilter(logging.Filter):
    """Applies sampling to analysis log records."""

    def __init__(self, sampler: LogSampler | None = None) -> None:
        super().__init__()
        self.sampler = sampler

    def filter(self, record: logging.LogRecord) -> bool:
        if self.sampler and not self.sampler.should_log(record):
            return False
        return True


# Correlation ID management
def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    """Get current correlation ID."""
    return correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Context manager for correlation ID scope."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


@contextmanager
def session_context(session_id: str) -> Generator[None, None, None]:
    """Context manager tagging log records with an analysis session."""
    token = session_id_var.set(session_id)
    try:
        yield
    finally:
        session_id_var.reset(token)


@contextmanager
def scenario_context(scenario: str) -> Generator[None, None, None]:
    """Context manager tagging log records with the scenario being analyzed."""
    token = scenario_var.set(scenario)
    try:
        yield
    finally:
        scenario_var.reset(token)


def log_analysis_operation(
    operation_type: str, level: int = logging.DEBUG
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator logging duration and outcome of an analysis operation."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = logging.getLogger(func.__module__)
            extra = {"operation_type": operation_type}

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error(
                    f"Analysis operation {operation_type} failed: {e}",
                    extra={
                        **extra,
                        "duration_ms": duration * 1000,
                        "status": "error",
                        "error_type": type(e).__name__,
                    },
                )
                raise

            duration = time.perf_counter() - start_time
            logger.log(
                level,
                f"Analysis operation {operation_type} completed",
                extra={**extra, "duration_ms": duration * 1000, "status": "success"},
            )
            return result

        return wrapper

    return decorator


def setup_structured_logging(
    level: str = "INFO",
    format_type: str = "json",
    enable_sampling: bool = False,
    sampling_config: LogSamplingConfig | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup structured logging for the analysis engine.

    Args:
        level: Logging level
        format_type: Formatter type ('json' or 'text')
        enable_sampling: Whether to enable DEBUG sampling
        sampling_config: Log sampling configuration
        log_file: Optional log file path
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if format_type == "json":
        formatter = AnalysisJSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    log_filter = None
    if enable_sampling:
        log_filter = AnalysisLogFilter(LogSampler(sampling_config or LogSamplingConfig()))

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        if log_filter:
            handler.addFilter(log_filter)
        root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, level.upper()))

    # Records created from here on carry session/scenario/trace context
    logging.setLogRecordFactory(AnalysisLogRecord)

    logging.getLogger(__name__).info("Structured logging configured")
