"""
Application Configuration - Central configuration management.

Provides configuration for the analysis engine: environment, logging and the
analysis thresholds, each loadable from environment variables.
"""

import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from perf_insight.domain.exceptions import ConfigurationError
from perf_insight.domain.value_objects.thresholds import AnalysisThresholds

THRESHOLD_ENV_PREFIX = "PERF_THRESHOLD_"

# Thresholds expressed as fractions rather than absolute values
RATIO_THRESHOLDS = ("heap_usage_ratio", "cache_hit_rate_min")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"


def _parse_number(setting: str, raw: str, as_type: type) -> Any:
    try:
        return as_type(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid value for {setting}: {raw!r}", setting, raw)


def thresholds_with_overrides(
    base: AnalysisThresholds, overrides: dict[str, Any]
) -> AnalysisThresholds:
    """Return base with the given threshold fields replaced, coercing to each field's type."""
    known = {f.name: f for f in fields(AnalysisThresholds)}
    changes = {}

    for name, value in overrides.items():
        if name not in known:
            raise ConfigurationError(f"Unknown threshold: {name}", name, value)
        as_type = int if known[name].type in (int, "int") else float
        changes[name] = _parse_number(name, str(value), as_type)

    return replace(base, **changes)


def thresholds_from_env() -> AnalysisThresholds:
    """Create thresholds from PERF_THRESHOLD_<NAME> environment variables."""
    overrides = {}
    for name in AnalysisThresholds.field_names():
        raw = os.getenv(f"{THRESHOLD_ENV_PREFIX}{name.upper()}")
        if raw is not None:
            overrides[name] = raw
    return thresholds_with_overrides(AnalysisThresholds(), overrides)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format_type: str = "text"
    file: str | None = None
    enable_sampling: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables."""
        file_path = os.getenv("PERF_LOG_FILE")
        return cls(
            level=os.getenv("PERF_LOG_LEVEL", "INFO"),
            format_type=os.getenv("PERF_LOG_FORMAT", "text"),
            file=file_path if file_path else None,
            enable_sampling=os.getenv("PERF_LOG_SAMPLING", "false").lower() == "true",
        )


@dataclass
class EngineConfig:
    """Main engine configuration."""

    environment: Environment = Environment.DEVELOPMENT
    thresholds: AnalysisThresholds = field(default_factory=AnalysisThresholds)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    session_prefix: str = "perf"

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "session_prefix": self.session_prefix,
            "thresholds": {
                name: getattr(self.thresholds, name) for name in AnalysisThresholds.field_names()
            },
            "logging": {
                "level": self.logging.level,
                "format_type": self.logging.format_type,
                "file": self.logging.file,
                "enable_sampling": self.logging.enable_sampling,
            },
        }

    def validate(self) -> bool:
        """
        Validate the configuration.

        Returns:
            True if valid, raises ConfigurationError otherwise
        """
        for name in AnalysisThresholds.field_names():
            value = getattr(self.thresholds, name)
            if value < 0:
                raise ConfigurationError(f"Threshold {name} must be non-negative", name, value)
            if name in RATIO_THRESHOLDS and value > 1:
                raise ConfigurationError(f"Threshold {name} must be between 0 and 1", name, value)

        if self.logging.format_type not in ("json", "text"):
            raise ConfigurationError(
                "Log format must be 'json' or 'text'", "format_type", self.logging.format_type
            )

        if not self.session_prefix:
            raise ConfigurationError("Session prefix must not be empty", "session_prefix")

        return True
