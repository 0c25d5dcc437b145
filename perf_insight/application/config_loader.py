"""
Configuration Loader - Handles IO operations for configuration management.

Loads and saves EngineConfig from/to YAML files and environment variables,
keeping EngineConfig itself focused on data and validation.
"""

import os
from typing import Any

import yaml

from perf_insight.application.config import (
    EngineConfig,
    Environment,
    LoggingConfig,
    thresholds_from_env,
    thresholds_with_overrides,
)
from perf_insight.domain.exceptions import ConfigurationError


def _environment(value: str) -> Environment:
    try:
        return Environment(value)
    except ValueError:
        raise ConfigurationError(f"Invalid environment: {value}", "environment", value)


class ConfigLoader:
    """Handles loading and saving of configuration from various sources."""

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Create configuration from environment variables.

        Returns:
            EngineConfig: Configuration loaded from environment
        """
        return EngineConfig(
            environment=_environment(os.getenv("PERF_ENVIRONMENT", "development")),
            thresholds=thresholds_from_env(),
            logging=LoggingConfig.from_env(),
            session_prefix=os.getenv("PERF_SESSION_PREFIX", "perf"),
        )

    @classmethod
    def from_yaml(cls, path: str) -> EngineConfig:
        """
        Load configuration from YAML file.

        Sections missing from the file keep their defaults.

        Args:
            path: Path to YAML configuration file

        Returns:
            EngineConfig: Configuration loaded from YAML file
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        config = EngineConfig()

        # Handle empty or null YAML files
        if not data:
            return config

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        if "environment" in data:
            config.environment = _environment(data["environment"])

        if "session_prefix" in data:
            config.session_prefix = str(data["session_prefix"])

        if data.get("thresholds"):
            config.thresholds = thresholds_with_overrides(config.thresholds, data["thresholds"])

        if data.get("logging"):
            log_data: dict[str, Any] = data["logging"]
            config.logging = LoggingConfig(
                level=log_data.get("level", config.logging.level),
                format_type=log_data.get("format_type", config.logging.format_type),
                file=log_data.get("file", config.logging.file),
                enable_sampling=log_data.get("enable_sampling", config.logging.enable_sampling),
            )

        return config

    @classmethod
    def to_yaml(cls, config: EngineConfig) -> str:
        """
        Convert configuration to YAML string.

        Args:
            config: EngineConfig instance to convert

        Returns:
            str: YAML representation of the configuration
        """
        return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)

    @classmethod
    def save_to_yaml(cls, config: EngineConfig, path: str) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: EngineConfig instance to save
            path: Path to save the YAML file to
        """
        yaml_content = cls.to_yaml(config)
        with open(path, "w") as f:
            f.write(yaml_content)
