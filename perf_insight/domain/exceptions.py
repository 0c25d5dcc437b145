"""
Domain-level exceptions for the performance analysis engine.

The engine degrades silently on missing or odd data; these exceptions cover
the few cases where continuing would hand the caller a misleading result.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ScenarioNotFoundError(DomainException):
    """
    Raised when a report is requested for a scenario with no recorded metrics.

    An empty report would read as "no problems found", so the engine refuses
    to build one.
    """

    def __init__(self, scenario: str, known_scenarios: list[str] | None = None) -> None:
        super().__init__(
            f"No metrics found for scenario: {scenario}",
            details={
                "scenario": scenario,
                "known_scenarios": list(known_scenarios or []),
            },
        )
        self.scenario = scenario


class ConfigurationError(DomainException):
    """Raised when engine configuration cannot be parsed or is out of range."""

    def __init__(self, message: str, setting: str | None = None, value: Any = None) -> None:
        details = {}
        if setting:
            details["setting"] = setting
        if value is not None:
            details["value"] = value

        super().__init__(message, details)
        self.setting = setting
        self.value = value
