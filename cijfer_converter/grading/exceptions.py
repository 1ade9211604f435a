"""Exceptions raised by the grading engine."""

from typing import Any


class GradingError(Exception):
    """Base exception for grading errors."""

    pass


class ConfigurationError(GradingError):
    """Invalid grading configuration.

    Raised when:
    - The grading method is not one of the known methods
    - A persisted configuration blob is missing fields or has mistyped values
    - The rounding granularity is not one of the allowed options

    Attributes:
        field: Name of the offending configuration field (if known).
        value: The rejected value (if known).
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidScoreError(GradingError):
    """Score is not a finite number."""

    def __init__(self, score: float) -> None:
        super().__init__(f"Score must be a finite number, got {score!r}")
        self.score = score
