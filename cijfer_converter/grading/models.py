"""Value objects for grade calculation."""

import math
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any

from ..config import DEFAULT_CONFIG, ROUNDING_OPTIONS
from .exceptions import ConfigurationError


class GradingMethod(str, Enum):
    """Formula used to turn points into a grade."""

    N_TERM = "n-term"
    PERCENTAGE = "percentage"
    FOUTEN = "fouten"
    GOED = "goed"
    FIXED_CUTOFF = "fixed-cutoff"

    @classmethod
    def parse(cls, value: Any) -> "GradingMethod":
        """Return the method for *value*, raising ConfigurationError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown grading method: {value!r} (expected one of: {known})",
                field="method",
                value=value,
            ) from None


# Python attribute name -> persisted camelCase key
_PERSISTED_KEYS = {
    "total_points": "totalPoints",
    "voldoende": "voldoende",
    "method": "method",
    "n_term": "nTerm",
    "pass_percentage": "passPercentage",
    "fouten_k_factor": "foutenKFactor",
    "goed_k_factor": "goedKFactor",
    "fixed_cutoff": "fixedCutoff",
    "rounding": "rounding",
}


@dataclass(frozen=True)
class GradingConfiguration:
    """Snapshot of every grading setting.

    All five methods' parameters are always present. Only the ones belonging
    to ``method`` influence the grade; the others are kept so a front end can
    remember their values while another method is active.
    """

    total_points: float = DEFAULT_CONFIG["totalPoints"]
    voldoende: float = DEFAULT_CONFIG["voldoende"]
    method: GradingMethod = GradingMethod(DEFAULT_CONFIG["method"])
    n_term: float = DEFAULT_CONFIG["nTerm"]
    pass_percentage: float = DEFAULT_CONFIG["passPercentage"]
    fouten_k_factor: float = DEFAULT_CONFIG["foutenKFactor"]
    goed_k_factor: float = DEFAULT_CONFIG["goedKFactor"]
    fixed_cutoff: float = DEFAULT_CONFIG["fixedCutoff"]
    rounding: float = DEFAULT_CONFIG["rounding"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", GradingMethod.parse(self.method))

    @classmethod
    def from_dict(cls, data: Any) -> "GradingConfiguration":
        """
        Build a configuration from a persisted blob.

        Args:
            data: Dict with the camelCase keys of the persisted format.

        Returns:
            The parsed configuration.

        Raises:
            ConfigurationError: If the blob is not a dict, a key is missing,
                a value has the wrong type, or the rounding is not allowed.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be an object, got {type(data).__name__}"
            )

        values = {}
        for attr, key in _PERSISTED_KEYS.items():
            if key not in data:
                raise ConfigurationError(f"Missing configuration field: {key}", field=key)
            value = data[key]
            if attr == "method":
                values[attr] = GradingMethod.parse(value)
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"Configuration field {key} must be a number, got {value!r}",
                    field=key,
                    value=value,
                )
            if not math.isfinite(value):
                raise ConfigurationError(
                    f"Configuration field {key} must be finite, got {value!r}",
                    field=key,
                    value=value,
                )
            values[attr] = value

        if values["rounding"] not in ROUNDING_OPTIONS:
            raise ConfigurationError(
                f"Rounding must be one of {ROUNDING_OPTIONS}, got {values['rounding']!r}",
                field="rounding",
                value=values["rounding"],
            )

        return cls(**values)

    def to_dict(self) -> dict:
        """Return the persisted (JSON-serializable) form."""
        data = {}
        for attr, value in asdict(self).items():
            if attr == "method":
                value = self.method.value
            data[_PERSISTED_KEYS[attr]] = value
        return data

    def with_changes(self, **changes: Any) -> "GradingConfiguration":
        """Return a copy with the given fields replaced."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration field(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **changes)


@dataclass(frozen=True)
class GradeResult:
    """One row of the grade table."""

    score: float
    mistakes: float
    raw_grade: float
    rounded_grade: float
    is_passing: bool


@dataclass(frozen=True)
class ChartPoint:
    """One sample of the grade curve, rounded for display."""

    score: float
    grade: float


@dataclass(frozen=True)
class GradeSummary:
    """Pass/fail counts over a grade table."""

    total: int
    passing: int
    failing: int
