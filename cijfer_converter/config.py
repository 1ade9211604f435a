"""Configuration constants for Cijfer Converter."""

from pathlib import Path

# Grade scale
GRADE_MIN = 1.0
GRADE_MAX = 10.0

# Default grading configuration (persisted keys)
DEFAULT_CONFIG = {
    "totalPoints": 50,
    "voldoende": 5.5,
    "method": "n-term",
    "nTerm": 1.0,
    "passPercentage": 55,
    "foutenKFactor": 5,
    "goedKFactor": 5,
    "fixedCutoff": 27,
    "rounding": 0.1,
}

# Allowed rounding granularities for the rounded grade
ROUNDING_OPTIONS = (1, 0.5, 0.1, 0.01)

# Table enumeration steps
WHOLE_POINT_STEP = 1
HALF_POINT_STEP = 0.5

# Chart sampling
CHART_MIN_STEPS = 100
CHART_DECIMALS = 2

# Method display names (Dutch, as shown to teachers)
METHOD_DISPLAY_NAMES = {
    "n-term": "N-term",
    "percentage": "Cesuur %",
    "fouten": "Fouten per punt",
    "goed": "Goed per punt",
    "fixed-cutoff": "Punten Cesuur",
}

METHOD_DESCRIPTIONS = {
    "n-term": "Cijfer = 9 × (Score / Totaal) + N",
    "percentage": "Lineaire schaal met cesuur percentage",
    "fouten": "Cijfer = 10 - (Fouten / K)",
    "goed": "Cijfer = 1 + (Score / K)",
    "fixed-cutoff": "Lineaire schaal met vast puntenaantal voor voldoende",
}

# Delimited export
EXPORT_HEADER = ("Punten", "Fouten", "Cijfer")

# Persistence
CONFIG_DIR = Path.home() / ".cijfer-calculator"
CONFIG_DIR_ENVVAR = "CIJFERS_CONFIG_DIR"
STORAGE_KEY = "cijfer-calculator-config"
