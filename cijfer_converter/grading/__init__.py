"""Grade calculation modules."""

from .calculator import (
    compute_grade,
    format_grade,
    generate_chart_series,
    generate_grade_table,
    get_method_description,
    get_method_display_name,
    lookup_grade,
    round_to_nearest,
    summarize_table,
    table_to_delimited_text,
)
from .exceptions import ConfigurationError, GradingError, InvalidScoreError
from .models import ChartPoint, GradeResult, GradeSummary, GradingConfiguration, GradingMethod

__all__ = [
    "compute_grade",
    "format_grade",
    "generate_chart_series",
    "generate_grade_table",
    "get_method_description",
    "get_method_display_name",
    "lookup_grade",
    "round_to_nearest",
    "summarize_table",
    "table_to_delimited_text",
    "ConfigurationError",
    "GradingError",
    "InvalidScoreError",
    "ChartPoint",
    "GradeResult",
    "GradeSummary",
    "GradingConfiguration",
    "GradingMethod",
]
