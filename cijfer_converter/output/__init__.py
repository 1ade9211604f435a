"""Output formatting modules."""

from .formatters import (
    format_chart,
    format_config,
    format_json,
    format_lookup,
    format_methods,
    format_table,
    render_chart,
)
from .csv_export import export_to_csv, export_delimited_text

__all__ = [
    "format_chart",
    "format_config",
    "format_json",
    "format_lookup",
    "format_methods",
    "format_table",
    "render_chart",
    "export_to_csv",
    "export_delimited_text",
]
