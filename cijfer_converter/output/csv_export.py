"""CSV and tab-delimited export for grade tables."""

import csv
from pathlib import Path

from ..grading import GradeResult, GradingConfiguration, format_grade, table_to_delimited_text
from ..grading.calculator import format_points


def export_to_csv(results: list[GradeResult], output_path: str, config: GradingConfiguration) -> None:
    """
    Export a grade table to CSV.

    Args:
        results: Rows from generate_grade_table
        output_path: Path to output CSV file
        config: Configuration whose rounding decides the grade decimals
    """
    if not results:
        return

    fieldnames = ["Punten", "Fouten", "Cijfer", "Voldoende"]

    rows = [_result_to_row(result, config) for result in results]

    path = Path(output_path)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _result_to_row(result: GradeResult, config: GradingConfiguration) -> dict:
    """Convert a grade table row to a CSV row."""
    return {
        "Punten": format_points(result.score),
        "Fouten": format_points(result.mistakes),
        "Cijfer": format_grade(result.rounded_grade, config.rounding),
        "Voldoende": "Ja" if result.is_passing else "Nee",
    }


def export_delimited_text(results: list[GradeResult], output_path: str, config: GradingConfiguration) -> None:
    """Write the tab-separated table to a file."""
    Path(output_path).write_text(
        table_to_delimited_text(results, config) + "\n",
        encoding="utf-8",
    )
