"""Tests for CSV and tab-delimited export."""

import csv

import pytest

from cijfer_converter.grading import generate_grade_table
from cijfer_converter.output.csv_export import export_delimited_text, export_to_csv


@pytest.fixture
def small_config(make_config):
    """Two-point n-term configuration."""
    return make_config(total_points=2, rounding=0.1)


class TestExportToCsv:
    """Tests for export_to_csv function."""

    def test_creates_csv_file(self, tmp_path, small_config):
        """CSV file is created at specified path."""
        output_file = tmp_path / "cijfers.csv"
        export_to_csv(generate_grade_table(small_config), str(output_file), small_config)
        assert output_file.exists()

    def test_csv_has_header_row(self, tmp_path, small_config):
        """CSV has the Dutch header row."""
        output_file = tmp_path / "cijfers.csv"
        export_to_csv(generate_grade_table(small_config), str(output_file), small_config)

        with output_file.open("r", encoding="utf-8") as f:
            headers = next(csv.reader(f))
            assert headers == ["Punten", "Fouten", "Cijfer", "Voldoende"]

    def test_csv_rows(self, tmp_path, small_config):
        """Each score becomes one row with formatted grade."""
        output_file = tmp_path / "cijfers.csv"
        export_to_csv(generate_grade_table(small_config), str(output_file), small_config)

        with output_file.open("r", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
            assert len(rows) == 3
            assert rows[1] == {"Punten": "1", "Fouten": "1", "Cijfer": "5.5", "Voldoende": "Ja"}
            assert rows[2]["Voldoende"] == "Nee"

    def test_empty_results_no_file(self, tmp_path, small_config):
        """Empty results list doesn't create file."""
        output_file = tmp_path / "cijfers.csv"
        export_to_csv([], str(output_file), small_config)
        assert not output_file.exists()


class TestExportDelimitedText:
    """Tests for export_delimited_text function."""

    def test_writes_tab_separated_file(self, tmp_path, small_config):
        """File holds the tab-separated table."""
        output_file = tmp_path / "cijfers.tsv"
        export_delimited_text(generate_grade_table(small_config), str(output_file), small_config)

        lines = output_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Punten\tFouten\tCijfer"
        assert lines[1] == "2\t0\t10.0"
        assert len(lines) == 4
