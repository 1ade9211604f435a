"""Tests for grade table and chart series generation."""

import pytest

from cijfer_converter.grading import (
    generate_chart_series,
    generate_grade_table,
    summarize_table,
    table_to_delimited_text,
)


class TestGenerateGradeTable:
    """Tests for generate_grade_table function."""

    def test_integer_total_row_count(self, make_config):
        """50 points gives 51 rows with step 1."""
        results = generate_grade_table(make_config(total_points=50))
        assert len(results) == 51

    def test_fractional_total_row_count(self, make_config):
        """27.5 points gives 56 rows with step 0.5."""
        results = generate_grade_table(make_config(total_points=27.5))
        assert len(results) == 56

    def test_descending_scores(self, make_config):
        """Rows run from total points down to zero."""
        results = generate_grade_table(make_config(total_points=27.5))
        assert [r.score for r in results[:3]] == [27.5, 27.0, 26.5]
        assert results[-1].score == 0
        assert results[-2].score == 0.5

    def test_integer_total_scores(self, make_config):
        """Whole totals step by whole points."""
        results = generate_grade_table(make_config(total_points=27))
        assert [r.score for r in results[:3]] == [27, 26, 25]
        assert results[-1].score == 0

    def test_mistakes_complement_score(self, default_config):
        """Mistakes are total minus score."""
        for r in generate_grade_table(default_config):
            assert r.score + r.mistakes == default_config.total_points

    def test_rounded_grade_uses_rounding(self, make_config):
        """Rounded grades are multiples of the rounding setting."""
        results = generate_grade_table(make_config(rounding=0.5))
        for r in results:
            assert (r.rounded_grade * 2) == int(r.rounded_grade * 2)

    def test_passing_compares_rounded_grade(self, default_config):
        """25 points (5.5) passes, 24 points (5.3) fails."""
        by_score = {r.score: r for r in generate_grade_table(default_config)}
        assert by_score[25].is_passing is True
        assert by_score[24].is_passing is False

    def test_idempotent(self, default_config):
        """Two calls with the same configuration give identical rows."""
        assert generate_grade_table(default_config) == generate_grade_table(default_config)

    def test_zero_total(self, make_config):
        """Zero total gives a single row."""
        results = generate_grade_table(make_config(total_points=0))
        assert len(results) == 1
        assert results[0].score == 0


class TestSummarizeTable:
    """Tests for summarize_table function."""

    def test_default_counts(self, default_config):
        """Default n-term table has 26 passing and 25 failing rows."""
        summary = summarize_table(generate_grade_table(default_config))
        assert summary.total == 51
        assert summary.passing == 26
        assert summary.failing == 25

    def test_empty_table(self):
        """Empty table has zero counts."""
        summary = summarize_table([])
        assert summary.total == 0
        assert summary.passing == 0


class TestGenerateChartSeries:
    """Tests for generate_chart_series function."""

    def test_minimum_sample_count(self, make_config):
        """Small totals are sampled 101 times."""
        assert len(generate_chart_series(make_config(total_points=20))) == 101

    def test_sample_count_scales_with_total(self, make_config):
        """80 points gives 2 * 80 + 1 samples."""
        assert len(generate_chart_series(make_config(total_points=80))) == 161

    def test_endpoints(self, default_config):
        """Series runs from (0, 1) to (total, 10)."""
        points = generate_chart_series(default_config)
        assert points[0].score == 0
        assert points[0].grade == 1.0
        assert points[-1].score == 50
        assert points[-1].grade == 10.0

    def test_ascending(self, make_config):
        """Scores increase along the series."""
        points = generate_chart_series(make_config(total_points=33))
        scores = [p.score for p in points]
        assert scores == sorted(scores)

    def test_two_decimal_rounding(self, make_config):
        """Both coordinates are rounded to two decimals."""
        points = generate_chart_series(make_config(total_points=33, method="percentage"))
        assert points[1].score == pytest.approx(0.33)
        for p in points:
            assert round(p.score, 2) == p.score
            assert round(p.grade, 2) == p.grade

    def test_independent_of_rounding_setting(self, make_config):
        """The series ignores the table rounding setting."""
        coarse = generate_chart_series(make_config(rounding=1))
        fine = generate_chart_series(make_config(rounding=0.01))
        assert coarse == fine


class TestTableToDelimitedText:
    """Tests for table_to_delimited_text function."""

    def test_header_and_rows(self, make_config):
        """Header followed by one tab-separated row per score."""
        config = make_config(total_points=2, method="n-term", n_term=1.0, rounding=0.1)
        text = table_to_delimited_text(generate_grade_table(config), config)
        assert text == "Punten\tFouten\tCijfer\n2\t0\t10.0\n1\t1\t5.5\n0\t2\t1.0"

    def test_whole_rounding_has_no_decimals(self, make_config):
        """Rounding 1 shows whole grades."""
        config = make_config(total_points=2, rounding=1)
        lines = table_to_delimited_text(generate_grade_table(config), config).split("\n")
        assert lines[2] == "1\t1\t6"

    def test_hundredth_rounding_has_two_decimals(self, make_config):
        """Rounding 0.01 shows two decimals."""
        config = make_config(total_points=2, rounding=0.01)
        lines = table_to_delimited_text(generate_grade_table(config), config).split("\n")
        assert lines[2] == "1\t1\t5.50"

    def test_half_points_rendered(self, make_config):
        """Fractional scores keep their decimals."""
        config = make_config(total_points=1.5)
        lines = table_to_delimited_text(generate_grade_table(config), config).split("\n")
        assert len(lines) == 5
        assert lines[1].startswith("1.5\t0\t")
        assert lines[2].startswith("1\t0.5\t")

    def test_fractional_total_has_clean_points(self, make_config):
        """Half-point steps from 27.3 print without float noise."""
        config = make_config(total_points=27.3)
        lines = table_to_delimited_text(generate_grade_table(config), config).split("\n")
        assert len(lines) == 56
        assert lines[1].startswith("27.3\t0\t")
        assert lines[-1].startswith("0.3\t27\t")


    def test_no_trailing_newline(self, default_config):
        """Output does not end with a newline."""
        text = table_to_delimited_text(generate_grade_table(default_config), default_config)
        assert not text.endswith("\n")
