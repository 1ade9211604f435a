"""Grade calculation logic."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from ..config import (
    CHART_DECIMALS,
    CHART_MIN_STEPS,
    EXPORT_HEADER,
    GRADE_MAX,
    GRADE_MIN,
    HALF_POINT_STEP,
    METHOD_DESCRIPTIONS,
    METHOD_DISPLAY_NAMES,
    WHOLE_POINT_STEP,
)
from .exceptions import ConfigurationError, InvalidScoreError
from .models import ChartPoint, GradeResult, GradeSummary, GradingConfiguration, GradingMethod

logger = logging.getLogger(__name__)

# Strips float noise such as 5.4000000000000004 after scaling back
_CLEAN_DECIMALS = 10


def _divide(numerator: float, denominator: float) -> float:
    """Divide, mapping x/0 to a signed infinity and 0/0 to 0."""
    if denominator == 0:
        if numerator == 0:
            return 0.0
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _interpolate(score: float, total: float, breakpoint: float, voldoende: float) -> float:
    """Piecewise-linear curve through (0, 1), (breakpoint, voldoende), (total, 10)."""
    if score <= breakpoint:
        if breakpoint == 0:
            return voldoende
        return GRADE_MIN + (voldoende - GRADE_MIN) * score / breakpoint

    remaining = total - breakpoint
    if remaining == 0:
        return GRADE_MAX
    return voldoende + (GRADE_MAX - voldoende) * (score - breakpoint) / remaining


def _n_term(score: float, config: GradingConfiguration) -> float:
    # 9 * (score / total) + N
    return 9 * _divide(score, config.total_points) + config.n_term


def _percentage(score: float, config: GradingConfiguration) -> float:
    # Multiply first: 55 * 50 / 100 is exactly 27.5, 0.55 * 50 is not
    pass_points = config.pass_percentage * config.total_points / 100
    return _interpolate(score, config.total_points, pass_points, config.voldoende)


def _fouten(score: float, config: GradingConfiguration) -> float:
    mistakes = config.total_points - score
    return 10 - _divide(mistakes, config.fouten_k_factor)


def _goed(score: float, config: GradingConfiguration) -> float:
    return 1 + _divide(score, config.goed_k_factor)


def _fixed_cutoff(score: float, config: GradingConfiguration) -> float:
    return _interpolate(score, config.total_points, config.fixed_cutoff, config.voldoende)


FORMULAS = {
    GradingMethod.N_TERM: _n_term,
    GradingMethod.PERCENTAGE: _percentage,
    GradingMethod.FOUTEN: _fouten,
    GradingMethod.GOED: _goed,
    GradingMethod.FIXED_CUTOFF: _fixed_cutoff,
}


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Force *value* into [minimum, maximum]."""
    return min(max(value, minimum), maximum)


def compute_grade(score: float, config: GradingConfiguration) -> float:
    """
    Convert a raw score to an unrounded grade on the 1-10 scale.

    Args:
        score: Points achieved. Values outside 0..total are allowed and
            extrapolated along the active curve before clamping.
        config: Grading configuration snapshot.

    Returns:
        Raw grade, always within [1.0, 10.0].

    Raises:
        InvalidScoreError: If score is NaN or infinite.
        ConfigurationError: If the configuration's method has no formula.
    """
    if not math.isfinite(score):
        raise InvalidScoreError(score)

    formula = FORMULAS.get(config.method)
    if formula is None:
        raise ConfigurationError(
            f"No formula for grading method {config.method!r}",
            field="method",
            value=config.method,
        )

    raw_grade = formula(score, config)
    return clamp(raw_grade, GRADE_MIN, GRADE_MAX)


def round_to_nearest(value: float, precision: float) -> float:
    """Round *value* to the nearest multiple of *precision*, halves away from zero."""
    if precision == 0:
        return _round_half_away(value)
    steps = _round_half_away(value / precision)
    return round(steps * precision, _CLEAN_DECIMALS)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def lookup_grade(score: float, config: GradingConfiguration) -> GradeResult:
    """Compute the full table row for a single score."""
    raw_grade = compute_grade(score, config)
    rounded_grade = round_to_nearest(raw_grade, config.rounding)
    return GradeResult(
        score=score,
        mistakes=config.total_points - score,
        raw_grade=raw_grade,
        rounded_grade=rounded_grade,
        is_passing=rounded_grade >= config.voldoende,
    )


def table_step(total_points: float) -> float:
    """Half points when the total has a fractional part, whole points otherwise."""
    return HALF_POINT_STEP if total_points % 1 != 0 else WHOLE_POINT_STEP


def generate_grade_table(config: GradingConfiguration) -> list[GradeResult]:
    """
    Build the grade table from total points down to zero.

    Args:
        config: Grading configuration snapshot.

    Returns:
        One GradeResult per score, in descending score order.
    """
    total = config.total_points
    if total < 0:
        return []

    step = table_step(total)
    # Index-based enumeration keeps float error from accumulating across rows
    row_count = math.floor(total / step + 1e-9) + 1
    results = [lookup_grade(total - index * step, config) for index in range(row_count)]

    logger.debug(
        "Generated %d table rows for %s (total=%s, step=%s)",
        len(results), config.method.value, total, step,
    )
    return results


def generate_chart_series(config: GradingConfiguration) -> list[ChartPoint]:
    """
    Sample the grade curve from 0 to total points.

    The sample count grows with the total so large exams still plot smoothly.
    Both coordinates are rounded to two decimals for display; this is
    independent of the configured grade rounding.
    """
    total = config.total_points
    steps = max(CHART_MIN_STEPS, total * 2)
    precision = 10 ** -CHART_DECIMALS

    points = []
    for index in range(math.floor(steps) + 1):
        score = (index / steps) * total
        grade = compute_grade(score, config)
        points.append(
            ChartPoint(
                score=round_to_nearest(score, precision),
                grade=round_to_nearest(grade, precision),
            )
        )
    return points


def summarize_table(results: list[GradeResult]) -> GradeSummary:
    """Count passing and failing rows."""
    passing = sum(1 for r in results if r.is_passing)
    return GradeSummary(total=len(results), passing=passing, failing=len(results) - passing)


def grade_decimals(precision: float) -> int:
    """Number of decimals to show for a grade rounded to *precision*."""
    if precision >= 1:
        return 0
    if precision in (0.5, 0.1):
        return 1
    return 2


def _fixed(value: float, decimals: int) -> str:
    """Fixed-point text with halves rounded up, like round_to_nearest."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:.{decimals}f}"


def format_grade(grade: float, precision: float) -> str:
    """Format a grade with as many decimals as the rounding granularity implies."""
    return _fixed(grade, grade_decimals(precision))


def format_points(value: float) -> str:
    """Render points without a trailing '.0' for whole numbers."""
    value = round(float(value), _CLEAN_DECIMALS)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def table_to_delimited_text(results: list[GradeResult], config: GradingConfiguration) -> str:
    """
    Convert a grade table to tab-separated text for pasting into a spreadsheet.

    Args:
        results: Rows from generate_grade_table.
        config: Configuration whose rounding decides the grade decimals.

    Returns:
        Header plus one line per row, joined with newlines.
    """
    if config.rounding >= 1:
        decimals = 0
    elif config.rounding == 0.01:
        decimals = 2
    else:
        decimals = 1

    lines = ["\t".join(EXPORT_HEADER)]
    for r in results:
        lines.append(
            f"{format_points(r.score)}\t{format_points(r.mistakes)}\t{_fixed(r.rounded_grade, decimals)}"
        )
    return "\n".join(lines)


def get_method_display_name(method: GradingMethod | str) -> str:
    """Get the Dutch display name for a grading method."""
    return METHOD_DISPLAY_NAMES[GradingMethod.parse(method).value]


def get_method_description(method: GradingMethod | str) -> str:
    """Get the formula description for a grading method."""
    return METHOD_DESCRIPTIONS[GradingMethod.parse(method).value]
