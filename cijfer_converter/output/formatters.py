"""Output formatters for grade tables, lookups and curves."""

import json
from dataclasses import asdict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import GRADE_MAX, GRADE_MIN, METHOD_DESCRIPTIONS, METHOD_DISPLAY_NAMES
from ..grading import (
    ChartPoint,
    GradeResult,
    GradingConfiguration,
    GradingMethod,
    format_grade,
    get_method_description,
    get_method_display_name,
    summarize_table,
)
from ..grading.calculator import format_points

# Fields that belong to each method's live parameter set
METHOD_FIELDS = {
    GradingMethod.N_TERM: ("n_term",),
    GradingMethod.PERCENTAGE: ("pass_percentage", "voldoende"),
    GradingMethod.FOUTEN: ("fouten_k_factor",),
    GradingMethod.GOED: ("goed_k_factor",),
    GradingMethod.FIXED_CUTOFF: ("fixed_cutoff", "voldoende"),
}

FIELD_LABELS = {
    "total_points": "Totaal punten",
    "voldoende": "Voldoende",
    "method": "Methode",
    "n_term": "N-term",
    "pass_percentage": "Cesuur %",
    "fouten_k_factor": "K (fouten)",
    "goed_k_factor": "K (goed)",
    "fixed_cutoff": "Cesuur (punten)",
    "rounding": "Afronding",
}


def _passing_display(is_passing: bool) -> str:
    """Convert pass flag to colored display string."""
    if is_passing:
        return "[green]Voldoende[/green]"
    return "[red]Onvoldoende[/red]"


def _header(config: GradingConfiguration) -> str:
    return (
        f"Methode: {get_method_display_name(config.method)}  |  "
        f"Totaal: {format_points(config.total_points)} punten  |  "
        f"Voldoende: {format_points(config.voldoende)}"
    )


def format_table(results: list[GradeResult], config: GradingConfiguration, console: Console) -> None:
    """Format and print a grade table as a rich table."""
    summary = summarize_table(results)

    header = Text()
    header.append(f"{_header(config)}\n", style="bold cyan")
    header.append(
        f"{summary.total} scores • {summary.passing} voldoende • {summary.failing} onvoldoende"
    )
    console.print(Panel(header, title="[bold]Cijfertabel[/bold]", border_style="cyan"))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Punten", justify="right")
    table.add_column("Fouten", justify="right")
    table.add_column("Cijfer", justify="right")

    for r in results:
        color = "green" if r.is_passing else "red"
        table.add_row(
            format_points(r.score),
            format_points(r.mistakes),
            f"[{color}]{format_grade(r.rounded_grade, config.rounding)}[/{color}]",
        )

    console.print(table)


def format_lookup(result: GradeResult, config: GradingConfiguration, console: Console) -> None:
    """Format and print a single-score lookup."""
    details = Table(show_header=False, box=None, padding=(0, 2))
    details.add_column("Key", style="dim")
    details.add_column("Value")

    details.add_row("Punten", format_points(result.score))
    details.add_row("Fouten", format_points(result.mistakes))
    details.add_row("Cijfer", f"[bold]{format_grade(result.rounded_grade, config.rounding)}[/bold]")
    details.add_row("Exact", f"{result.raw_grade:.3f}")
    details.add_row("Resultaat", _passing_display(result.is_passing))

    border = "green" if result.is_passing else "red"
    console.print(Panel(details, title=f"[bold]{_header(config)}[/bold]", border_style=border))


def render_chart(
    points: list[ChartPoint],
    config: GradingConfiguration,
    width: int = 60,
    height: int = 18,
) -> str:
    """
    Render the grade curve as a character plot.

    Rows run from 10 (top) to 1 (bottom); the voldoende level is drawn as a
    dashed line underneath the curve.
    """
    width = max(width, 2)
    height = max(height, 2)
    grid = [[" "] * width for _ in range(height)]

    def row_for(grade: float) -> int:
        fraction = (grade - GRADE_MIN) / (GRADE_MAX - GRADE_MIN)
        return height - 1 - round(fraction * (height - 1))

    pass_row = row_for(min(max(config.voldoende, GRADE_MIN), GRADE_MAX))
    grid[pass_row] = ["-"] * width

    if points:
        for column in range(width):
            index = round(column / (width - 1) * (len(points) - 1))
            grid[row_for(points[index].grade)][column] = "*"

    lines = []
    for index, row in enumerate(grid):
        if index == 0:
            label = f"{GRADE_MAX:>4g} |"
        elif index == height - 1:
            label = f"{GRADE_MIN:>4g} |"
        elif index == pass_row:
            label = f"{config.voldoende:>4g} |"
        else:
            label = "     |"
        lines.append(label + "".join(row))

    last_score = points[-1].score if points else config.total_points
    axis = "     +" + "-" * width
    scale = "      0" + f"{format_points(last_score)}".rjust(width - 1)
    lines.extend([axis, scale])
    return "\n".join(lines)


def format_chart(
    points: list[ChartPoint],
    config: GradingConfiguration,
    console: Console,
    width: int = 60,
    height: int = 18,
) -> None:
    """Print the grade curve inside a panel."""
    plot = Text(render_chart(points, config, width, height))
    plot.highlight_regex(r"\*", "cyan")
    plot.highlight_regex(r"-{3,}", "green")
    console.print(Panel(plot, title=f"[bold]{_header(config)}[/bold]", border_style="dim"))


def format_config(config: GradingConfiguration, console: Console) -> None:
    """Print the configuration, highlighting the fields the active method uses."""
    live = {"total_points", "method", "rounding"} | set(METHOD_FIELDS[config.method])

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value")

    for attr, label in FIELD_LABELS.items():
        value = getattr(config, attr)
        if attr == "method":
            display = f"{get_method_display_name(value)} ({value.value})"
        else:
            display = format_points(value)
        if attr not in live:
            display = f"[dim]{display}[/dim]"
        table.add_row(label, display)

    console.print(Panel(table, title="[bold]Instellingen[/bold]", border_style="cyan"))
    console.print(f"[dim]{get_method_description(config.method)}[/dim]")


def format_methods(console: Console) -> None:
    """Print the available grading methods."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Methode", style="cyan")
    table.add_column("Naam")
    table.add_column("Formule")

    for key, name in METHOD_DISPLAY_NAMES.items():
        table.add_row(key, name, METHOD_DESCRIPTIONS[key])

    console.print(table)


def format_json(data, console: Console) -> None:
    """Format and print dataclass rows or a dict as JSON."""
    if isinstance(data, list):
        data = [asdict(item) for item in data]
    console.print_json(json.dumps(data, indent=2, default=str))
