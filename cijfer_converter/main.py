"""CLI entry point for Cijfer Converter."""

import logging
import math
from dataclasses import fields
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import CONFIG_DIR, CONFIG_DIR_ENVVAR, ROUNDING_OPTIONS
from .grading import (
    GradingConfiguration,
    GradingError,
    GradingMethod,
    generate_chart_series,
    generate_grade_table,
    lookup_grade,
    table_to_delimited_text,
)
from .output import (
    export_delimited_text,
    export_to_csv,
    format_chart,
    format_config,
    format_json,
    format_lookup,
    format_methods,
    format_table,
)
from .utils import ConfigurationCell, SettingsStore, load_configuration

app = typer.Typer(
    name="cijfers",
    help="Convert exam scores to grades on the 1-10 scale.",
    add_completion=False,
)
config_app = typer.Typer(help="Show or change the stored grading configuration.")
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _open_cell(ctx: typer.Context) -> ConfigurationCell:
    """Load the stored configuration into a cell that saves on change."""
    store: SettingsStore = ctx.obj["store"]
    cell = ConfigurationCell(load_configuration(store))
    cell.bind_store(store)
    return cell


def _fail(error: Exception) -> None:
    err_console.print(f"[red]{error}[/red]")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: str = typer.Option(
        str(CONFIG_DIR),
        "--config-dir",
        envvar=CONFIG_DIR_ENVVAR,
        help="Directory holding the stored configuration",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Convert exam scores to grades on the 1-10 scale."""
    _setup_logging(verbose)
    ctx.obj = {"store": SettingsStore(config_dir)}
    logger.debug("Using configuration directory %s", config_dir)


@app.command()
def table(
    ctx: typer.Context,
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
) -> None:
    """Show the grade for every score from total points down to zero."""
    config = _open_cell(ctx).config
    try:
        results = generate_grade_table(config)
    except GradingError as e:
        _fail(e)

    if output_format == "json":
        format_json(results, console)
    else:
        format_table(results, config, console)


@app.command()
def lookup(
    ctx: typer.Context,
    score: float = typer.Argument(..., help="Points achieved"),
) -> None:
    """Look up the grade for a single score."""
    config = _open_cell(ctx).config
    try:
        result = lookup_grade(score, config)
    except GradingError as e:
        _fail(e)

    if not 0 <= score <= config.total_points:
        console.print(
            f"[yellow]Score {score:g} is outside 0-{config.total_points:g}; "
            "grade is extrapolated and clamped[/yellow]"
        )
    format_lookup(result, config, console)


@app.command()
def chart(
    ctx: typer.Context,
    width: int = typer.Option(60, "--width", help="Plot width in characters"),
    height: int = typer.Option(18, "--height", help="Plot height in lines"),
    output_format: str = typer.Option(
        "plot",
        "--format",
        "-f",
        help="Output format: plot or json",
    ),
) -> None:
    """Show the grade curve."""
    config = _open_cell(ctx).config
    try:
        points = generate_chart_series(config)
    except GradingError as e:
        _fail(e)

    if output_format == "json":
        format_json(points, console)
    else:
        format_chart(points, config, console, width=width, height=height)


@app.command()
def export(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (stdout when omitted)",
    ),
    as_csv: bool = typer.Option(
        False,
        "--csv",
        help="Write CSV instead of tab-separated text (requires --output)",
    ),
) -> None:
    """Export the grade table as tab-separated text for spreadsheets."""
    config = _open_cell(ctx).config
    try:
        results = generate_grade_table(config)
    except GradingError as e:
        _fail(e)

    if as_csv and not output:
        err_console.print("[red]--csv requires --output[/red]")
        raise typer.Exit(1)

    if output:
        if as_csv:
            export_to_csv(results, output, config)
        else:
            export_delimited_text(results, output, config)
        console.print(f"[green]Table saved to {output}[/green]")
    else:
        typer.echo(table_to_delimited_text(results, config))


@app.command()
def methods() -> None:
    """List the available grading methods."""
    format_methods(console)


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
) -> None:
    """Show the stored configuration."""
    config = _open_cell(ctx).config
    if output_format == "json":
        format_json(config.to_dict(), console)
    else:
        format_config(config, console)


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    total: Optional[float] = typer.Option(None, "--total", "-t", help="Maximum achievable points"),
    voldoende: Optional[float] = typer.Option(None, "--voldoende", help="Minimum passing grade (1-10)"),
    method: Optional[GradingMethod] = typer.Option(None, "--method", "-m", help="Grading method"),
    n_term: Optional[float] = typer.Option(None, "--n-term", help="Offset for the n-term method"),
    pass_percentage: Optional[float] = typer.Option(
        None, "--pass-percentage", help="Cesuur as percentage of total points"
    ),
    fouten_k: Optional[float] = typer.Option(None, "--fouten-k", help="Mistakes per grade point"),
    goed_k: Optional[float] = typer.Option(None, "--goed-k", help="Correct answers per grade point"),
    fixed_cutoff: Optional[float] = typer.Option(None, "--cutoff", help="Cesuur in points"),
    rounding: Optional[float] = typer.Option(
        None,
        "--rounding",
        "-r",
        help=f"Grade rounding, one of: {', '.join(f'{r:g}' for r in ROUNDING_OPTIONS)}",
    ),
) -> None:
    """Change one or more stored settings."""
    changes = {
        "total_points": total,
        "voldoende": voldoende,
        "method": method,
        "n_term": n_term,
        "pass_percentage": pass_percentage,
        "fouten_k_factor": fouten_k,
        "goed_k_factor": goed_k,
        "fixed_cutoff": fixed_cutoff,
        "rounding": rounding,
    }
    changes = {k: v for k, v in changes.items() if v is not None}

    if not changes:
        err_console.print("[yellow]Nothing to change[/yellow]")
        raise typer.Exit(1)

    cell = _open_cell(ctx)
    try:
        candidate = cell.config.with_changes(**changes)
    except GradingError as e:
        _fail(e)

    invalid = _validate_config(candidate)
    if invalid:
        for message in invalid:
            err_console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)

    cell.set(candidate)
    format_config(cell.config, console)


def _validate_config(config: GradingConfiguration) -> list[str]:
    """Check a configuration against the ranges the settings allow."""
    values = {f.name: getattr(config, f.name) for f in fields(config) if f.name != "method"}
    problems = [
        f"{name} must be a finite number"
        for name, value in values.items()
        if not math.isfinite(value)
    ]
    if problems:
        return problems

    if config.total_points <= 0:
        problems.append("Total points must be greater than 0")
    if not 1 <= config.voldoende <= 10:
        problems.append("Voldoende must be between 1 and 10")
    if not 0 <= config.pass_percentage <= 100:
        problems.append("Pass percentage must be between 0 and 100")
    if config.fouten_k_factor <= 0:
        problems.append("--fouten-k must be greater than 0")
    if config.goed_k_factor <= 0:
        problems.append("--goed-k must be greater than 0")
    if not 0 <= config.fixed_cutoff <= config.total_points:
        problems.append(
            f"Cutoff must be between 0 and the total points ({config.total_points:g}); "
            "pass --cutoff together with --total"
        )
    if config.rounding not in ROUNDING_OPTIONS:
        problems.append(
            f"Rounding must be one of: {', '.join(f'{r:g}' for r in ROUNDING_OPTIONS)}"
        )
    return problems


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default configuration."""
    format_config(_open_cell(ctx).reset(), console)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"cijfers version {__version__}")


if __name__ == "__main__":
    app()
