"""CLI entry point for the schedule planner."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .catalog import CatalogLoadResult, load_catalog
from .constants import PERIOD_TIMES
from .exceptions import PlannerError
from .generator import (
    export_outcome_json,
    generate as run_generation,
    generate_schedule_excel,
    load_generation_config,
    search_space_stats,
    summarize,
)
from .generator.models import GenerationOutcome
from .validators import validate_course

app = typer.Typer(
    name="schedule-planner",
    help="Generate conflict-free class schedules from course sections",
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(catalog: Path) -> CatalogLoadResult:
    """Load a catalog or exit with an error message."""
    try:
        with console.status("[bold green]Loading catalog..."):
            return load_catalog(catalog)
    except PlannerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command()
def generate(
    catalog: Annotated[
        Path,
        typer.Argument(help="Course catalog (.json, .csv or .xlsx)"),
    ],
    config: Annotated[
        Optional[Path],
        typer.Option("-c", "--config", help="Generation config JSON (filters, overrides)"),
    ] = None,
    max_results: Annotated[
        Optional[int],
        typer.Option("-n", "--max-results", help="Maximum number of combinations"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail when a course has no eligible sections"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Export outcome to this JSON file"),
    ] = None,
    excel: Annotated[
        Optional[Path],
        typer.Option("--excel", help="Export grids of the listed combinations to this .xlsx file"),
    ] = None,
    show: Annotated[
        int,
        typer.Option("--show", help="Number of combinations to list"),
    ] = 10,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate all conflict-free section combinations."""
    _configure_logging(verbose)

    loaded = _load(catalog)
    if not loaded.courses:
        console.print("[bold yellow]Warning:[/bold yellow] No courses found in catalog")
        raise typer.Exit(1)

    try:
        settings = load_generation_config(config)
        with console.status("[bold green]Searching combinations..."):
            outcome = run_generation(
                loaded.courses,
                max_results=max_results if max_results is not None else settings.max_results,
                section_filter=settings.section_filter,
                override_policy=settings.override_policy,
                strict=strict or settings.strict,
            )
    except PlannerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]Schedule generation for:[/bold] {catalog.name}")
    console.print(f"  Courses: {len(loaded.courses)}")
    console.print(f"  Combinations found: {outcome.total_results}")
    if outcome.cap_reached:
        console.print(f"  [yellow]Result cap of {outcome.max_results} reached[/yellow]")
    if outcome.dropped_courses:
        console.print(
            f"  [yellow]Dropped (no eligible sections): {', '.join(outcome.dropped_courses)}[/yellow]"
        )

    if outcome.results:
        _show_results(outcome, show)
    else:
        _show_diagnostics(outcome)

    if output:
        output_path = output if output.suffix == ".json" else output.with_suffix(".json")
        export_outcome_json(outcome, output_path)
        console.print(f"\n[bold green]✓[/bold green] Outcome exported to: {output_path}")

    if excel:
        excel_path = generate_schedule_excel(outcome.results[:show] if show else outcome.results, excel)
        console.print(f"[bold green]✓[/bold green] Grids exported to: {excel_path}")


def _show_results(outcome: GenerationOutcome, limit: int) -> None:
    """Show the first combinations in a table."""
    table = Table(title="Combinations")
    table.add_column("ID", style="cyan")
    table.add_column("Sections", style="green")
    table.add_column("Blocks", style="magenta", justify="right")
    table.add_column("Overlap", style="red")

    for result in outcome.results[:limit]:
        summary = summarize(result)
        table.add_row(
            result.id,
            summary.description,
            str(summary.occupied_block_count),
            "permitted" if result.has_permitted_overlap else "",
        )

    if outcome.total_results > limit:
        table.add_row("...", f"{outcome.total_results - limit} more", "", "")

    console.print(table)


def _show_diagnostics(outcome: GenerationOutcome) -> None:
    """Explain why no combination exists."""
    if not outcome.diagnostics:
        console.print("\n[bold yellow]No combinations and no conflicts recorded.[/bold yellow]")
        return

    table = Table(title="Most conflicting course pairs")
    table.add_column("Courses", style="cyan")
    table.add_column("Share", style="red", justify="right")
    table.add_column("Peak", style="magenta")
    table.add_column("Example", style="green")

    for pair in outcome.diagnostics:
        times = PERIOD_TIMES[pair.peak_period]
        example = ""
        if pair.example:
            example = f"{pair.example.section_a} vs {pair.example.section_b}"
        table.add_row(
            f"{pair.course_a} / {pair.course_b}",
            f"{pair.percentage}%",
            f"{pair.peak_day.label} P{pair.peak_period} ({times['start']})",
            example,
        )

    console.print(table)


@app.command()
def validate(
    catalog: Annotated[
        Path,
        typer.Argument(help="Course catalog (.json, .csv or .xlsx)"),
    ],
) -> None:
    """Validate a course catalog without generating."""
    loaded = _load(catalog)

    errors = list(loaded.errors)
    warnings = list(loaded.warnings)
    for course in loaded.courses:
        _, course_errors, course_warnings = validate_course(course)
        errors.extend(course_errors)
        warnings.extend(course_warnings)

    console.print(f"\n[bold]Validation Results for:[/bold] {catalog.name}")
    console.print(f"  Courses found: {len(loaded.courses)}")

    if errors:
        console.print(f"\n[bold red]Errors ({len(errors)}):[/bold red]")
        for error in errors:
            console.print(f"  [red]• {error}[/red]")

    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if errors:
        console.print("[bold red]✗ Catalog has issues[/bold red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Catalog is valid[/bold green]")


@app.command()
def stats(
    catalog: Annotated[
        Path,
        typer.Argument(help="Course catalog (.json, .csv or .xlsx)"),
    ],
) -> None:
    """Show search-space statistics for a catalog."""
    loaded = _load(catalog)
    space = search_space_stats(loaded.courses)

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")
    overview_table.add_row("Courses", str(space.course_count))
    overview_table.add_row("Sections", str(space.section_count))
    overview_table.add_row("Possible Combinations", str(space.possible_combinations))
    console.print(overview_table)

    course_table = Table(title="Sections by Course")
    course_table.add_column("Course", style="cyan")
    course_table.add_column("Title", style="blue", max_width=40)
    course_table.add_column("Sections", style="green")
    for course in loaded.courses:
        course_table.add_row(course.code, course.title[:40], str(len(course.sections)))
    console.print(course_table)


if __name__ == "__main__":
    app()
