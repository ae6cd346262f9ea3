# -*- coding: utf-8 -*-
"""
CarbonScope CLI
===============

Command line surface for the emissions calculator.

Usage:
    carbonscope calculate activity.yaml
    carbonscope factors --json
    carbonscope offset 679.84 --project "Wind Power - India" --percentage 50
    carbonscope compare --baseline baseline
"""

import json
import logging
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer
import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from carbonscope import __version__
from carbonscope.calculation import (
    CATEGORIES,
    ActivityData,
    EmissionFactorTable,
    Scope,
    breakdown_shares,
    categories_for,
    compute_activity,
    load_factor_table,
)
from carbonscope.config import configure_logging, get_config, resolve_factor_table
from carbonscope.exceptions import CarbonScopeException, format_exception_chain
from carbonscope.formatting import format_number, format_signed_percentage
from carbonscope.offsets import DEFAULT_OFFSET_PROJECTS, get_project, plan_offsets
from carbonscope.scenarios import compare_scenarios, load_scenarios

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="carbonscope",
    help="CarbonScope: Scope 1/2/3 emissions, offsets and scenario comparison",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    CarbonScope - greenhouse gas emissions calculator
    """
    try:
        get_config()
        configure_logging("DEBUG" if verbose else None)
    except CarbonScopeException as e:
        _fail(e)


def _fail(exc: CarbonScopeException) -> NoReturn:
    logger.debug(format_exception_chain(exc))
    console.print(f"[red]Error:[/red] {exc.message}")
    raise typer.Exit(1)


def _load_document(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]Input file not found: {path}[/red]")
        raise typer.Exit(1)

    if path.suffix not in (".json", ".yaml", ".yml"):
        console.print(f"[red]Unsupported input format: {path.suffix}[/red]")
        console.print("[yellow]Use .json or .yaml files[/yellow]")
        raise typer.Exit(1)

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        console.print(f"[red]Failed to parse {path}: {e}[/red]")
        raise typer.Exit(1)


def _factor_table(path: Optional[Path]) -> EmissionFactorTable:
    if path is not None:
        return load_factor_table(path)
    return resolve_factor_table()


def _decimals() -> int:
    return get_config().display_decimals


@app.command()
def version():
    """Show CarbonScope version"""
    console.print(f"[bold green]CarbonScope v{__version__}[/bold green]")


@app.command()
def factors(
    factors_file: Optional[Path] = typer.Option(
        None, "--factors", "-f", help="Custom emission factor file (YAML/JSON)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the active emission factor table"""
    try:
        table_data = _factor_table(factors_file)
    except CarbonScopeException as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps(table_data.to_dict(), indent=2))
        return

    table = Table(title="Emission Factors (kg CO2e per unit)", box=box.SIMPLE)
    table.add_column("Scope", style="cyan")
    table.add_column("Category")
    table.add_column("Unit", style="yellow")
    table.add_column("Factor", justify="right", style="green")
    for category in CATEGORIES:
        table.add_row(
            category.scope.label,
            category.label,
            category.unit,
            f"{table_data.factor_for(category):g}",
        )
    console.print(table)


@app.command()
def calculate(
    input_file: Path = typer.Argument(..., help="Activity data file (JSON/YAML)"),
    factors_file: Optional[Path] = typer.Option(
        None, "--factors", "-f", help="Custom emission factor file (YAML/JSON)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Calculate Scope 1, 2 and 3 emissions from an activity file

    The file holds ``scope1``, ``scope2`` and ``scope3`` mappings of category
    to quantity. Negative or non-numeric entries count as zero.
    """
    data = _load_document(input_file)
    if data is not None and not isinstance(data, dict):
        console.print("[red]Activity file must contain a mapping of scopes[/red]")
        raise typer.Exit(1)

    try:
        activity = ActivityData.from_dict(data)
        result = compute_activity(activity, _factor_table(factors_file))
    except CarbonScopeException as e:
        _fail(e)

    if output_json:
        typer.echo(result.to_json())
        return

    decimals = _decimals()
    shares = breakdown_shares(result)

    for scope in Scope:
        table = Table(
            title=f"{scope.label}: {format_number(result.scope_total(scope), decimals)} tCO2e "
                  f"({format_number(shares[scope.value], 1)}%)",
            box=box.SIMPLE,
        )
        table.add_column("Category")
        table.add_column("Activity", justify="right")
        table.add_column("tCO2e", justify="right", style="green")
        record = activity.record(scope)
        for category in categories_for(scope):
            table.add_row(
                category.label,
                f"{format_number(record.get(category.name), decimals)} {category.unit}",
                format_number(result.breakdown[scope.value][category.name], 4),
            )
        console.print(table)

    console.print(
        f"[bold]Total emissions:[/bold] {format_number(result.total_emissions, decimals)} tCO2e"
    )


@app.command()
def projects():
    """List the offset project catalogue"""
    table = Table(title="Offset Projects", box=box.SIMPLE)
    table.add_column("Project", style="cyan")
    table.add_column("Type")
    table.add_column("Location")
    table.add_column("Certification", style="yellow")
    table.add_column("$/tCO2e", justify="right", style="green")
    for project in DEFAULT_OFFSET_PROJECTS:
        table.add_row(
            project.name,
            project.project_type,
            project.location,
            project.certification,
            format_number(project.price_per_tonne),
        )
    console.print(table)


@app.command()
def offset(
    emissions: float = typer.Argument(..., help="Emissions to offset (tCO2e)"),
    project: Optional[List[str]] = typer.Option(
        None, "--project", "-p", help="Project name (repeatable)"
    ),
    percentage: Optional[float] = typer.Option(
        None, "--percentage", help="Share of emissions to offset (0-100)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Price offsetting an emissions total across catalogue projects"""
    if percentage is None:
        percentage = get_config().default_offset_percentage

    try:
        selected = [get_project(name) for name in (project or [])]
        plan = plan_offsets(emissions, selected, offset_percentage=percentage)
    except CarbonScopeException as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps(plan.to_dict(), indent=2))
        return

    decimals = _decimals()
    console.print(
        f"Offsetting {format_number(plan.emissions_to_offset, decimals)} tCO2e "
        f"({format_number(plan.offset_percentage, 0)}% of {format_number(emissions, decimals)})"
    )
    if not plan.allocations:
        console.print("[yellow]No projects selected. Use --project; see 'carbonscope projects'.[/yellow]")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("Project", style="cyan")
    table.add_column("tCO2e", justify="right")
    table.add_column("Cost", justify="right", style="green")
    for allocation in plan.allocations:
        table.add_row(
            allocation.project.name,
            format_number(allocation.tonnes, decimals),
            f"${format_number(allocation.cost, decimals)}",
        )
    console.print(table)
    console.print(f"[bold]Total cost:[/bold] ${format_number(plan.total_cost, decimals)}")
    console.print(f"Average price: ${format_number(plan.average_price_per_tonne, decimals)}/tCO2e")


@app.command()
def compare(
    scenarios_file: Optional[Path] = typer.Option(
        None, "--scenarios", "-s", help="Scenario file (YAML); defaults to sample scenarios"
    ),
    baseline: Optional[str] = typer.Option(None, "--baseline", "-b", help="Baseline scenario id"),
    factors_file: Optional[Path] = typer.Option(
        None, "--factors", "-f", help="Custom emission factor file (YAML/JSON)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Compare scenarios against a baseline"""
    config = get_config()
    path = scenarios_file or (Path(config.scenarios_path) if config.scenarios_path else None)

    try:
        comparison = compare_scenarios(
            load_scenarios(path),
            baseline_id=baseline or config.baseline_scenario_id,
            factors=_factor_table(factors_file),
        )
    except CarbonScopeException as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps(comparison.to_dict(), indent=2))
        return

    decimals = _decimals()
    table = Table(title="Scenario Comparison (tCO2e)", box=box.SIMPLE)
    table.add_column("Scenario", style="cyan")
    for scope in Scope:
        table.add_column(scope.label, justify="right")
    table.add_column("Total", justify="right", style="bold")
    table.add_column("vs Baseline", justify="right")

    for outcome in comparison.outcomes:
        if outcome.is_baseline:
            change = "-"
        else:
            color = "green" if outcome.reduction > 0 else "red"
            change = f"[{color}]{format_signed_percentage(outcome.reduction)}[/{color}]"
        table.add_row(
            outcome.scenario.name,
            *(format_number(outcome.result.scope_total(scope), decimals) for scope in Scope),
            format_number(outcome.result.total_emissions, decimals),
            change,
        )
    console.print(table)

    best = comparison.best_scenario()
    if best is not None:
        console.print(f"[bold green]Highest impact:[/bold green] {best.scenario.name}")
        console.print(f"Potential {best.label}: {format_number(abs(best.reduction))}%")


def main():
    app()


if __name__ == "__main__":
    main()
