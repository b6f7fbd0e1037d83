"""Baseline management commands."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..baseline import BaselineStore
from ..pipeline import RegressionPipeline
from .utils import build_config, command_guard, config_options

console = Console()


@click.command("create-baseline")
@config_options
@command_guard("Baseline creation")
def create_baseline(
    results_dir: Path | None,
    baseline_file: Path | None,
    output_file: Path | None,
    regression_threshold: float | None,
    improvement_threshold: float | None,
) -> int:
    """Snapshot the current results as the new baseline."""
    config = build_config(
        results_dir=results_dir,
        baseline_file=baseline_file,
        output_file=output_file,
        regression_threshold=regression_threshold,
        improvement_threshold=improvement_threshold,
    )
    records = RegressionPipeline(config, console=console).create_baseline()
    console.print(
        f"[green]✅ Baseline created:[/green] {escape(str(config.baseline_path))} "
        f"({len(records)} entries)",
        soft_wrap=True,
    )
    return 0


@click.group("baseline")
def baseline() -> None:
    """Inspect and manage the stored baseline."""
    pass


baseline.add_command(create_baseline, name="create")


@baseline.command("list")
@click.option(
    "--baseline",
    "-b",
    "baseline_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Baseline JSON file [env: BASELINE_FILE]",
)
@click.option("--test", "-t", "test_name", help="Only show entries for this test")
@click.option("--json", "output_json", is_flag=True, help="Output entries as JSON")
@command_guard("Baseline listing")
def baseline_list(baseline_file: Path | None, test_name: str | None, output_json: bool) -> int:
    """Show the reference values stored in the baseline."""
    config = build_config(baseline_file=baseline_file)
    store = BaselineStore(config.baseline_path)

    if not store.exists():
        console.print(f"[yellow]No baseline found at {escape(str(config.baseline_path))}[/yellow]")
        console.print("[dim]Run 'perfgate create-baseline' to establish one[/dim]")
        return 0

    records = [r for r in store.records() if test_name is None or r.test_name == test_name]

    if output_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return 0

    table = Table(title=f"Baseline: {escape(str(config.baseline_path))}", show_header=True)
    table.add_column("Test", style="cyan")
    table.add_column("Metric", style="white")
    table.add_column("Value", justify="right", style="green")
    for record in records:
        table.add_row(
            escape(record.test_name),
            escape(record.metric),
            escape(record.value) if record.value is not None else "[dim]missing[/dim]",
        )
    console.print(table)
    console.print(f"[dim]{len(records)} entries[/dim]")
    return 0
