"""`perfgate analyze` – compare current results against the baseline."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from ..pipeline import RegressionPipeline
from ..report import ReportGenerator
from .utils import build_config, command_guard, config_options

console = Console()


@click.command("analyze")
@config_options
@click.option("--json", "output_json", is_flag=True, help="Print the report as JSON")
@command_guard("Analysis")
def analyze(
    results_dir: Path | None,
    baseline_file: Path | None,
    output_file: Path | None,
    regression_threshold: float | None,
    improvement_threshold: float | None,
    output_json: bool,
) -> int:
    """Compare current benchmark results against the baseline.

    Writes the regression report and exits with status 1 when any metric
    regressed. When no baseline exists yet, the current results become the
    baseline and the command succeeds.
    """
    config = build_config(
        results_dir=results_dir,
        baseline_file=baseline_file,
        output_file=output_file,
        regression_threshold=regression_threshold,
        improvement_threshold=improvement_threshold,
    )
    generator = ReportGenerator(console=console)
    result = RegressionPipeline(config, generator=generator, console=console).analyze()

    if result.bootstrapped:
        if output_json:
            click.echo(
                json.dumps(
                    {
                        "bootstrapped": True,
                        "baseline_file": str(config.baseline_path),
                        "entries": len(result.baseline_records),
                    },
                    indent=2,
                )
            )
        else:
            console.print(
                f"[yellow]⚠️  No baseline found.[/yellow] Created baseline from current "
                f"results: {escape(str(config.baseline_path))} ({len(result.baseline_records)} entries)",
                soft_wrap=True,
            )
        return result.exit_code

    if output_json:
        click.echo(generator.render_json(result.report))
    else:
        generator.print_summary(result.report, result.report_path)
    return result.exit_code
