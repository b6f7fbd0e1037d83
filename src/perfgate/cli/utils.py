"""Shared utilities for CLI commands."""

import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from ..config import RegressionConfig
from ..error_handling import PerfGateError

err_console = Console(stderr=True)


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the path and threshold options shared by the gate commands."""
    options = [
        click.option(
            "--results-dir",
            "-r",
            type=click.Path(file_okay=False, path_type=Path),
            help="Directory holding <test_name>.json result files [env: CURRENT_RESULTS_DIR]",
        ),
        click.option(
            "--baseline",
            "-b",
            "baseline_file",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Baseline JSON file [env: BASELINE_FILE]",
        ),
        click.option(
            "--output",
            "-o",
            "output_file",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Report output file [env: OUTPUT_FILE]",
        ),
        click.option(
            "--regression-threshold",
            type=click.FloatRange(min=0),
            help="Fractional degradation that counts as a regression [env: REGRESSION_THRESHOLD]",
        ),
        click.option(
            "--improvement-threshold",
            type=click.FloatRange(min=0),
            help="Fractional gain that counts as an improvement [env: IMPROVEMENT_THRESHOLD]",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(**overrides: Any) -> RegressionConfig:
    """Environment settings with command-line overrides applied on top."""
    return RegressionConfig.from_env().with_overrides(**overrides)


def handle_perfgate_error(command_name: str, error: PerfGateError) -> None:
    """Report a fatal perfgate error and exit with status 1."""
    err_console.print(f"[red]❌ {command_name} failed: {escape(str(error))}[/red]")
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def run_guarded(command_name: str, func: Callable[[], int]) -> None:
    """Run ``func`` and exit with its status; perfgate errors exit 1."""
    try:
        exit_code = func()
    except PerfGateError as e:
        handle_perfgate_error(command_name, e)
    except KeyboardInterrupt:
        handle_keyboard_interrupt(command_name)
    else:
        sys.exit(exit_code)


def command_guard(command_name: str) -> Callable[[Callable[..., int]], Callable[..., None]]:
    """Decorator form of ``run_guarded`` for click command callbacks."""

    def decorator(func: Callable[..., int]) -> Callable[..., None]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            run_guarded(command_name, lambda: func(*args, **kwargs))

        return wrapper

    return decorator
