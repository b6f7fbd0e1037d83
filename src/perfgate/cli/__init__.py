"""CLI module for perfgate commands.

This module re-exports all command functions to maintain compatibility
with the main CLI entry point while keeping commands organized in separate modules.
"""

import click

from .. import __version__
from ..io import setup_logging
from .analyze_cmd import analyze
from .baseline_cmd import baseline, baseline_list, create_baseline


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="perfgate")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Verbosity of diagnostic logging on stderr",
)
@click.pass_context
def main(ctx: click.Context, log_level: str) -> None:
    """📊 perfgate: benchmark regression gate for CI.

    Runs `analyze` when no command is given.
    """
    setup_logging(log_level)
    if ctx.invoked_subcommand is None:
        ctx.invoke(analyze)


# Register all commands from the modular CLI structure
main.add_command(analyze)
main.add_command(create_baseline)
main.add_command(baseline)

__all__ = [
    "analyze",
    "baseline",
    "baseline_list",
    "create_baseline",
    "main",
]
