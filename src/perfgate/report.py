"""Report persistence and terminal summary."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .error_handling import ReportWriteError, error_context
from .io import write_json
from .models import Report

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Writes the JSON report and prints a human-readable summary."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def write(self, report: Report, path: Path) -> Path:
        """Persist ``report`` at ``path``, creating parent directories.

        Raises:
            ReportWriteError: If the report cannot be written
        """
        path = Path(path)
        with error_context(
            "write regression report", ReportWriteError, context={"path": path}, logger=logger
        ):
            write_json(path, report.to_dict())
        logger.info(f"Report saved to: {path}")
        return path

    @staticmethod
    def render_json(report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2)

    def print_summary(self, report: Report, path: Path | None = None) -> None:
        summary = report.summary
        out = self.console

        out.print()
        out.print("[bold blue]📊 Performance Regression Report[/bold blue]")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Total tests analyzed", str(summary.total))
        table.add_row("[red]Regressions[/red]", str(summary.regressions))
        table.add_row("[green]Improvements[/green]", str(summary.improvements))
        table.add_row("Stable", str(summary.stable))
        if summary.missing_data:
            table.add_row("[yellow]Missing data[/yellow]", str(summary.missing_data))
        if summary.invalid_data:
            table.add_row("[yellow]Invalid data[/yellow]", str(summary.invalid_data))
        out.print(table)

        if path is not None:
            out.print(f"Report saved to: {escape(str(path))}", soft_wrap=True)

        if report.regressions:
            self.err_console.print()
            self.err_console.print("[bold red]❌ Regressions:[/bold red]")
            for entry in report.regressions:
                self.err_console.print(f"  - {escape(entry)}", soft_wrap=True)

        if report.improvements:
            out.print()
            out.print("[bold green]✅ Improvements:[/bold green]")
            for entry in report.improvements:
                out.print(f"  - {escape(entry)}", soft_wrap=True)

        skipped = report.missing_data + report.invalid_data
        if skipped:
            self.err_console.print()
            self.err_console.print("[bold yellow]⚠️  Not compared:[/bold yellow]")
            for entry in skipped:
                self.err_console.print(f"  - {escape(entry)}", soft_wrap=True)

        out.print()
        if report.passed:
            out.print("[bold green]✅ No performance regressions detected.[/bold green]")
        else:
            self.err_console.print(
                f"[bold red]❌ Found {summary.regressions} performance regressions![/bold red]"
            )
