"""Rich display functions for the quant-env CLI.

Only variable names and counters are ever rendered here. Values leave the
process through the ``variables`` output alone.
"""

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quant_env.config import Operation, RunConfig
from quant_env.exceptions import QuantEnvError
from quant_env.reconcile import OperationReport

console = Console()


def display_target(config: RunConfig) -> None:
    """Show which environment the command is about to touch."""
    console.print(
        f"🔧 [bold blue]{config.operation.value}[/bold blue] "
        f"[cyan]{config.organization}/{config.app_name}/"
        f"{config.environment_name}[/cyan]"
    )


def display_variable_names(names: Iterable[str]) -> None:
    names = sorted(names)
    if not names:
        console.print("📋 [yellow]No variables found[/yellow]")
        return

    table = Table(title=f"Variables ({len(names)})", header_style="bold blue")
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(escape(name))
    console.print(table)


def display_report(report: OperationReport) -> None:
    """Display the counters of a finished operation."""
    if report.operation is Operation.LIST:
        display_variable_names(report.variables or {})
        return

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Property", style="cyan", width=12)
    table.add_column("Value", style="white")

    table.add_row("Operation", report.operation.value)
    if report.operation is Operation.SET:
        table.add_row("Updated", str(report.updated))
    else:
        table.add_row("Deleted", str(report.deleted))
    table.add_row("Failed", str(report.failed))
    table.add_row("Status", "✅ Completed" if report.succeeded else "❌ Failed")
    console.print(table)

    if not report.succeeded:
        console.print(f"❌ [bold red]{escape(report.message or '')}[/bold red]")


def display_error(error: QuantEnvError) -> None:
    """Display a quant-env error with its suggestions."""
    console.print(f"❌ [bold red]{escape(error.message)}[/bold red]")

    if error.suggestions:
        console.print("💡 [bold yellow]Suggestions:[/bold yellow]")
        for suggestion in error.suggestions:
            console.print(f"   • {escape(suggestion)}")
