"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kbdiag.diagnostic.models import DiagnosticReport
from kbdiag.diagnostic.signatures import SignatureTable

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_verdict(report_total: int, marker: str | None = None) -> None:
    """Display the final pass/fail verdict of an analysis.

    Args:
        report_total: Number of incidents found.
        marker: Path of the failure marker, if one was written.
    """
    if report_total == 0:
        show_success("Build Log Clean", "No errors found.")
        return

    message = f"Found {report_total} error(s)."
    if marker:
        message += f"\nFailure marker written to: {marker}"
    show_error("Build Failed", message)


def show_signature_table(table: SignatureTable, verbose: bool = False) -> None:
    """Display the signature table in priority order.

    Args:
        table: Signature table to display.
        verbose: Also show remediation text.
    """
    console.print()
    distinct = len(dict.fromkeys(table.categories()))
    grid = Table(
        title=f"[bold]Failure Signatures ({len(table)})[/]",
        caption=f"{distinct} distinct categories",
        show_lines=verbose,
    )
    grid.add_column("#", style="dim", justify="right")
    grid.add_column("Category", style="cyan")
    grid.add_column("Pattern", style="white")
    if verbose:
        grid.add_column("Suggestion", style="yellow")

    for priority, signature in enumerate(table, start=1):
        row = [str(priority), escape(signature.category), escape(signature.pattern)]
        if verbose:
            row.append(escape(signature.remediation))
        grid.add_row(*row)

    console.print(grid)


def show_report_table(report: DiagnosticReport) -> None:
    """Display a compact table of classified incidents."""
    if not report.has_errors:
        return

    console.print()
    grid = Table(title="[bold]Incidents[/]")
    grid.add_column("#", style="dim", justify="right")
    grid.add_column("Lines", style="dim")
    grid.add_column("Category", style="cyan")
    grid.add_column("First Line", style="white", overflow="fold")

    for entry in report.entries:
        incident = entry.incident
        span = f"{incident.first_line}-{incident.last_line}"
        grid.add_row(
            str(entry.ordinal),
            span,
            escape(entry.classification.category),
            escape(incident.lines[0].text.strip()),
        )

    console.print(grid)
