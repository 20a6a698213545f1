# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-analyzer/src/rsync_analyzer/cli.py

"""Command line interface for rsync-analyzer."""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .metrics import changes_by_type, filter_changes, format_bytes
from .parser import RsyncOutputAnalyzer
from .types import AnalysisError, AnalysisResult, ChangeType, ItemizedChange

app = typer.Typer(help="Parse and analyze rsync --itemize-changes --stats output")
console = Console()

CHANGE_STYLES = {
    ChangeType.FILE: "blue",
    ChangeType.DIRECTORY: "cyan",
    ChangeType.SYMLINK: "magenta",
    ChangeType.DELETION: "red",
}


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_output(source: Optional[Path]) -> str:
    if source is None or str(source) == "-":
        return sys.stdin.read()
    return source.read_text(errors="replace")


def _parse_change_types(names: List[str]) -> list[ChangeType]:
    by_name = {t.label.lower(): t for t in ChangeType}
    types = []
    for name in names:
        try:
            types.append(by_name[name.lower()])
        except KeyError:
            raise typer.BadParameter(
                f"unknown change type {name!r}; choose from {', '.join(sorted(by_name))}"
            ) from None
    return types


@app.command()
def analyze(
    source: Optional[Path] = typer.Argument(
        None, help="File with captured rsync output (stdin if omitted or '-')"),
    output_format: str = typer.Option("summary", "--format", "-f",
                                      help="Output format: json, summary, table"),
    binary: bool = typer.Option(False, "--binary", help="Use 1024-based size units"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output")
) -> None:
    """Analyze one captured rsync run."""
    _setup_logging(debug)
    try:
        result = RsyncOutputAnalyzer().analyze_strict(_read_output(source))
    except (AnalysisError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output_format == "json":
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif output_format == "summary":
        _print_summary(result, binary)
    elif output_format == "table":
        _print_table(list(result.itemized_changes))
    else:
        typer.echo(f"Unknown format: {output_format}", err=True)
        raise typer.Exit(1)


@app.command()
def changes(
    source: Optional[Path] = typer.Argument(
        None, help="File with captured rsync output (stdin if omitted or '-')"),
    search: str = typer.Option("", "--search", "-s",
                               help="Only paths containing this text (case-insensitive)"),
    types: Optional[List[str]] = typer.Option(None, "--type", "-t",
                                              help="Only these change types (repeatable)"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum rows to show"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output")
) -> None:
    """List itemized changes, optionally filtered."""
    _setup_logging(debug)
    wanted = _parse_change_types(types or [])
    try:
        result = RsyncOutputAnalyzer().analyze_strict(_read_output(source))
    except (AnalysisError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    selected = filter_changes(result.itemized_changes, search, wanted)
    _print_table(selected, limit=limit)


def _print_summary(result: AnalysisResult, binary: bool) -> None:
    """Print a summary of one run."""
    stats = result.statistics

    def size(n: int) -> str:
        return format_bytes(n, binary=binary)

    if result.is_dry_run:
        console.print("[bold yellow]DRY RUN[/bold yellow] (no changes made)")
    else:
        console.print("[bold green]LIVE RUN[/bold green]")

    console.print(f"\n[bold]Statistics:[/bold]")
    console.print(f"  Total files: {stats.total_files.total:,}")
    console.print(f"    Regular: {stats.total_files.regular:,}")
    console.print(f"    Directories: {stats.total_files.directories:,}")
    console.print(f"    Links: {stats.total_files.links:,}")
    console.print(f"  Files created: {stats.files_created.total:,}")
    console.print(f"  Files deleted: {stats.files_deleted:,}")
    console.print(f"  Files transferred: {stats.regular_files_transferred:,}")

    console.print(f"\n[bold]Data transfer:[/bold]")
    console.print(f"  Total size: {size(stats.total_file_size)}")
    console.print(f"  To transfer: {size(stats.total_transferred_size)}")
    console.print(f"  Efficiency: {stats.efficiency_percentage:.2f}% needs transfer")
    console.print(f"  Speedup: {stats.speedup:.2f}x")

    console.print(f"\n[bold]Changes ({len(result.itemized_changes)} items):[/bold]")
    for change_type, count in sorted(changes_by_type(result).items(),
                                     key=lambda kv: -kv[1]):
        console.print(f"  {change_type.label}: {count}")

    if result.errors:
        console.print(f"\n[red]Errors ({len(result.errors)}):[/red]")
        for line in result.errors:
            console.print(f"  {line}", markup=False)
    if result.warnings:
        console.print(f"\n[yellow]Warnings ({len(result.warnings)}):[/yellow]")
        for line in result.warnings:
            console.print(f"  {line}", markup=False)


def _print_table(changes: list[ItemizedChange], limit: int = 50) -> None:
    """Print changes in table format."""
    table = Table(title="Rsync Changes")
    table.add_column("Type", style="cyan")
    table.add_column("Flags", style="yellow")
    table.add_column("Path", style="green")
    table.add_column("Details", style="magenta")

    for change in changes[:limit]:
        details = ""
        if change.target is not None:
            details = f"→ {escape(change.target)}"
        elif change.flags.description != "none":
            details = change.flags.description

        style = CHANGE_STYLES.get(change.change_type)
        table.add_row(
            change.change_type.label,
            change.flags.flag_string,
            escape(change.path[:60] + "..." if len(change.path) > 60 else change.path),
            details,
            style=style,
        )

    if len(changes) > limit:
        table.add_row("...", "", f"({len(changes) - limit} more)", "")

    console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
