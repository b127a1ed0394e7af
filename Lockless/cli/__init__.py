"""
Command-line interface for Lockless.
"""
from __future__ import annotations

import itertools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from Lockless.core.errors import LocklessError
from Lockless.core.paths import directory_size_in_bytes, is_hidden, rename_file
from Lockless.core.reader import read_all_lines
from Lockless.utils.defaults import DEFAULT_ENCODING

app = typer.Typer(
    name="lockless",
    help="Lockless - lock-tolerant file and directory helpers",
    add_completion=False,
)
console = Console()
error_console = Console(stderr=True)


def _fail(error: LocklessError) -> None:
    error_console.print(f"[red]✗[/red] {escape(str(error))}", highlight=False)
    raise typer.Exit(code=2)  # Error exit code


def _format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if size < 1024 or unit == "TB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{num_bytes} B"


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Lockless - lock-tolerant file and directory helpers."""
    if not verbose:
        return

    package_logger = logging.getLogger("Lockless")
    previous_level = package_logger.level
    handler = RichHandler(console=error_console, show_path=False)
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)

    def _restore_logging() -> None:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

    ctx.call_on_close(_restore_logging)


@app.command()
def lines(
    path: Path = typer.Argument(..., help="File to read"),
    encoding: str = typer.Option(DEFAULT_ENCODING, "--encoding", "-e", help="Text encoding"),
    head: Optional[int] = typer.Option(
        None, "--head", "-n", min=0,
        help="Stop after this many lines"
    ),
    number: bool = typer.Option(False, "--number", help="Prefix each line with its number"),
) -> None:
    """
    Print the lines of a file without locking it.

    Examples:

        # Follow up on a log another process is still writing
        lockless lines app.log

        # First 20 lines of a latin-1 export
        lockless lines export.csv --encoding latin-1 --head 20
    """
    try:
        with read_all_lines(path, encoding) as reader:
            for line in itertools.islice(reader, head):
                if number:
                    typer.echo(f"{reader.line_number:>6}  {line}")
                else:
                    typer.echo(line)
    except LocklessError as e:
        _fail(e)


@app.command()
def size(
    directory: Path = typer.Argument(..., help="Directory to measure"),
    human: bool = typer.Option(False, "--human", "-h", help="Human readable units"),
) -> None:
    """Print the total size of all files under a directory."""
    try:
        total = directory_size_in_bytes(directory)
    except LocklessError as e:
        _fail(e)
        return

    typer.echo(_format_size(total) if human else str(total))


@app.command()
def hidden(
    path: Path = typer.Argument(..., help="File or directory to check"),
) -> None:
    """
    Report whether a file or directory is hidden.

    Exit code 0 when hidden, 1 when visible, 2 on error.
    """
    try:
        result = is_hidden(path)
    except LocklessError as e:
        _fail(e)
        return

    if result:
        console.print("[yellow]hidden[/yellow]")
        raise typer.Exit(code=0)
    console.print("[green]visible[/green]")
    raise typer.Exit(code=1)


@app.command()
def rename(
    path: Path = typer.Argument(..., help="File to rename"),
    new_name: str = typer.Argument(..., help="New file name (same directory)"),
) -> None:
    """Rename a file within its directory."""
    try:
        target = rename_file(path, new_name)
    except LocklessError as e:
        _fail(e)
        return

    console.print(f"[green]✓[/green] Renamed to {escape(str(target))}", highlight=False)


@app.command()
def version() -> None:
    """Display version information."""
    from Lockless import __version__
    console.print(f"Lockless version {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
