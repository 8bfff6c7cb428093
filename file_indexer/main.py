"""
File Indexer CLI Application.

Provides a command-line interface for extracting text from files,
inspecting the available extractors and checking limit policies.
"""

import logging
import warnings
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from file_indexer.config import get_settings
from file_indexer.extractors import ExtractorRegistry
from file_indexer.indexer import FileIndexer
from file_indexer.policy import PolicyTable, PolicyWarning

# Create Typer app
app = typer.Typer(
    name="file-indexer",
    help="Extract searchable text from document files",
    add_completion=False,
)

console = Console()


class PolicyKey(str, Enum):
    """Configurable limit policies."""

    MAX_FILE_SIZE = "max_file_size"
    MAX_TEXT_LENGTH = "max_text_length"


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", "-l", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = "WARNING",
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def extract(
    paths: Annotated[list[Path], typer.Argument(help="Files to extract text from")],
    text: Annotated[
        bool,
        typer.Option("--text", "-t", help="Print the extracted text of each file"),
    ] = False,
) -> None:
    """
    Extract text from a batch of files.

    Files that are too large, unsupported or fail to parse are reported
    as skipped; the batch always runs to the end.
    """
    try:
        indexer = FileIndexer(get_settings())
    except ValidationError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Extraction Results")
    table.add_column("File", style="cyan")
    table.add_column("Characters", justify="right")
    table.add_column("Status")

    indexed = 0
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", PolicyWarning)
        for path in paths:
            result = indexer.index_file(path)
            if result is None:
                table.add_row(str(path), "-", "[yellow]skipped[/yellow]")
                continue

            indexed += 1
            table.add_row(str(path), str(len(result)), "[green]indexed[/green]")
            if text:
                console.print(Panel(Text(result) if result else "[dim](empty)[/dim]", title=str(path)))

    for warning in caught:
        console.print(f"[yellow]Warning:[/yellow] {warning.message}")

    console.print(table)
    console.print(f"\n[bold]Indexed:[/bold] {indexed} / {len(paths)}")


@app.command()
def extractors() -> None:
    """
    List the registered extractors.

    Shows which extractors are enabled and available in this environment.
    """
    settings = get_settings()
    registry = ExtractorRegistry()
    enabled = set(registry.list_enabled(settings.enabled_file_indexers))

    table = Table(title="Extractors")
    table.add_column("Id", style="cyan")
    table.add_column("Label")
    table.add_column("Extensions")
    table.add_column("Available")
    table.add_column("Enabled")

    descriptors = registry.describe(settings)

    num_available = 0
    for info in descriptors:
        if info.available:
            num_available += 1
        table.add_row(
            info.id,
            info.label,
            ", ".join(info.extensions),
            "✓" if info.available else "✗",
            "✓" if info.id in enabled else "",
        )

    console.print(table)

    for info in descriptors:
        for field in info.config_schema:
            console.print(f"[cyan]{info.id}[/cyan] {field.name}: {field.label}")

    if num_available:
        console.print(
            "[dim]If more than one enabled extractor handles an extension, "
            "only the first one listed in enabled_file_indexers is used.[/dim]"
        )
    else:
        console.print(
            "[yellow]There are currently no extractors available. "
            "Make sure the document libraries or pdftotext are installed.[/yellow]"
        )


@app.command()
def policy(
    key: Annotated[PolicyKey, typer.Argument(help="Policy to resolve")],
    extensions: Annotated[list[str], typer.Argument(help="File extensions to resolve")],
) -> None:
    """
    Resolve a limit policy for the given extensions.

    Reports malformed policy rows as warnings.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", PolicyWarning)
        policies = PolicyTable.from_settings(get_settings())

    for warning in caught:
        console.print(f"[yellow]Warning:[/yellow] {warning.message}")

    table = Table(title=key.value)
    table.add_column("Extension", style="cyan")
    table.add_column("Limit", justify="right")

    for extension in extensions:
        limit = policies.limit(key.value, extension)
        table.add_row(extension.lower(), "unlimited" if limit is None else str(limit))

    console.print(table)


if __name__ == "__main__":
    app()
