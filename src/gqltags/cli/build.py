"""gqltags build command - rebuild and write the tag file."""

from pathlib import Path

import click
from rich.console import Console

from gqltags.cli.utils import load_workspace, run_rebuild
from gqltags.core.logging import get_log_file_path


@click.command()
@click.argument("path", default=None, required=False, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file to use instead of <vc root>/.gqltags.yaml",
)
def build_command(path: Path | None, config_file: Path | None) -> None:
    """Scan schema files and write the tag file.

    PATH is a schema file or directory in the workspace (default: current
    directory). The tag file is written at its VC root, or next to PATH
    outside version control.
    """
    workspace, config = load_workspace(path, config_file)
    console = Console(stderr=True)

    with console.status("[cyan]Indexing schema files...[/cyan]", spinner="dots"):
        outcome = run_rebuild(workspace, config)

    if outcome.error is not None or outcome.result is None:
        log_path = get_log_file_path()
        hint = f" (details in {log_path})" if log_path else ""
        raise click.ClickException(f"{outcome.error}{hint}")

    result = outcome.result
    console.print(
        f"  [green]✓[/green] {len(result.index)} declaration(s) from "
        f"{result.files_scanned} file(s) in {result.duration_seconds:.2f}s"
    )
    for warning in result.warnings:
        console.print(f"  [yellow]![/yellow] skipped {warning.path}: {warning.reason}")
    click.echo(str(outcome.destination))
