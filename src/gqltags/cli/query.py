"""Query commands - lookup, list and roots."""

from pathlib import Path

import click

from gqltags.cli.utils import ensure_index, load_workspace
from gqltags.core.errors import TagIndexError
from gqltags.index import EntityDeclaration, EntityKind, resolve_search_roots

_PATH_ARG = click.argument(
    "path", default=None, required=False, type=click.Path(exists=True, path_type=Path)
)
_CONFIG_OPT = click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file to use instead of <vc root>/.gqltags.yaml",
)


def _format(decl: EntityDeclaration) -> str:
    return f"{decl.file}:{decl.line}: {decl.kind.keyword} {decl.name}"


@click.command()
@click.argument("name")
@_PATH_ARG
@_CONFIG_OPT
def lookup_command(name: str, path: Path | None, config_file: Path | None) -> None:
    """Print every declaration of NAME.

    Builds the tag file first if the workspace has none.
    """
    workspace, config = load_workspace(path, config_file)
    matches = ensure_index(workspace, config).lookup(name)
    if not matches:
        raise click.ClickException(f"No declaration named {name!r}")
    for decl in matches:
        click.echo(_format(decl))


@click.command()
@_PATH_ARG
@_CONFIG_OPT
@click.option(
    "--kind",
    "kinds",
    multiple=True,
    type=click.Choice([k.keyword for k in EntityKind]),
    help="Only list declarations of this kind (repeatable)",
)
def list_command(path: Path | None, config_file: Path | None, kinds: tuple[str, ...]) -> None:
    """List declarations grouped by kind."""
    workspace, config = load_workspace(path, config_file)
    index = ensure_index(workspace, config)
    wanted = {EntityKind(k) for k in kinds}

    for kind, decls in index.by_kind().items():
        if wanted and kind not in wanted:
            continue
        click.echo(f"{kind.label}:")
        for decl in decls:
            click.echo(f"  {decl.name}  {decl.file}:{decl.line}")


@click.command()
@_PATH_ARG
@_CONFIG_OPT
def roots_command(path: Path | None, config_file: Path | None) -> None:
    """Print the directories that would be scanned, in order."""
    workspace, config = load_workspace(path, config_file)
    try:
        roots = resolve_search_roots(workspace, config.tags)
    except TagIndexError as e:
        raise click.ClickException(e.message) from e
    for root in roots:
        click.echo(str(root))
