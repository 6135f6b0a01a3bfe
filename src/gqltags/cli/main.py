"""gqltags CLI - gqltags command."""

import click

from gqltags.cli.build import build_command
from gqltags.cli.query import list_command, lookup_command, roots_command
from gqltags.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="gqltags")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gqltags - jump-to-definition tag files for GraphQL schemas."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(build_command, name="build")
cli.add_command(lookup_command, name="lookup")
cli.add_command(list_command, name="list")
cli.add_command(roots_command, name="roots")


if __name__ == "__main__":
    cli()
