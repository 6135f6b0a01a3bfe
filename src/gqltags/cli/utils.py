"""CLI utilities."""

import asyncio
from pathlib import Path

import click

from gqltags.config import GqlTagsConfig, load_config
from gqltags.core.errors import ConfigError
from gqltags.core.logging import configure_logging
from gqltags.daemon import RebuildCoordinator, RebuildOutcome
from gqltags.index import TagIndex, Workspace


def load_workspace(path: Path | None, config_file: Path | None) -> tuple[Workspace, GqlTagsConfig]:
    """Snapshot the workspace for PATH and load the config that applies to it.

    Raises:
        click.ClickException: If the configuration is invalid
    """
    workspace = Workspace.for_path(path or Path.cwd())
    try:
        config = load_config(workspace.vc_root, config_file=config_file)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    # -v on the command group wins over the configured logging setup
    ctx = click.get_current_context(silent=True)
    if ctx is None or not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)
    return workspace, config


def run_rebuild(workspace: Workspace, config: GqlTagsConfig) -> RebuildOutcome:
    """Run one rebuild to completion on a private event loop."""

    async def _run() -> RebuildOutcome:
        coordinator = RebuildCoordinator(config=config.tags, max_workers=config.rebuild.max_workers)
        try:
            return await coordinator.request_rebuild(workspace)
        finally:
            await coordinator.stop()

    return asyncio.run(_run())


def ensure_index(workspace: Workspace, config: GqlTagsConfig) -> TagIndex:
    """Load the committed tag file, building it first if it does not exist.

    Raises:
        click.ClickException: If no index could be produced
    """

    async def _run() -> tuple[TagIndex | None, RebuildOutcome | None]:
        coordinator = RebuildCoordinator(config=config.tags, max_workers=config.rebuild.max_workers)
        try:
            pending = coordinator.on_first_access(workspace)
            outcome = await pending if pending is not None else None
            return coordinator.index_for(workspace), outcome
        finally:
            await coordinator.stop()

    index, outcome = asyncio.run(_run())
    if index is None:
        message = str(outcome.error) if outcome and outcome.error else "no tag index available"
        raise click.ClickException(message)
    return index
