"""VC-root lookup backed by pygit2."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from gqltags.git.errors import GitError, NotARepositoryError

logger = structlog.get_logger()


def open_repository(path: Path | str) -> pygit2.Repository:
    """Open the repository containing ``path``.

    Raises:
        NotARepositoryError: If no repository encloses ``path``.
    """
    git_dir = pygit2.discover_repository(str(path))
    if git_dir is None:
        raise NotARepositoryError(str(path))
    try:
        return pygit2.Repository(git_dir)
    except pygit2.GitError as e:
        raise NotARepositoryError(str(path)) from e


def find_vc_root(path: Path | str) -> Path | None:
    """Return the working tree root enclosing ``path``, or None.

    ``path`` may be a file or a directory; lookup starts from the nearest
    existing directory. Bare repositories have no working tree and yield None.
    """
    start = Path(path).expanduser()
    if not start.is_dir():
        start = start.parent
    while not start.exists() and start != start.parent:
        start = start.parent

    try:
        repo = open_repository(start)
    except GitError:
        return None

    if repo.workdir is None:
        logger.debug("bare_repository_ignored", path=str(start))
        return None
    return Path(repo.workdir).resolve()
