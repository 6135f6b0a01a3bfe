"""Version-control lookups."""

from gqltags.git.access import find_vc_root, open_repository
from gqltags.git.errors import GitError, NotARepositoryError

__all__ = [
    "find_vc_root",
    "open_repository",
    "GitError",
    "NotARepositoryError",
]
