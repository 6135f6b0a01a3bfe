"""Tests for VC-root lookup."""

from __future__ import annotations

from pathlib import Path

import pygit2
import pytest

from gqltags.git import NotARepositoryError, find_vc_root, open_repository


class TestFindVcRoot:
    """find_vc_root tests."""

    def test_file_in_subdirectory_resolves_to_repo_root(self, git_repo: Path) -> None:
        nested = git_repo / "schema" / "types"
        nested.mkdir(parents=True)
        schema = nested / "user.graphqls"
        schema.write_text("type User { id: ID! }\n")

        assert find_vc_root(schema) == git_repo

    def test_directory_resolves_to_repo_root(self, git_repo: Path) -> None:
        assert find_vc_root(git_repo) == git_repo

    def test_unsaved_file_uses_nearest_existing_directory(self, git_repo: Path) -> None:
        assert find_vc_root(git_repo / "new" / "dir" / "draft.graphqls") == git_repo

    def test_outside_repository_returns_none(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        assert find_vc_root(plain / "a.graphqls") is None

    def test_bare_repository_returns_none(self, tmp_path: Path) -> None:
        bare = tmp_path / "bare.git"
        pygit2.init_repository(str(bare), bare=True)

        assert find_vc_root(bare) is None


class TestOpenRepository:
    """open_repository tests."""

    def test_opens_enclosing_repository(self, git_repo: Path) -> None:
        repo = open_repository(git_repo)
        assert Path(repo.workdir).resolve() == git_repo

    def test_raises_outside_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        with pytest.raises(NotARepositoryError) as exc_info:
            open_repository(plain)
        assert exc_info.value.path == str(plain)
