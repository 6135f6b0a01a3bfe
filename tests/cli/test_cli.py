"""Tests for the gqltags command line."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from gqltags.cli.main import cli

runner = CliRunner()


class TestBuildCommand:
    """gqltags build tests."""

    def test_given_schema_dir_when_build_then_tag_file_written(self, schema_dir: Path) -> None:
        result = runner.invoke(cli, ["build", str(schema_dir)])

        assert result.exit_code == 0, result.output
        assert str(schema_dir / ".TAGS") in result.output
        assert (schema_dir / ".TAGS").read_bytes().startswith(b"\x0c\na.graphqls,")

    def test_given_git_repo_when_build_from_subdir_then_written_at_root(
        self, git_repo: Path
    ) -> None:
        sub = git_repo / "graph"
        sub.mkdir()
        (sub / "s.graphqls").write_text("scalar Date\n")

        result = runner.invoke(cli, ["build", str(sub / "s.graphqls")])

        assert result.exit_code == 0, result.output
        assert (git_repo / ".TAGS").is_file()
        assert b"graph/s.graphqls," in (git_repo / ".TAGS").read_bytes()

    def test_given_repo_config_when_build_then_tag_file_name_honored(self, git_repo: Path) -> None:
        (git_repo / ".gqltags.yaml").write_text("tags:\n  tag_file_name: SCHEMA_TAGS\n")
        (git_repo / "s.graphqls").write_text("scalar Date\n")

        result = runner.invoke(cli, ["build", str(git_repo)])

        assert result.exit_code == 0, result.output
        assert (git_repo / "SCHEMA_TAGS").is_file()

    def test_given_invalid_config_when_build_then_error(self, git_repo: Path) -> None:
        (git_repo / ".gqltags.yaml").write_text("tags:\n  extensions: []\n")

        result = runner.invoke(cli, ["build", str(git_repo)])

        assert result.exit_code != 0
        assert "tags" in result.output


class TestQueryCommands:
    """lookup, list and roots tests."""

    def test_lookup_builds_on_first_access(self, schema_dir: Path) -> None:
        result = runner.invoke(cli, ["lookup", "User", str(schema_dir)])

        assert result.exit_code == 0, result.output
        assert f"{schema_dir / 'a.graphqls'}:1: type User" in result.output
        assert (schema_dir / ".TAGS").is_file()

    def test_lookup_unknown_name_fails(self, schema_dir: Path) -> None:
        result = runner.invoke(cli, ["lookup", "Nope", str(schema_dir)])

        assert result.exit_code == 1
        assert "Nope" in result.output

    def test_list_groups_by_kind(self, schema_dir: Path) -> None:
        result = runner.invoke(cli, ["list", str(schema_dir)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines.index("Object Type:") < lines.index("Enum:")

    def test_list_filters_by_kind(self, schema_dir: Path) -> None:
        result = runner.invoke(cli, ["list", str(schema_dir), "--kind", "enum"])

        assert result.exit_code == 0, result.output
        assert "Enum:" in result.output
        assert "User" not in result.output

    def test_roots_prints_configured_entry(self, git_repo: Path, tmp_path: Path) -> None:
        shared = (tmp_path / "shared").resolve()
        shared.mkdir()
        (git_repo / ".gqltags.yaml").write_text(
            f"tags:\n  search_paths:\n    {git_repo}: [{shared}]\n"
        )

        result = runner.invoke(cli, ["roots", str(git_repo)])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == str(shared)
