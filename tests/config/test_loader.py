"""Tests for config/loader.py module."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from gqltags.config.loader import REPO_CONFIG_NAME, _deep_merge, _load_yaml, load_config
from gqltags.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("tags:\n  extensions:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self) -> None:
        base = {"tags": {"tag_file_name": "TAGS", "extensions": [".graphql"]}}
        override = {"tags": {"tag_file_name": ".TAGS"}}

        assert _deep_merge(base, override) == {
            "tags": {"tag_file_name": ".TAGS", "extensions": [".graphql"]}
        }

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_files(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.tags.extensions == (".graphqls",)
        assert config.tags.tag_file_name == ".TAGS"
        assert config.logging.level == "INFO"

    def test_reads_repo_yaml(self, tmp_path: Path) -> None:
        schemas = tmp_path / "schemas"
        (tmp_path / REPO_CONFIG_NAME).write_text(
            "tags:\n"
            "  extensions: [.graphql, .graphqls]\n"
            "  search_paths:\n"
            f"    {tmp_path}: [{schemas}]\n"
        )

        config = load_config(tmp_path)

        assert config.tags.extensions == (".graphql", ".graphqls")
        assert config.tags.search_paths == {str(tmp_path.resolve()): (str(schemas.resolve()),)}

    def test_repo_yaml_overrides_global(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("tags:\n  tag_file_name: TAGS\n  extensions: [.gql]\n")
        monkeypatch.setattr("gqltags.config.loader.GLOBAL_CONFIG_PATH", global_file)
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / REPO_CONFIG_NAME).write_text("tags:\n  tag_file_name: .tags\n")

        config = load_config(repo)

        assert config.tags.tag_file_name == ".tags"
        assert config.tags.extensions == (".gql",)

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: INFO\n")
        monkeypatch.setenv("GQLTAGS__LOGGING__LEVEL", "DEBUG")

        assert load_config(tmp_path).logging.level == "DEBUG"

    def test_kwargs_override_everything(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GQLTAGS__REBUILD__MAX_WORKERS", "3")

        config = load_config(tmp_path, rebuild={"max_workers": 5})

        assert config.rebuild.max_workers == 5

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("tags:\n  tag_file_name: SCHEMA_TAGS\n")

        config = load_config(None, config_file=config_file)

        assert config.tags.tag_file_name == "SCHEMA_TAGS"

    def test_missing_explicit_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(None, config_file=tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_value_names_field(self, tmp_path: Path) -> None:
        (tmp_path / REPO_CONFIG_NAME).write_text("rebuild:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"].startswith("rebuild")
