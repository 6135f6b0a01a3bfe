"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of gqltags modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("gqltags"):
        del sys.modules[module_name]


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create an empty git repository and return its resolved root."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    pygit2.init_repository(str(repo_path))
    return repo_path.resolve()


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Directory holding a.graphqls (type User) and b.graphqls (enum Role)."""
    root = (tmp_path / "schema").resolve()
    root.mkdir()
    (root / "a.graphqls").write_text("type User { id: ID! }\n")
    (root / "b.graphqls").write_text("enum Role { ADMIN USER }\n")
    return root


@pytest.fixture(autouse=True)
def _isolate_global_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Never read the developer's ~/.config/gqltags/config.yaml."""
    missing = tmp_path_factory.mktemp("home") / "config.yaml"
    monkeypatch.setattr("gqltags.config.loader.GLOBAL_CONFIG_PATH", missing)
