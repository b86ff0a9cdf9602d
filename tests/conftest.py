import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'grove' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from grove.core.logging import reset_logging_for_tests

_GROVE_ENV_KEYS = ("GROVE_PLAIN", "GROVE_DEBUG", "GROVE_CONFIG")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging_for_tests()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the user config dir at a scratch directory.

    Settings discovery never sees the developer's real files, and no grove
    environment overrides leak in from the outer shell.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    for key in _GROVE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory that is also the current working directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project
