import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so tests can import the module when run from pytest
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import medmeta  # noqa: E402


@pytest.fixture(autouse=True)
def reset_medmeta_logger():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    for handler in list(medmeta.log.handlers):
        medmeta.log.removeHandler(handler)
        handler.close()
    medmeta.log.setLevel(0)
    medmeta.log.propagate = True


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no stray config.json is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
