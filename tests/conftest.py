import pytest

from again import config
from again.registry import Registry


@pytest.fixture
def again_home(monkeypatch, tmp_path):
    """Isolated config directory per test.

    Points AGAIN_HOME at a fresh tmp dir so aliases.yaml, scopes.yaml and
    config.yaml never touch the real per-user location.
    """
    home = tmp_path / "again-home"
    monkeypatch.setenv("AGAIN_HOME", str(home))
    config._clear_cache()

    yield home

    config._clear_cache()


@pytest.fixture
def registry():
    return Registry()


@pytest.fixture
def project(tmp_path):
    """A /proj-like tree with a nested sub directory and an unrelated sibling."""
    proj = tmp_path / "proj"
    (proj / "sub").mkdir(parents=True)
    (tmp_path / "elsewhere").mkdir()
    return proj
