"""Shared pytest fixtures for envbind tests."""

import pytest

from envbind.config import collector


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def filenames(monkeypatch):
    """Restore the module-level filename list after the test."""
    original = list(collector.FILENAMES)
    yield collector.FILENAMES
    collector.FILENAMES[:] = original


@pytest.fixture
def write_env(workdir):
    """Write an env file into the working directory and return its path."""
    def _write(name, content):
        path = workdir / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
