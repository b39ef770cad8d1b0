# conftest.py - shared fixtures
import pytest


@pytest.fixture
def write_file(tmp_path):
    """Create a file (and parents) under tmp_path; returns its Path."""

    def _write(rel: str, content: str):
        target = tmp_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content.encode("utf-8"))
        return target

    return _write


@pytest.fixture
def read_file(tmp_path):
    def _read(rel: str) -> str:
        return (tmp_path / rel).read_bytes().decode("utf-8")

    return _read
