"""Test configuration and fixtures for wishtree."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture(autouse=True)
def no_source_date_epoch(monkeypatch):
    """Keep the caller's SOURCE_DATE_EPOCH from leaking into timestamp resolution."""
    monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)


@pytest.fixture
def doc_source(tmp_path):
    """Create a source directory holding doc/a.md, doc/b.txt and doc/sub/c.md."""
    source = tmp_path / "source"
    (source / "doc" / "sub").mkdir(parents=True)
    (source / "doc" / "a.md").write_text("# A")
    (source / "doc" / "b.txt").write_text("B")
    (source / "doc" / "sub" / "c.md").write_text("# C")
    return source


@pytest.fixture
def payload_dir(tmp_path):
    """Create a directory holding top.txt, sub/inner.md and an empty directory named empty."""
    source = tmp_path / "payload"
    (source / "sub").mkdir(parents=True)
    (source / "empty").mkdir()
    (source / "top.txt").write_text("top")
    (source / "sub" / "inner.md").write_text("# Inner")
    return source
