"""Integration tests for the command-line interface.

This integration test suite runs the CLI in a subprocess and covers:
- Rendering to a directory, a zip archive and a tar.gz archive
- Reproducible archives with --timestamp and SOURCE_DATE_EPOCH
- Dry runs
- Failure policies and exit codes
- Version information
"""

import json
import os
import subprocess
import sys
import tarfile
import zipfile
from pathlib import Path

import pytest

# Skip all tests in this module unless --run-cli-tests is given
# This prevents these slow tests from running during normal test runs
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


@pytest.fixture
def temp_project(tmp_path):
    """Create a project with source files and a manifest describing a release layout."""
    (tmp_path / "docs" / "img").mkdir(parents=True)
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n")
    (tmp_path / "docs" / "notes.txt").write_text("not shipped\n")
    (tmp_path / "docs" / "img" / "logo.md").write_text("logo\n")
    (tmp_path / "LICENSE").write_text("MIT\n")

    manifest = {
        "dir": {
            "dist": {
                "dir": {
                    "empty": {"dir": {}},
                    "readme.txt": {"text": "hello"},
                    "LICENSE": {"copy": "LICENSE"},
                    "docs": {"filter": "docs", "include": ["**/*.md"]},
                }
            }
        }
    }
    (tmp_path / "layout.json").write_text(json.dumps(manifest))
    return tmp_path


def run_cli(args, cwd=None, env=None, timeout=10):
    """Run the wishtree CLI with the given arguments.

    Args:
        args: List of CLI arguments
        cwd: Working directory
        env: Extra environment variables
        timeout: Timeout in seconds

    Returns:
        subprocess.CompletedProcess instance
    """
    cmd = [sys.executable, "-m", "wishtree.cli.main"] + args
    full_env = {key: value for key, value in os.environ.items() if key != "SOURCE_DATE_EPOCH"}
    full_env.update(env or {})
    return subprocess.run(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=cwd, env=full_env, timeout=timeout
    )


def test_render_directory(temp_project):
    result = run_cli(["layout.json", "-o", "out"], cwd=temp_project)
    assert result.returncode == 0, result.stderr

    out = temp_project / "out" / "dist"
    assert (out / "empty").is_dir()
    assert (out / "readme.txt").read_text() == "hello"
    assert (out / "LICENSE").read_text() == "MIT\n"
    assert (out / "docs" / "guide.md").exists()
    assert (out / "docs" / "img" / "logo.md").exists()
    assert not (out / "docs" / "notes.txt").exists()


def test_render_zip(temp_project):
    result = run_cli(["layout.json", "-o", "dist.zip"], cwd=temp_project)
    assert result.returncode == 0, result.stderr

    with zipfile.ZipFile(temp_project / "dist.zip") as zf:
        assert zf.namelist() == [
            "dist/",
            "dist/empty/",
            "dist/readme.txt",
            "dist/LICENSE",
            "dist/docs/guide.md",
            "dist/docs/img/logo.md",
        ]


def test_render_tar_gz(temp_project):
    result = run_cli(["layout.json", "-o", "dist.tar.gz"], cwd=temp_project)
    assert result.returncode == 0, result.stderr

    with tarfile.open(temp_project / "dist.tar.gz", "r:gz") as tf:
        assert "dist/docs/img/logo.md" in tf.getnames()


def test_reproducible_archives(temp_project):
    assert run_cli(["layout.json", "-o", "a.tar.gz", "--timestamp", "0"], cwd=temp_project).returncode == 0
    env = {"SOURCE_DATE_EPOCH": "0"}
    assert run_cli(["layout.json", "-o", "b.tar.gz"], cwd=temp_project, env=env).returncode == 0

    assert Path(temp_project / "a.tar.gz").read_bytes() == Path(temp_project / "b.tar.gz").read_bytes()


def test_dry_run(temp_project):
    result = run_cli(["layout.json", "--dry-run"], cwd=temp_project)
    assert result.returncode == 0, result.stderr
    assert "readme.txt" in result.stdout
    assert "logo.md" in result.stdout
    assert not (temp_project / "dist").exists()


def test_verbose_logging(temp_project):
    result = run_cli(["layout.json", "-o", "out", "-v"], cwd=temp_project)
    assert result.returncode == 0
    assert "INFO: Rendered" in result.stderr


def test_missing_source_clean_up(temp_project):
    (temp_project / "LICENSE").unlink()
    result = run_cli(["layout.json", "-o", "dist.zip", "--on-failure", "clean-up"], cwd=temp_project)

    assert result.returncode == 1
    assert "Error: Cannot read source" in result.stderr
    assert "dist/LICENSE" in result.stderr
    assert not (temp_project / "dist.zip").exists()


def test_usage_error(temp_project):
    result = run_cli(["layout.json", "-f", "rar"], cwd=temp_project)
    assert result.returncode == 2


def test_version():
    result = run_cli(["--version"])
    assert result.returncode == 0
    assert result.stdout.startswith("wishtree ")
