"""Tests for the pmv command line."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import PNG_BYTES, make_tree
from typer.testing import CliRunner

from pmv import __version__
from pmv.cli import app
from pmv.config import RenameConfig
from pmv.utils.remote import RemoteRenameResult


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


class TestRenameCommand:
    """Tests for the main command."""

    def test_renames_and_rewrites(self, runner: CliRunner, tmp_path: Path) -> None:
        make_tree(tmp_path / "foo", {"a.txt": "hello foo world", "logo.png": PNG_BYTES})

        result = runner.invoke(app, ["foo", "bar", "--no-remote"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Moving from" in result.output
        assert "renaming:" in result.output
        assert (tmp_path / "bar" / "a.txt").read_text() == "hello bar world"
        assert (tmp_path / "bar" / "logo.png").read_bytes() == PNG_BYTES

    def test_collision_exits_non_zero(self, runner: CliRunner, tmp_path: Path) -> None:
        make_tree(tmp_path / "foo", {"a.txt": "hello foo world"})
        (tmp_path / "bar").mkdir()

        result = runner.invoke(app, ["foo", "bar", "--no-remote"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (tmp_path / "foo" / "a.txt").read_text() == "hello foo world"

    def test_missing_path_exits_non_zero(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["does-not-exist", "bar"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_remote_failure_still_succeeds(self, runner: CliRunner, tmp_path: Path) -> None:
        make_tree(tmp_path / "foo", {"a.txt": "foo"})
        failure = RemoteRenameResult(success=False, error="gh command not found")

        with patch("pmv.core.pipeline.rename_remote_repo", return_value=failure):
            result = runner.invoke(app, ["foo", "bar"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Error renaming GitHub repo" in result.output

    def test_flags_build_config(self, runner: CliRunner, tmp_path: Path) -> None:
        make_tree(tmp_path / "foo", {"a.txt": "foo"})

        with patch("pmv.cli.run_rename") as run:
            result = runner.invoke(
                app,
                ["foo", "bar", "--threads", "1", "--no-remote", "--no-ignore", "--hidden", "--dry-run"],
                catch_exceptions=False,
            )

        assert result.exit_code == 0
        config = run.call_args.kwargs["config"]
        assert config == RenameConfig(
            threads=1,
            remote=False,
            respect_ignore_files=False,
            hidden=False,
            dry_run=True,
        )

    def test_zero_threads_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        make_tree(tmp_path / "foo", {"a.txt": "foo"})
        result = runner.invoke(app, ["foo", "bar", "--threads", "0"])
        assert result.exit_code != 0
        assert (tmp_path / "foo").is_dir()

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "PROJECT_PATH" in result.output
