"""Tests for the toolbox-check CLI — runs against the real interpreter."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from toolbox_checker.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "TOOLBOX_CHECKER_CACHE_FILE",
        "TOOLBOX_CHECKER_ANCHOR",
        "TOOLBOX_CHECKER_MIN_PYTHON",
        "TOOLBOX_CHECKER_EXCLUDE",
        "TOOLBOX_CHECKER_LOG_LEVEL",
        "TOOLBOX_CHECKER_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)


def _json_from(output: str) -> dict:
    return json.loads(output[output.index("{"):])


class TestCheckCommand:
    def test_cache_hit_all_installed(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("pytest\nclick\n")
        result = runner.invoke(main, ["check", "myapp", "--cache-file", str(cache)])
        assert result.exit_code == 0, result.output
        assert "List of required toolboxes for myapp" in result.output
        assert "All 2 required toolboxes are installed." in result.output

    def test_cache_hit_missing(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("surely-not-a-real-dist-0xdead\n")
        result = runner.invoke(main, ["check", "myapp", "--cache-file", str(cache)])
        assert result.exit_code == 1
        assert "surely-not-a-real-dist-0xdead" in result.output
        assert "SOME FUNCTIONS MAY NOT WORK PROPERLY." in result.output

    def test_json_report(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("pytest\n")
        result = runner.invoke(
            main, ["check", "myapp", "--cache-file", str(cache), "--app-version", "2.0", "--json"]
        )
        assert result.exit_code == 0, result.output
        report = _json_from(result.output)
        assert report == {
            "app_name": "myapp",
            "status": "success",
            "code": 1,
            "from_cache": True,
            "manifest": ["pytest"],
            "missing": [],
        }

    def test_declined_discovery(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        result = runner.invoke(
            main, ["check", "myapp", "--cache-file", str(cache), "--root", str(tmp_path), "--no"]
        )
        assert result.exit_code == 2
        assert not cache.exists()

    def test_interactive_decline(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        result = runner.invoke(
            main,
            ["check", "myapp", "--cache-file", str(cache), "--root", str(tmp_path)],
            input="n\n",
        )
        assert result.exit_code == 2
        assert "5-10 minutes" in result.output
        assert not cache.exists()

    def test_closed_stdin_declines(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        result = runner.invoke(
            main,
            ["check", "myapp", "--cache-file", str(cache), "--root", str(tmp_path)],
            input="",
        )
        assert result.exit_code == 2
        assert "Aborted" not in result.output
        assert not cache.exists()

    def test_discovery_with_yes(self, runner, tmp_path):
        root = tmp_path / "app"
        root.mkdir()
        (root / "main.py").write_text("import os\nimport click\nfrom . import local\n")
        (root / "myapp.py").write_text("import surely_not_installed_module\n")
        cache = tmp_path / "toolboxesRequired.txt"

        result = runner.invoke(
            main, ["check", "myapp", "--cache-file", str(cache), "--root", str(root), "--yes"]
        )

        assert result.exit_code == 0, result.output
        assert cache.read_text().splitlines() == ["click"]
        assert "Checked 2 of 2 files" in result.output

    def test_host_too_old(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("TOOLBOX_CHECKER_MIN_PYTHON", "99")
        cache = tmp_path / "toolboxesRequired.txt"
        result = runner.invoke(
            main, ["check", "myapp", "--cache-file", str(cache), "--root", str(tmp_path), "--yes"]
        )
        assert result.exit_code == 2
        assert not cache.exists()

    def test_regenerate(self, runner, tmp_path):
        root = tmp_path / "app"
        root.mkdir()
        (root / "main.py").write_text("import pytest\n")
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("Stale_Toolbox\n")

        result = runner.invoke(
            main,
            ["check", "myapp", "--cache-file", str(cache), "--root", str(root), "--regenerate", "--yes"],
        )

        assert result.exit_code == 0, result.output
        assert cache.read_text().splitlines() == ["pytest"]

    def test_yes_and_no_conflict(self, runner, tmp_path):
        result = runner.invoke(main, ["check", "myapp", "--yes", "--no"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_empty_app_name(self, runner, tmp_path):
        result = runner.invoke(main, ["check", " ", "--cache-file", str(tmp_path / "c.txt")])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_bad_env_setting(self, runner, monkeypatch):
        monkeypatch.setenv("TOOLBOX_CHECKER_LOG_FORMAT", "xml")
        result = runner.invoke(main, ["check", "myapp"])
        assert result.exit_code == 2
        assert "Error:" in result.output


class TestShowAndClear:
    def test_show(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("numpy\nscipy\n")
        result = runner.invoke(main, ["show", "--cache-file", str(cache)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["numpy", "scipy"]

    def test_show_missing(self, runner, tmp_path):
        result = runner.invoke(main, ["show", "--cache-file", str(tmp_path / "none.txt")])
        assert result.exit_code == 1

    def test_clear(self, runner, tmp_path):
        cache = tmp_path / "toolboxesRequired.txt"
        cache.write_text("numpy\n")
        result = runner.invoke(main, ["clear", "--cache-file", str(cache)])
        assert result.exit_code == 0
        assert not cache.exists()
        assert "Deleted" in result.output

    def test_env_cache_file(self, runner, tmp_path, monkeypatch):
        cache = tmp_path / "deps.txt"
        cache.write_text("numpy\n")
        monkeypatch.setenv("TOOLBOX_CHECKER_CACHE_FILE", str(cache))
        result = runner.invoke(main, ["show"])
        assert result.output.splitlines() == ["numpy"]
