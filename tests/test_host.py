"""Tests for the Python-host capability defaults."""

from __future__ import annotations

from pathlib import Path

import click

from toolbox_checker.host import (
    AutoConsole,
    ClickConsole,
    Console,
    InstalledDistributions,
    PythonVersionChecker,
    SourceTreeEnumerator,
    find_app_root,
)
from toolbox_checker.testing import FakeConsole


def _touch(root: Path, rel: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


class TestPythonVersionChecker:
    def test_at_baseline(self):
        assert PythonVersionChecker((3, 10), current=(3, 10, 0)).is_supported()

    def test_above_baseline(self):
        assert PythonVersionChecker((3, 10), current=(3, 12, 4)).is_supported()

    def test_below_baseline(self):
        assert not PythonVersionChecker((3, 10), current=(3, 9, 18)).is_supported()

    def test_running_interpreter(self):
        assert PythonVersionChecker((3, 0)).is_supported()
        assert not PythonVersionChecker((99,)).is_supported()


class TestInstalledDistributions:
    def test_installed(self):
        assert InstalledDistributions().is_installed("pytest")

    def test_not_installed(self):
        assert not InstalledDistributions().is_installed("surely-not-a-real-dist-0xdead")


class TestSourceTreeEnumerator:
    def test_lists_source_files_sorted(self, tmp_path):
        for rel in ("b.py", "a.py", "pkg/c.py", "nb.ipynb", "README.md", "setup.cfg"):
            _touch(tmp_path, rel)
        files = SourceTreeEnumerator().enumerate(tmp_path, [])
        assert [f.relative_to(tmp_path).as_posix() for f in files] == [
            "a.py",
            "b.py",
            "nb.ipynb",
            "pkg/c.py",
        ]

    def test_skips_tool_directories(self, tmp_path):
        for rel in ("app.py", ".venv/lib/site.py", "__pycache__/x.py", ".git/hook.py"):
            _touch(tmp_path, rel)
        files = SourceTreeEnumerator().enumerate(tmp_path, [])
        assert [f.name for f in files] == ["app.py"]

    def test_exclusion_by_glob_and_directory(self, tmp_path):
        for rel in ("app.py", "tests/test_app.py", "docs/conf.py", "gen_tool.py"):
            _touch(tmp_path, rel)
        files = SourceTreeEnumerator().enumerate(tmp_path, ["tests", "docs/*", "gen_*.py"])
        assert [f.name for f in files] == ["app.py"]

    def test_custom_suffixes(self, tmp_path):
        _touch(tmp_path, "a.py")
        _touch(tmp_path, "b.pyx")
        files = SourceTreeEnumerator(suffixes={".pyx"}).enumerate(tmp_path, [])
        assert [f.name for f in files] == ["b.pyx"]


class TestFindAppRoot:
    def test_walks_up_to_anchor(self, tmp_path):
        _touch(tmp_path, "pyproject.toml")
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert find_app_root(nested, "pyproject.toml") == tmp_path.resolve()

    def test_falls_back_to_start(self, tmp_path):
        start = tmp_path / "somewhere"
        start.mkdir()
        assert find_app_root(start, "no-such-anchor.cfg") == start.resolve()


class TestConsoles:
    def test_protocol_conformance(self):
        assert isinstance(ClickConsole(), Console)
        assert isinstance(AutoConsole(True), Console)
        assert isinstance(FakeConsole(), Console)

    def test_auto_console_answers(self, capsys):
        assert AutoConsole(True).confirm("Proceed?") is True
        assert AutoConsole(False).confirm("Proceed?") is False
        assert "Proceed? [no]" in capsys.readouterr().err

    def test_click_console_closed_stdin_is_no(self, monkeypatch):
        def _abort(*args, **kwargs):
            raise click.Abort()

        monkeypatch.setattr(click, "confirm", _abort)
        assert ClickConsole().confirm("Proceed?") is False
