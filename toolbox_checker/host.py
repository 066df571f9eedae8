"""Host capabilities the checker depends on, with Python-interpreter defaults.

Each capability is a small protocol so the checker can be driven by fakes
in tests (see ``toolbox_checker.testing``).
"""

from __future__ import annotations

import fnmatch
import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Protocol, runtime_checkable

import click
import structlog

# Ensure extractors are registered before suffixes are listed.
import toolbox_checker.analyzers  # noqa: F401
from toolbox_checker.analyzers.registry import supported_suffixes
from toolbox_checker.models import RequiredProduct

log = structlog.get_logger("toolbox_checker.host")

# Directories never worth scanning
_SKIP_DIRS = {
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    "__pycache__",
    ".tox",
    ".nox",
    ".venv",
    "venv",
    "build",
    "dist",
    ".eggs",
    ".mypy_cache",
    ".pytest_cache",
    ".ipynb_checkpoints",
}


@runtime_checkable
class VersionChecker(Protocol):
    def is_supported(self) -> bool: ...


@runtime_checkable
class SourceAnalyzer(Protocol):
    def required_products(self, file_path: Path, root: Path) -> list[RequiredProduct]: ...


@runtime_checkable
class PackageQuery(Protocol):
    def is_installed(self, name: str) -> bool: ...


@runtime_checkable
class FileEnumerator(Protocol):
    def enumerate(self, root: Path, exclude: list[str]) -> list[Path]: ...


@runtime_checkable
class Console(Protocol):
    def echo(self, text: str = "") -> None: ...

    def confirm(self, message: str) -> bool: ...

    def acknowledge(self, message: str) -> None: ...


# ── Python defaults ──────────────────────────────────────────────────────


class PythonVersionChecker:
    """Gate discovery on the running interpreter's version."""

    def __init__(self, minimum: tuple[int, ...] = (3, 10), current: tuple[int, ...] | None = None):
        self.minimum = minimum
        self.current = current if current is not None else tuple(sys.version_info[:3])

    def is_supported(self) -> bool:
        return self.current >= self.minimum


class InstalledDistributions:
    def is_installed(self, name: str) -> bool:
        try:
            metadata.distribution(name)
        except metadata.PackageNotFoundError:
            return False
        return True


def _is_excluded(rel_path: Path, exclude: list[str]) -> bool:
    posix = rel_path.as_posix()
    for pattern in exclude:
        if fnmatch.fnmatch(posix, pattern) or pattern in rel_path.parts:
            return True
    return False


class SourceTreeEnumerator:
    """Recursively list analyzable source files, sorted for stable output."""

    def __init__(self, suffixes: set[str] | None = None) -> None:
        self._suffixes = suffixes

    def enumerate(self, root: Path, exclude: list[str]) -> list[Path]:
        suffixes = self._suffixes if self._suffixes is not None else supported_suffixes()
        files: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if path.suffix.lower() not in suffixes:
                    continue
                if _is_excluded(path.relative_to(root), exclude):
                    continue
                files.append(path)
        return files


def find_app_root(start: Path, anchor: str) -> Path:
    """Return the nearest directory at or above ``start`` holding ``anchor``.

    Falls back to ``start`` when no ancestor has the anchor file.
    """
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / anchor).is_file():
            return candidate
    log.debug("host.anchor_not_found", anchor=anchor, start=str(start))
    return start


class ClickConsole:
    """Interactive terminal console.

    ``err=True`` sends listings to stderr, keeping stdout for machine output.
    """

    def __init__(self, err: bool = False) -> None:
        self.err = err

    def echo(self, text: str = "") -> None:
        click.echo(text, err=self.err)

    def confirm(self, message: str) -> bool:
        # Closed stdin or Ctrl-C counts as "no"
        try:
            return click.confirm(message, default=False, err=self.err)
        except click.Abort:
            click.echo(err=True)
            return False

    def acknowledge(self, message: str) -> None:
        click.secho(message, fg="yellow", err=True)
        # pause() already ignores EOF/Ctrl-C and is a no-op without a TTY
        click.pause("Press any key to continue ...", err=True)


class AutoConsole(ClickConsole):
    """Non-interactive console that answers every confirmation with ``answer``."""

    def __init__(self, answer: bool, err: bool = False) -> None:
        super().__init__(err=err)
        self.answer = answer

    def confirm(self, message: str) -> bool:
        click.echo(f"{message} [{'yes' if self.answer else 'no'}]", err=True)
        return self.answer

    def acknowledge(self, message: str) -> None:
        click.secho(message, fg="yellow", err=True)
