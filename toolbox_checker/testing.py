"""Test doubles for toolbox_checker host capabilities.

Usage::

    from toolbox_checker.testing import FakeAnalyzer, FakeConsole, FakePackages

    console = FakeConsole(answers=[True, True])
    checker = ToolboxChecker(console=console, packages=FakePackages({"numpy"}), ...)
"""

from __future__ import annotations

from pathlib import Path

from toolbox_checker.models import RequiredProduct


class FakeVersionChecker:
    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.calls = 0

    def is_supported(self) -> bool:
        self.calls += 1
        return self.supported


class FakePackages:
    """Installed-package query backed by a fixed set of names."""

    def __init__(self, installed: set[str] | None = None) -> None:
        self.installed = set(installed or ())
        self.queries: list[str] = []

    def is_installed(self, name: str) -> bool:
        self.queries.append(name)
        return name in self.installed


class FakeAnalyzer:
    """Analyzer returning canned products keyed by file name.

    Parameters
    ----------
    products:
        Maps a file's base name to the ``(name, kind)`` pairs it "requires".
        Unknown files require nothing.
    """

    def __init__(self, products: dict[str, list[tuple[str, str]]] | None = None) -> None:
        self.products = products or {}
        self.calls: list[Path] = []

    def required_products(self, file_path: Path, root: Path) -> list[RequiredProduct]:
        self.calls.append(file_path)
        return [RequiredProduct(name, kind) for name, kind in self.products.get(file_path.name, [])]


class FakeEnumerator:
    def __init__(self, names: list[str]) -> None:
        self.names = names
        self.calls: list[tuple[Path, list[str]]] = []

    def enumerate(self, root: Path, exclude: list[str]) -> list[Path]:
        self.calls.append((root, list(exclude)))
        return [root / name for name in self.names]


class FakeConsole:
    """Records output; answers confirmations from a queue (default: yes)."""

    def __init__(self, answers: list[bool] | None = None) -> None:
        self.answers = list(answers) if answers is not None else []
        self.lines: list[str] = []
        self.prompts: list[str] = []
        self.acknowledged: list[str] = []

    def echo(self, text: str = "") -> None:
        self.lines.append(text)

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        if self.answers:
            return self.answers.pop(0)
        return True

    def acknowledge(self, message: str) -> None:
        self.acknowledged.append(message)
