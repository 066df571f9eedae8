"""Shared pytest fixtures for toolbox-checker tests."""

import logging

import pytest
import structlog

from toolbox_checker.checker import ToolboxChecker
from toolbox_checker.testing import (
    FakeAnalyzer,
    FakeConsole,
    FakeEnumerator,
    FakePackages,
    FakeVersionChecker,
)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "toolboxesRequired.txt"


@pytest.fixture
def make_checker(tmp_path, cache_file):
    """Build a ToolboxChecker wired to fakes; override any capability by keyword."""

    def _make(**overrides) -> ToolboxChecker:
        kwargs = {
            "cache_file": cache_file,
            "root": tmp_path,
            "app_version": "1.2.3",
            "version_checker": FakeVersionChecker(),
            "analyzer": FakeAnalyzer(),
            "packages": FakePackages(),
            "enumerator": FakeEnumerator([]),
            "console": FakeConsole(),
        }
        kwargs.update(overrides)
        return ToolboxChecker(**kwargs)

    return _make
