"""Extractor for plain Python modules."""

from __future__ import annotations

import ast
from pathlib import Path

import structlog

from toolbox_checker.analyzers.registry import register_extractor

log = structlog.get_logger("toolbox_checker.analyzers")


def top_level_imports(source: str, filename: str = "<unknown>") -> list[str]:
    """Return absolute top-level module names imported by ``source``.

    Order follows the AST walk; relative imports are ignored. Raises
    ``SyntaxError`` when the source does not parse.
    """
    tree = ast.parse(source, filename=filename)
    names: list[str] = []
    seen: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom):
            if node.level or not node.module:
                continue
            modules = [node.module]
        else:
            continue
        for module in modules:
            top = module.split(".", 1)[0]
            if top not in seen:
                seen.add(top)
                names.append(top)
    return names


class PythonImportExtractor:
    extractor_name = "python-imports"
    suffixes = [".py"]

    def extract(self, file_path: Path, content: str) -> list[str]:
        try:
            return top_level_imports(content, filename=str(file_path))
        except (SyntaxError, ValueError) as exc:
            # ValueError: NUL bytes in the source on Python 3.10
            log.warning("analyzer.syntax_error", path=str(file_path), error=str(exc))
            return []


register_extractor(PythonImportExtractor())
