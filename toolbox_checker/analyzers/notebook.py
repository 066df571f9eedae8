"""Extractor for Jupyter notebooks (code cells only)."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from toolbox_checker.analyzers.python_imports import top_level_imports
from toolbox_checker.analyzers.registry import register_extractor

log = structlog.get_logger("toolbox_checker.analyzers")

# IPython line magics, shell escapes and help queries are not Python
_NON_PYTHON_PREFIXES = ("%", "!", "?")


def _cell_source(cell: dict) -> str:
    source = cell.get("source", "")
    if isinstance(source, list):
        source = "".join(s for s in source if isinstance(s, str))
    elif not isinstance(source, str):
        return ""
    lines = [
        line
        for line in source.splitlines()
        if not line.lstrip().startswith(_NON_PYTHON_PREFIXES)
    ]
    return "\n".join(lines)


class NotebookImportExtractor:
    extractor_name = "notebook-imports"
    suffixes = [".ipynb"]

    def extract(self, file_path: Path, content: str) -> list[str]:
        try:
            notebook = json.loads(content)
        except json.JSONDecodeError:
            log.warning("analyzer.bad_notebook", path=str(file_path))
            return []

        cells = notebook.get("cells", []) if isinstance(notebook, dict) else None
        if not isinstance(cells, list):
            log.warning("analyzer.bad_notebook", path=str(file_path))
            return []

        names: list[str] = []
        for index, cell in enumerate(cells):
            if not isinstance(cell, dict):
                log.warning("analyzer.bad_notebook", path=str(file_path), cell=index)
                continue
            if cell.get("cell_type") != "code":
                continue
            try:
                found = top_level_imports(_cell_source(cell), filename=str(file_path))
            except (SyntaxError, ValueError):
                log.debug("analyzer.cell_skipped", path=str(file_path), cell=index)
                continue
            for name in found:
                if name not in names:
                    names.append(name)
        return names


register_extractor(NotebookImportExtractor())
