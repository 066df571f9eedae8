"""Import extractors, looked up by source file suffix."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ImportExtractor(Protocol):
    """Pulls top-level module names out of one kind of source file."""

    extractor_name: str
    suffixes: list[str]

    def extract(self, file_path: Path, content: str) -> list[str]: ...


EXTRACTOR_REGISTRY: dict[str, ImportExtractor] = {}


def register_extractor(extractor: ImportExtractor) -> None:
    """Make ``extractor`` available for its suffixes; a later one with the same name wins."""
    EXTRACTOR_REGISTRY[extractor.extractor_name] = extractor


def extractor_for(file_path: Path) -> ImportExtractor | None:
    suffix = file_path.suffix.lower()
    for extractor in EXTRACTOR_REGISTRY.values():
        if suffix in extractor.suffixes:
            return extractor
    return None


def supported_suffixes() -> set[str]:
    return {s for e in EXTRACTOR_REGISTRY.values() for s in e.suffixes}
