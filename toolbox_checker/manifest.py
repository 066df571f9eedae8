"""Manifest cache, one required package name per line.

The banner shown to the user is never written to the cache file, so every
line read back is a manifest entry.
"""

from __future__ import annotations

from pathlib import Path

import structlog

log = structlog.get_logger("toolbox_checker.manifest")

DEFAULT_CACHE_FILE = "toolboxesRequired.txt"

_SEPARATOR = "=" * 50


def format_banner(app_name: str, app_version: str | None = None) -> list[str]:
    """Return the three banner lines printed before a manifest listing."""
    version = app_version or "unknown"
    return [
        _SEPARATOR,
        f"List of required toolboxes for {app_name} (v{version}):",
        _SEPARATOR,
    ]


def read_manifest(path: Path) -> list[str]:
    """Read a cached manifest, one entry per non-blank line."""
    entries: list[str] = []
    with path.open("r", encoding="utf-8") as fh:
        for raw_line in fh:
            line = raw_line.rstrip("\r\n")
            if not line.strip():
                continue
            entries.append(line)
    log.debug("manifest.read", path=str(path), count=len(entries))
    return entries


def write_manifest(path: Path, entries: list[str]) -> None:
    """Create or truncate ``path`` and write one entry per line."""
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        for entry in entries:
            fh.write(f"{entry}\n")
    log.info("manifest.written", path=str(path), count=len(entries))


def delete_manifest(path: Path) -> bool:
    """Remove the cache file. Returns ``True`` if a file was deleted."""
    if not path.is_file():
        return False
    path.unlink()
    log.info("manifest.deleted", path=str(path))
    return True
