"""Per-file progress tracking for the discovery pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileProgress:
    done: int
    total: int
    path: Path

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 1.0
        return self.done / self.total


class DiscoveryProgress:
    """Count analyzed files and notify listeners after each one."""

    def __init__(self, total: int = 0) -> None:
        self.total = total
        self.done = 0
        self.callbacks: list[Callable[[FileProgress], None]] = []

    def start(self, total: int) -> None:
        self.total = total
        self.done = 0

    def advance(self, path: Path) -> FileProgress:
        self.done += 1
        p = FileProgress(done=self.done, total=self.total, path=path)
        self._notify(p)
        return p

    def _notify(self, p: FileProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                logger.debug("Progress callback error for %s", p.path, exc_info=True)
