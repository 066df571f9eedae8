"""Data models for the toolbox checker."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

ProductKind = Literal["platform", "distribution"]


class CheckStatus(enum.Enum):
    """Terminal states of a check run."""

    SUCCESS = "success"
    INCOMPLETE = "incomplete"
    ABORTED = "aborted"

    @property
    def code(self) -> int:
        """Legacy numeric code: 1 all present, 0 some missing, -1 aborted."""
        return _LEGACY_CODES[self]


_LEGACY_CODES = {
    CheckStatus.SUCCESS: 1,
    CheckStatus.INCOMPLETE: 0,
    CheckStatus.ABORTED: -1,
}


@dataclass(frozen=True)
class RequiredProduct:
    """A capability a single source file was found to reference."""

    name: str
    kind: ProductKind = "distribution"


@dataclass
class DiscoveryResult:
    """Per-file analysis output folded into an ordered manifest."""

    by_file: dict[Path, list[RequiredProduct]] = field(default_factory=dict)
    manifest: list[str] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


@dataclass
class InstalledCheck:
    all_present: bool
    missing: list[str] = field(default_factory=list)


@dataclass
class CheckResult:
    """Outcome of ``ToolboxChecker.check``."""

    status: CheckStatus
    manifest: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    from_cache: bool = False

    @property
    def code(self) -> int:
        return self.status.code
