"""toolbox-checker: find, cache and verify the packages an application needs."""

__version__ = "0.1.0"

from toolbox_checker.checker import ToolboxChecker, check_toolboxes
from toolbox_checker.models import (
    CheckResult,
    CheckStatus,
    DiscoveryResult,
    InstalledCheck,
    RequiredProduct,
)

__all__ = [
    "CheckResult",
    "CheckStatus",
    "DiscoveryResult",
    "InstalledCheck",
    "RequiredProduct",
    "ToolboxChecker",
    "check_toolboxes",
]
