"""ToolboxChecker: find, cache and verify an application's required packages."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from toolbox_checker.analysis import PLATFORM_NAME, SourceTreeAnalyzer
from toolbox_checker.core.config import Settings
from toolbox_checker.core.logging import setup_logging
from toolbox_checker.host import (
    ClickConsole,
    Console,
    FileEnumerator,
    InstalledDistributions,
    PackageQuery,
    PythonVersionChecker,
    SourceAnalyzer,
    SourceTreeEnumerator,
    VersionChecker,
    find_app_root,
)
from toolbox_checker.manifest import (
    DEFAULT_CACHE_FILE,
    delete_manifest,
    format_banner,
    read_manifest,
    write_manifest,
)
from toolbox_checker.models import (
    CheckResult,
    CheckStatus,
    DiscoveryResult,
    InstalledCheck,
)
from toolbox_checker.progress import DiscoveryProgress

log = structlog.get_logger("toolbox_checker.checker")

REGENERATE = "regenerate"

# Accepted spellings for each recognized option
_OPTION_ALIASES = {
    "regenerate": REGENERATE,
    "regeneratelist": REGENERATE,
}

DISCOVERY_PROMPT = (
    "Unable to find the required toolbox list for this environment. "
    "Do you want to run toolbox discovery to determine which are required? "
    "(It takes 5-10 minutes)."
)

ACCURACY_PROMPT = (
    "NOTE: Generating a new list of required toolboxes will miss toolboxes that are "
    "used by your code unless they are already installed on your computer. "
    "Please make sure that this operation is performed in an environment with "
    "a full (or nearly full) set of toolboxes installed. Do you want to proceed?"
)

MISSING_HEADER = "WARNING: The following toolboxes have not been installed:"
MISSING_NOTICE = "SOME FUNCTIONS MAY NOT WORK PROPERLY."


def normalize_options(options: Iterable[str] | str | None) -> set[str]:
    """Map raw option tokens to recognized options; unknown tokens are dropped."""
    if options is None:
        return set()
    if isinstance(options, str):
        options = [options]
    recognized: set[str] = set()
    for token in options:
        key = token.strip().lower()
        if not key:
            continue
        option = _OPTION_ALIASES.get(key)
        if option is None:
            log.warning("checker.unknown_option", option=token)
            continue
        recognized.add(option)
    return recognized


def format_missing_warning(missing: list[str]) -> str:
    lines = [MISSING_HEADER, ""]
    lines.extend(missing)
    lines.extend(["", MISSING_NOTICE])
    return "\n".join(lines)


class ToolboxChecker:
    """Load-or-discover the manifest of required packages, then verify it.

    Every host interaction goes through an injected capability, so the
    checker never touches the interpreter, the terminal or the process
    working directory directly. Library callers should run
    ``toolbox_checker.core.logging.setup_logging`` first; without it structlog
    prints every event to stdout.
    """

    def __init__(
        self,
        *,
        cache_file: Path | str = DEFAULT_CACHE_FILE,
        root: Path | None = None,
        anchor: str = "pyproject.toml",
        exclude: list[str] | None = None,
        app_version: str | None = None,
        version_checker: VersionChecker | None = None,
        analyzer: SourceAnalyzer | None = None,
        packages: PackageQuery | None = None,
        enumerator: FileEnumerator | None = None,
        console: Console | None = None,
        progress: DiscoveryProgress | None = None,
    ) -> None:
        self.cache_file = Path(cache_file)
        self.root = root
        self.anchor = anchor
        self.exclude = list(exclude or [])
        self.app_version = app_version
        self.version_checker = version_checker or PythonVersionChecker()
        self.analyzer = analyzer or SourceTreeAnalyzer()
        self.packages = packages or InstalledDistributions()
        self.enumerator = enumerator or SourceTreeEnumerator()
        self.console = console or ClickConsole()
        self.progress = progress or DiscoveryProgress()

    # ── entry point ──────────────────────────────────────────────────────

    def check(
        self,
        app_name: str | None = None,
        options: Iterable[str] | str | None = None,
    ) -> CheckResult | None:
        """Return whether every package the application needs is installed.

        ``app_name=None`` is a no-op and returns ``None``.
        """
        if app_name is None:
            return None
        if not app_name.strip():
            raise ValueError("app_name must be a non-empty string")

        opts = normalize_options(options)
        if REGENERATE in opts:
            delete_manifest(self.cache_file)

        banner = format_banner(app_name, self.app_version)

        if self.cache_file.is_file():
            manifest = read_manifest(self.cache_file)
            log.info("checker.cache_hit", path=str(self.cache_file), count=len(manifest))
            self._echo_listing(banner, manifest)
            return self._finish(manifest, from_cache=True)

        if not self.version_checker.is_supported():
            log.warning("checker.aborted", reason="host_version")
            return CheckResult(status=CheckStatus.ABORTED)

        if not self.console.confirm(DISCOVERY_PROMPT):
            log.info("checker.aborted", reason="declined")
            return CheckResult(status=CheckStatus.ABORTED)
        if not self.console.confirm(ACCURACY_PROMPT):
            log.info("checker.aborted", reason="declined_caveat")
            return CheckResult(status=CheckStatus.ABORTED)

        result = self.discover(app_name)
        write_manifest(self.cache_file, result.manifest)
        self._echo_listing(banner, result.manifest)
        return self._finish(result.manifest, from_cache=False)

    # ── discovery ────────────────────────────────────────────────────────

    def resolve_root(self) -> Path:
        if self.root is not None:
            return Path(self.root).resolve()
        return find_app_root(Path.cwd(), self.anchor)

    def discover(self, app_name: str) -> DiscoveryResult:
        """Analyze every source file under the application root."""
        root = self.resolve_root()
        files = self.enumerator.enumerate(root, self.exclude)
        log.info("discovery.start", root=str(root), files=len(files))

        result = DiscoveryResult()
        self.progress.start(len(files))
        for path in files:
            # The entry module itself is accounted for out of band.
            if path.stem == app_name:
                result.skipped.append(path)
                self.progress.advance(path)
                continue

            products = self.analyzer.required_products(path, root)
            result.by_file[path] = products
            for product in products:
                if product.name.lower() == PLATFORM_NAME.lower():
                    continue
                if product.name not in result.manifest:
                    log.debug("discovery.added", name=product.name, path=str(path))
                    result.manifest.append(product.name)
            self.progress.advance(path)

        log.info("discovery.done", required=len(result.manifest), skipped=len(result.skipped))
        return result

    # ── installed check ──────────────────────────────────────────────────

    def installed_check(self, manifest: list[str]) -> InstalledCheck:
        missing = [name for name in manifest if not self.packages.is_installed(name)]
        if not missing:
            return InstalledCheck(all_present=True)

        log.warning("installed.missing", missing=missing)
        self.console.acknowledge(format_missing_warning(missing))
        return InstalledCheck(all_present=False, missing=missing)

    # ── internals ────────────────────────────────────────────────────────

    def _echo_listing(self, banner: list[str], manifest: list[str]) -> None:
        for line in banner:
            self.console.echo(line)
        for name in manifest:
            self.console.echo(name)
        self.console.echo()

    def _finish(self, manifest: list[str], *, from_cache: bool) -> CheckResult:
        installed = self.installed_check(manifest)
        status = CheckStatus.SUCCESS if installed.all_present else CheckStatus.INCOMPLETE
        return CheckResult(
            status=status,
            manifest=manifest,
            missing=installed.missing,
            from_cache=from_cache,
        )


def check_toolboxes(app_name: str | None = None, *options: str) -> CheckResult | None:
    """Convenience wrapper using the interactive defaults.

    Configures logging from ``TOOLBOX_CHECKER_*`` settings unless the caller
    already has, so log events go to stderr instead of structlog's stdout
    default.
    """
    if not structlog.is_configured():
        settings = Settings.from_env()
        setup_logging(settings.log_level, settings.log_format)
    return ToolboxChecker().check(app_name, options)
