"""Static dependency analysis of a single source file.

Imports are mapped to installed distributions. An import whose module is
not provided by any installed distribution cannot be attributed and is
dropped, so a manifest is only as complete as the environment it was
generated in.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from importlib import metadata
from pathlib import Path

import structlog

# Ensure extractors are registered before any analysis runs.
import toolbox_checker.analyzers  # noqa: F401
from toolbox_checker.analyzers.registry import extractor_for
from toolbox_checker.exceptions import AnalyzerNotFoundError
from toolbox_checker.models import RequiredProduct

log = structlog.get_logger("toolbox_checker.analysis")

PLATFORM_NAME = "Python"

_PLATFORM = RequiredProduct(PLATFORM_NAME, "platform")


class ImportResolver:
    """Map top-level module names to the products that provide them."""

    def __init__(
        self,
        distributions: Mapping[str, list[str]] | None = None,
        stdlib: frozenset[str] | None = None,
    ) -> None:
        self._distributions = distributions
        self._stdlib = stdlib if stdlib is not None else frozenset(sys.stdlib_module_names)

    @property
    def distributions(self) -> Mapping[str, list[str]]:
        if self._distributions is None:
            self._distributions = metadata.packages_distributions()
        return self._distributions

    def resolve(self, modules: list[str], ignore: frozenset[str] = frozenset()) -> list[RequiredProduct]:
        products: list[RequiredProduct] = []
        for module in modules:
            if module in ignore:
                continue
            if module in self._stdlib or module in sys.builtin_module_names:
                product = _PLATFORM
                if product not in products:
                    products.append(product)
                continue
            dists = self.distributions.get(module)
            if not dists:
                log.debug("analysis.unresolved", module=module)
                continue
            for dist in dists:
                product = RequiredProduct(dist, "distribution")
                if product not in products:
                    products.append(product)
        return products


def local_modules(root: Path) -> frozenset[str]:
    """Top-level importable names that live inside ``root`` itself."""
    names: set[str] = set()
    for base in (root, root / "src"):
        if not base.is_dir():
            continue
        for child in base.iterdir():
            if child.is_dir() and (child / "__init__.py").is_file():
                names.add(child.name)
            elif child.is_file() and child.suffix == ".py":
                names.add(child.stem)
    return frozenset(names)


class SourceTreeAnalyzer:
    """Report the products a source file under an application root requires."""

    def __init__(self, resolver: ImportResolver | None = None) -> None:
        self._resolver = resolver or ImportResolver()
        self._local: dict[Path, frozenset[str]] = {}

    def required_products(self, file_path: Path, root: Path) -> list[RequiredProduct]:
        extractor = extractor_for(file_path)
        if extractor is None:
            raise AnalyzerNotFoundError(f"No analyzer for {file_path.suffix!r} files: {file_path}")

        if root not in self._local:
            self._local[root] = local_modules(root)

        content = file_path.read_text(encoding="utf-8", errors="replace")
        modules = extractor.extract(file_path, content)
        return self._resolver.resolve(modules, ignore=self._local[root])
