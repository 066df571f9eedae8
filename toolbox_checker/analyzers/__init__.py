"""Import extractors, registered as a side effect of importing this package."""

from toolbox_checker.analyzers import (
    notebook,  # noqa: F401
    python_imports,  # noqa: F401
)
