"""Custom exceptions for toolbox-checker."""


class ToolboxCheckerError(Exception):
    """Base exception for all toolbox-checker errors."""


class ConfigError(ToolboxCheckerError):
    """Raised when a setting or CLI argument has an unusable value."""

    def __init__(self, name: str, value: object, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")


class AnalyzerNotFoundError(ToolboxCheckerError):
    """Raised when no registered analyzer handles a source file suffix."""
