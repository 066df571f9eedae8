"""Runtime settings read from ``TOOLBOX_CHECKER_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from toolbox_checker.exceptions import ConfigError
from toolbox_checker.manifest import DEFAULT_CACHE_FILE

_ENV_PREFIX = "TOOLBOX_CHECKER_"

_LOG_FORMATS = {"console", "json"}


def parse_version(text: str) -> tuple[int, ...]:
    """Parse ``"3.10"`` into ``(3, 10)``."""
    parts = text.strip().split(".")
    try:
        version = tuple(int(p) for p in parts)
    except ValueError:
        raise ConfigError("min_python", text, "expected dotted integers like 3.10") from None
    if not version:
        raise ConfigError("min_python", text, "empty version")
    return version


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    cache_file: str = DEFAULT_CACHE_FILE
    anchor: str = "pyproject.toml"
    min_python: tuple[int, ...] = (3, 10)
    exclude: list[str] = []
    log_level: str = "WARNING"
    log_format: str = "console"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, v: str) -> str:
        v = v.lower()
        if v not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(_LOG_FORMATS)}")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        for field in ("cache_file", "anchor", "log_level", "log_format"):
            raw = env.get(_ENV_PREFIX + field.upper())
            if raw:
                values[field] = raw

        raw_min = env.get(_ENV_PREFIX + "MIN_PYTHON")
        if raw_min:
            values["min_python"] = parse_version(raw_min)

        raw_exclude = env.get(_ENV_PREFIX + "EXCLUDE")
        if raw_exclude:
            values["exclude"] = [p.strip() for p in raw_exclude.split(",") if p.strip()]

        try:
            return cls(**values)
        except ValueError as exc:
            raise ConfigError("settings", values, str(exc)) from exc
