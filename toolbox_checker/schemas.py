"""JSON report schema for ``toolbox-check check --json``."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from toolbox_checker.models import CheckResult


class CheckReport(BaseModel):
    app_name: str
    status: Literal["success", "incomplete", "aborted"]
    code: int
    from_cache: bool
    manifest: list[str]
    missing: list[str]

    @classmethod
    def from_result(cls, app_name: str, result: CheckResult) -> CheckReport:
        return cls(
            app_name=app_name,
            status=result.status.value,
            code=result.code,
            from_cache=result.from_cache,
            manifest=result.manifest,
            missing=result.missing,
        )
