"""Result types returned by :class:`~notebuild.services.build.BuildService`.

Expected failures (no matching notes, untitled notes, unwritable output)
come back as ``ok=False`` results with an :class:`ErrorCode`, never as
exceptions. The CLI maps ``ok`` to the exit status.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    NO_DOCUMENTS = "NO_DOCUMENTS"
    MISSING_TITLE = "MISSING_TITLE"
    WRITE_FAILED = "WRITE_FAILED"
    NOT_FOUND = "NOT_FOUND"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one build or preview.

    Attributes:
        ok: Whether the operation succeeded.
        op: ``"build_notes"`` or ``"preview_links"``.
        data: Operation payload, empty on failure.
        warnings: Problems that did not stop the operation.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
