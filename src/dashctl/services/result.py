"""ServiceResult and ServiceError: the Outcome of every service call.

INVARIANT: All service-layer methods return ServiceResult.
Business failures (not found, conflict, disabled item) are ServiceResult
values with ``ok=False``, never exceptions. Mutation closures passed to
``DocumentStore.update`` return them unchanged to the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes carried by ServiceError.code.
VALIDATION_FAILED = "VALIDATION_FAILED"
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
DISABLED = "DISABLED"
STORE_BUSY = "STORE_BUSY"
INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_task"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
