"""
Custom exception hierarchy for the scoring service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Missing metric data is NOT an error anywhere in this package: absent
inputs contribute nothing and are simply left out of the explanation.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class ScoringServiceError(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(ScoringServiceError):
    """Threshold resolution is ambiguous or incomplete for an evaluation date."""
    http_status = status.HTTP_409_CONFLICT
    code = "CONFIGURATION_ERROR"

    @classmethod
    def ambiguous_override(
        cls, employee_id: Optional[int], as_of: date, override_ids: list[Any]
    ) -> "ConfigurationError":
        return cls(
            message=(
                f"{len(override_ids)} threshold overrides are active for employee "
                f"{employee_id} on {as_of}; at most one is allowed."
            ),
            details={
                "employee_id": employee_id,
                "as_of": str(as_of),
                "override_ids": [str(i) for i in override_ids],
            },
        )

    @classmethod
    def missing_system_default(cls, missing_fields: list[str] | None = None) -> "ConfigurationError":
        details: dict[str, Any] = {}
        if missing_fields:
            details["missing_fields"] = missing_fields
        return cls(
            message="No complete system-default threshold configuration found. Run migrations to seed it.",
            details=details,
        )

    @classmethod
    def duplicate_system_default(cls, row_ids: list[Any]) -> "ConfigurationError":
        return cls(
            message=f"{len(row_ids)} system-default threshold rows exist; exactly one is allowed.",
            details={"threshold_ids": [str(i) for i in row_ids]},
        )


class ConsentViolationError(ScoringServiceError):
    http_status = status.HTTP_403_FORBIDDEN
    code = "CONSENT_VIOLATION"

    def __init__(self, viewer_role: str, employee_id: int):
        super().__init__(
            message=f"Viewer role '{viewer_role}' is not entitled to raw health values.",
            details={"viewer_role": viewer_role, "employee_id": employee_id},
        )


class EmployeeNotFoundError(ScoringServiceError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int):
        super().__init__(
            message=f"Employee {employee_id} does not exist.",
            details={"employee_id": employee_id},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def scoring_exception_handler(request: Request, exc: ScoringServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
