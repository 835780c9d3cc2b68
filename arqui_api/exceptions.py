"""
RFC 7807 Problem Details exception handling.

Every error raised by the quoting core carries a stable machine-readable
code plus a human-readable detail. The handlers below render them as
``application/problem+json``.

See: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Optional, Dict, Any, List
from enum import Enum
from pydantic import BaseModel, Field
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
import uuid
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

PROBLEM_BASE_URL = "https://api.arqui.pe/problems"


def _get_trace_id() -> str:
    """Get trace ID from correlation context or generate a new one."""
    from arqui_api.middleware.correlation import get_request_id

    request_id = get_request_id()
    if request_id and request_id != "unknown":
        return request_id
    return str(uuid.uuid4())[:12]


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ErrorCode(str, Enum):
    """Standardized error codes for the quoting API."""

    # Validation
    VALIDATION_ERROR = "VAL_001"

    # Resource
    NOT_FOUND = "RES_001"
    CONFLICT = "RES_003"

    # Quoting
    INVALID_PRICING_PLAN = "QTE_001"
    INVALID_SERVICE = "QTE_002"

    # Server
    INTERNAL_ERROR = "SRV_001"
    SERVICE_UNAVAILABLE = "SRV_002"


def _problem_type(code: ErrorCode) -> str:
    return f"{PROBLEM_BASE_URL}/{code.value.lower().replace('_', '-')}"


class ProblemDetail(BaseModel):
    """
    RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying this specific occurrence
        code: Machine-readable error code for client handling
        timestamp: ISO 8601 timestamp of when the error occurred
        trace_id: Unique identifier for tracing in logs
        errors: List of field-level validation errors
    """

    type: str = Field(
        default="about:blank",
        description="URI reference identifying the problem type"
    )
    title: str = Field(description="Short, human-readable summary of the problem")
    status: int = Field(description="HTTP status code")
    detail: str = Field(description="Human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(
        default=None,
        description="URI reference for this specific occurrence"
    )
    code: str = Field(description="Machine-readable error code")
    timestamp: str = Field(description="ISO 8601 timestamp")
    trace_id: str = Field(description="Unique trace ID for debugging")
    errors: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Field-level validation errors"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": f"{PROBLEM_BASE_URL}/res-001",
                "title": "Not Found",
                "status": 404,
                "detail": "Quote with ID 123 was not found",
                "instance": "/api/v1/quotes/123",
                "code": "RES_001",
                "timestamp": "2026-01-29T10:30:00Z",
                "trace_id": "abc123def456"
            }
        }
    }


class APIException(HTTPException):
    """
    Base exception for the quoting API with RFC 7807 support.

    Usage:
        raise APIException(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail="Quote not found",
        )
    """

    # Stable error kind surfaced to callers alongside the code
    kind = "APIError"

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        title: Optional[str] = None,
        instance: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.code = code
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.errors = errors
        self.trace_id = _get_trace_id()
        self.timestamp = _timestamp()

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title based on status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            409: "Conflict",
            422: "Validation Error",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")

    def to_problem_detail(self, instance: Optional[str] = None) -> ProblemDetail:
        """Convert to RFC 7807 ProblemDetail."""
        return ProblemDetail(
            type=_problem_type(self.code),
            title=self.title,
            status=self.status_code,
            detail=self.detail,
            instance=self.instance or instance,
            code=self.code.value,
            timestamp=self.timestamp,
            trace_id=self.trace_id,
            errors=self.errors,
        )


# Convenience exception classes

class NotFoundError(APIException):
    """Resource not found (404)."""

    kind = "NotFound"

    def __init__(self, resource: str, resource_id: Any):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail=f"{resource} with ID {resource_id} was not found",
        )


class ValidationError(APIException):
    """Malformed or out-of-range input (422).

    ``field`` names the offending input and ``detail`` gives the reason;
    ``errors`` may carry several fields.
    """

    kind = "ValidationError"

    def __init__(
        self,
        detail: str,
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.field = field
        if errors is None and field is not None:
            errors = [{"field": field, "message": detail, "type": "value_error"}]
        super().__init__(
            status_code=422,
            code=ErrorCode.VALIDATION_ERROR,
            detail=detail,
            errors=errors,
        )


class InvalidPricingPlanError(APIException):
    """Pricing plan id given but unknown or inactive (400)."""

    kind = "InvalidPricingPlan"

    def __init__(self, plan_id: Any):
        self.plan_id = plan_id
        super().__init__(
            status_code=400,
            code=ErrorCode.INVALID_PRICING_PLAN,
            detail=f"Pricing plan {plan_id} is not available",
            title="Invalid Pricing Plan",
        )


class InvalidServiceError(APIException):
    """Service id given but unknown or inactive when adding a line item (400)."""

    kind = "InvalidService"

    def __init__(self, service_id: Any):
        self.service_id = service_id
        super().__init__(
            status_code=400,
            code=ErrorCode.INVALID_SERVICE,
            detail=f"Service {service_id} is not available",
            title="Invalid Service",
        )


class InternalError(APIException):
    """Storage failure while applying a unit of work (500)."""

    kind = "InternalError"

    def __init__(self, detail: str = "Failed to persist changes"):
        super().__init__(
            status_code=500,
            code=ErrorCode.INTERNAL_ERROR,
            detail=detail,
        )


# Exception handlers for FastAPI

def create_problem_response(
    status_code: int,
    code: ErrorCode,
    detail: str,
    request: Request,
    errors: Optional[List[Dict[str, Any]]] = None,
    trace_id: Optional[str] = None,
) -> JSONResponse:
    """Create a RFC 7807 compliant JSON response."""
    problem = ProblemDetail(
        type=_problem_type(code),
        title=APIException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        code=code.value,
        timestamp=_timestamp(),
        trace_id=trace_id or _get_trace_id(),
        errors=errors,
    )

    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handle APIException with RFC 7807 response."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s - %s",
        exc.kind,
        exc.code.value,
        exc.detail,
        extra={
            "trace_id": exc.trace_id,
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_problem_detail(instance=str(request.url.path)).model_dump(exclude_none=True),
        media_type="application/problem+json",
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTPException with RFC 7807 response."""
    code_map = {
        400: ErrorCode.VALIDATION_ERROR,
        404: ErrorCode.NOT_FOUND,
        405: ErrorCode.VALIDATION_ERROR,
        409: ErrorCode.CONFLICT,
        422: ErrorCode.VALIDATION_ERROR,
        500: ErrorCode.INTERNAL_ERROR,
        503: ErrorCode.SERVICE_UNAVAILABLE,
    }
    code = code_map.get(exc.status_code, ErrorCode.INTERNAL_ERROR)

    return create_problem_response(
        status_code=exc.status_code,
        code=code,
        detail=str(exc.detail),
        request=request,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return create_problem_response(
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request validation failed",
        request=request,
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with RFC 7807 response."""
    trace_id = str(uuid.uuid4())[:12]

    logger.error(
        "Unhandled exception: %s",
        exc,
        extra={"trace_id": trace_id, "path": request.url.path},
    )
    logger.error(traceback.format_exc())

    # Don't expose internal details in production
    from arqui_api.config import settings
    detail = str(exc) if settings.DEBUG else "An unexpected error occurred"

    return create_problem_response(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
        request=request,
        trace_id=trace_id,
    )


def register_exception_handlers(app) -> None:
    """Attach the problem+json handlers to a FastAPI app."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
