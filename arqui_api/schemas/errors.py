"""
Shared error response schemas for OpenAPI documentation.

Import these in endpoint files to add consistent error responses.

Note: These definitions use inline examples rather than model references
to avoid circular imports with the exceptions module.
"""

from typing import Dict, Any


def _problem_example(status: int, title: str, code: str, detail: str, **extra: Any) -> Dict[str, Any]:
    example = {
        "type": f"https://api.arqui.pe/problems/{code.lower().replace('_', '-')}",
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
        "timestamp": "2026-01-29T10:30:00Z",
        "trace_id": "abc123def456",
    }
    example.update(extra)
    return {"application/problem+json": {"example": example}}


# Reusable response definitions for OpenAPI
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Pricing plan or service not available",
        "content": _problem_example(
            400, "Invalid Service", "QTE_002", "Service 7 is not available"
        ),
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "content": _problem_example(
            404, "Not Found", "RES_001", "Quote with ID 123 was not found"
        ),
    },
    422: {
        "description": "Validation Error - Invalid field values",
        "content": _problem_example(
            422,
            "Validation Error",
            "VAL_001",
            "uncovered_percent must be between 0 and 100",
            errors=[
                {
                    "field": "uncovered_percent",
                    "message": "uncovered_percent must be between 0 and 100",
                    "type": "value_error",
                }
            ],
        ),
    },
    500: {
        "description": "Internal Server Error",
        "content": _problem_example(
            500, "Internal Server Error", "SRV_001", "Failed to persist changes"
        ),
    },
}


def responses_for(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """Select error responses for an endpoint, e.g. ``responses_for(404, 422)``."""
    return {code: ERROR_RESPONSES[code] for code in status_codes if code in ERROR_RESPONSES}
