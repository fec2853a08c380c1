"""
Error response schemas for API documentation and consistent error formatting.
Provides the standardized error envelope model for OpenAPI documentation.
"""

from pydantic import Field
from typing import Any, Dict, Optional
from app.schemas.response import CamelModel


class ErrorResponse(CamelModel):
    """Error envelope returned for every failed request."""

    status_code: int = Field(..., description="HTTP status code", examples=[400])
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message", examples=["Input Validation Errors"])
    details: Optional[Any] = Field(
        None,
        description="Machine-readable details, e.g. a field -> message mapping",
        examples=[{"email": "value is not a valid email address"}]
    )


def _error_example(status_code: int, description: str, message: str, details: Any = None) -> Dict[str, Any]:
    return {
        "description": description,
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "statusCode": status_code,
                    "success": False,
                    "message": message,
                    "details": details,
                }
            }
        },
    }


COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: _error_example(
        400,
        "Bad Request - Invalid input",
        "Input Validation Errors",
        {"price": "Input should be greater than 0"},
    ),
    401: _error_example(401, "Unauthorized - Missing or invalid token", "Invalid token."),
    403: _error_example(403, "Forbidden - Caller does not own the resource", "You are not authorized to delete this property"),
    404: _error_example(404, "Not Found - Resource does not exist", "Property not found"),
    413: _error_example(413, "Payload Too Large", "Request size 20000 bytes exceeds maximum allowed size 16384 bytes"),
    500: _error_example(500, "Internal Server Error", "Internal Server Error"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 500)
