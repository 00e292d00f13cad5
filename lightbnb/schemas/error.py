"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["email"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid email format"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error",
        examples=["invalid-email"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message", examples=["Request validation failed"])
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2023-01-01T00:00:00Z"])
    request_id: Optional[str] = Field(None, description="Request identifier for tracking", examples=["abc12345"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information for validation errors")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str, details: Optional[list] = None) -> Dict[str, Any]:
    error = {
        "code": code,
        "message": message,
        "timestamp": "2023-01-01T00:00:00Z",
        "request_id": "abc12345",
    }
    if details:
        error["details"] = details
    return {"error": error}


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("BAD_REQUEST", "Invalid request parameters")}}
    },
    401: {
        "description": "Unauthorized - Authentication required",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "unauthorized": {
                        "summary": "Authentication Required",
                        "value": _example("UNAUTHORIZED", "Authentication required")
                    },
                    "invalid_credentials": {
                        "summary": "Invalid Credentials",
                        "value": _example("UNAUTHORIZED", "Invalid email or password")
                    },
                    "token_expired": {
                        "summary": "Token Expired",
                        "value": _example("UNAUTHORIZED", "Token has expired")
                    }
                }
            }
        }
    },
    404: {
        "description": "Not Found - Resource not found",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("NOT_FOUND", "Property not found with ID: 42")}}
    },
    409: {
        "description": "Conflict - Resource conflict",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("CONFLICT", "User with identifier 'user@example.com' already exists")
            }
        }
    },
    422: {
        "description": "Unprocessable Entity - Validation error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "validation_error": {
                        "summary": "Validation Error",
                        "value": _example(
                            "VALIDATION_ERROR",
                            "Request validation failed",
                            [{"field": "limit", "message": "Input should be greater than or equal to 1",
                              "type": "greater_than_equal", "input": 0}]
                        )
                    },
                    "field_required": {
                        "summary": "Required Field Missing",
                        "value": _example(
                            "VALIDATION_ERROR",
                            "Request validation failed",
                            [{"field": "title", "message": "Field required", "type": "missing"}]
                        )
                    }
                }
            }
        }
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "internal_error": {
                        "summary": "Internal Server Error",
                        "value": _example("INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later.")
                    },
                    "database_error": {
                        "summary": "Database Error",
                        "value": _example("DATABASE_ERROR", "Database operation failed")
                    }
                }
            }
        }
    }
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


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication error response schemas."""
    return get_error_responses(401, 422, 500)


def get_search_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for search endpoints."""
    return get_error_responses(400, 422, 500)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 404, 409, 422, 500)
