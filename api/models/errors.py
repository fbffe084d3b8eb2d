"""
Error Response Models

Defines the error envelope returned by every triage endpoint, including
failures raised by the engine itself (configuration, live endpoint,
scenario library).
"""

from datetime import datetime
from typing import Dict, Optional, Any, List

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response model for API errors.

    error_code names the engine error type (CONFIGURATION_ERROR,
    UPSTREAM_ERROR, NETWORK_ERROR, DATA_ERROR) or HTTP_<status> for
    plain HTTP errors.
    """
    status: str = Field(
        default="error",
        description="Error status indicator"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    error_code: str = Field(
        ...,
        description="Machine-readable error code"
    )
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp"
    )


class ValidationErrorItem(BaseModel):
    """Location and message of a single request validation failure."""
    loc: List[str] = Field(
        ...,
        description="Error location (field path)"
    )
    msg: str = Field(
        ...,
        description="Error message"
    )
    type: str = Field(
        ...,
        description="Error type"
    )


class ValidationErrorResponse(ErrorResponse):
    """Error response listing every request validation failure."""
    validation_errors: List[ValidationErrorItem] = Field(
        ...,
        description="List of specific validation errors"
    )
