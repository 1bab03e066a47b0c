# backend/goldfolio/schemas/errors.py
"""
Pydantic schemas for error responses.

Every non-2xx response of the curve API uses one of these bodies:

    400  ErrorDetail            unknown chart range, service validation
    404  ErrorDetail            unknown path
    405  ErrorDetail            wrong method
    422  ValidationErrorDetail  malformed snapshot or query parameter
    500  ErrorDetail            any other ServiceError

Built by the global exception handlers in main.py.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error body with a machine-readable type and optional context."""

    error: str = Field(
        ...,
        description="Error type/code",
        examples=["InvalidTimeRangeError", "NotFoundError"]
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid time range: '2W'. Valid options: 1W, 1M, 6M, 1Y, ALL"]
    )
    details: dict | None = Field(
        default=None,
        description="Additional error context, e.g. the rejected range and valid options"
    )


class ValidationErrorDetail(BaseModel):
    """
    Body of 422 responses.

    Each entry of `details` has `field` (dotted location such as
    "body.assets.0.quantity"), `message` and `type`.
    """

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[dict] = Field(
        ...,
        description="One entry per failed field"
    )
