# backend/goldfolio/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The router layer is responsible for mapping these to appropriate HTTP responses.

The curve calculators themselves never raise: degenerate input resolves to
sentinel values (empty curves, zeroed stats). These exceptions are raised
only when parsing input at the boundary.

Exception Hierarchy:
    ServiceError (base)
    └── ValidationError
        └── InvalidTimeRangeError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (invalid parameters, unknown
    enumeration labels, etc.), NOT for request body validation which is
    handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidTimeRangeError(ValidationError):
    """
    Raised when an unknown chart time range label is specified.

    Valid labels are: 1W, 1M, 6M, 1Y, ALL
    """

    def __init__(self, label: str, valid_options: list[str]) -> None:
        self.label = label
        self.valid_options = valid_options
        super().__init__(
            f"Invalid time range: '{label}'. Valid options: {', '.join(valid_options)}",
            field="range",
        )
