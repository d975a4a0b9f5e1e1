"""
Exception hierarchy for booking fields reconciliation.

Input errors are raised before any merging happens. Output errors mean the
reconciled list itself is invalid, which points at a logic defect or at a
migrated custom input whose name collides with another field.
"""

from typing import Optional


class BookingFieldsError(Exception):
    """Base exception for all booking fields errors."""

    pass


class BookingFieldsValidationError(BookingFieldsError):
    """
    Raised when a booking fields shape fails validation.

    Attributes:
        source: Which input was being validated ("bookingFields",
            "customInputs", "metadata")
        path: JSON-path-like location of the offending value,
            e.g. "bookingFields[2].type"
        message: Validator message
    """

    def __init__(self, message: str, source: str, path: Optional[str] = None):
        self.message = message
        self.source = source
        self.path = path or source
        super().__init__(f"{self.path}: {message}")


class InputValidationError(BookingFieldsValidationError):
    """Raised when caller-supplied fields, custom inputs or metadata are malformed."""

    pass


class OutputValidationError(BookingFieldsValidationError):
    """Raised when the reconciled booking fields fail validation."""

    pass
