"""
PdfRearrange - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PdfRearrange application.
"""


class PdfRearrangeError(Exception):
    """Base exception for all PdfRearrange errors.

    All custom exceptions should inherit from this class to allow
    catching any PdfRearrange-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class LoadError(PdfRearrangeError):
    """Raised when a document cannot be parsed or its pages cannot be rendered."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source: Name or path of the document that failed to load
            reason: Optional reason why loading failed
        """
        self.source = source
        self.reason = reason
        msg = f"Could not load PDF: {source}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"source={source}")


class ExportError(PdfRearrangeError):
    """Raised when the output document cannot be assembled or written."""

    def __init__(self, reason: str, page_id: int | None = None) -> None:
        """Initialize the exception.

        Args:
            reason: Reason for the failure
            page_id: Optional identifier of the page that caused the failure
        """
        self.reason = reason
        self.page_id = page_id
        details = f"page_id={page_id}" if page_id is not None else None
        super().__init__(f"Export failed: {reason}", details=details)


class CropError(PdfRearrangeError):
    """Raised when a crop region does not intersect the page raster."""

    def __init__(self, region: object, image_size: tuple[int, int]) -> None:
        self.region = region
        self.image_size = image_size
        width, height = image_size
        super().__init__(
            "Crop region is empty",
            details=f"region={region}, image={width}x{height}",
        )


class ValidationError(PdfRearrangeError):
    """Raised when input validation fails."""

    def __init__(
        self,
        field: str,
        value: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            field: Name of the field that failed validation
            value: Optional value that failed validation
            reason: Optional reason for the validation failure
        """
        self.field = field
        self.value = value
        self.reason = reason

        msg = f"Validation error for '{field}'"
        if reason:
            msg += f": {reason}"

        super().__init__(msg, details=f"value={value}" if value is not None else None)


# Exception hierarchy summary:
# PdfRearrangeError (base)
# ├── LoadError
# ├── ExportError
# ├── CropError
# └── ValidationError
