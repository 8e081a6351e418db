"""Exceptions shared across VITAE contexts."""

from typing import Optional


class VitaeError(Exception):
    """Base class for all VITAE errors."""


class MissingRequiredFieldError(VitaeError, ValueError):
    """
    Raised when an operation's precondition field is empty.

    Attributes:
        field: Name of the missing field (e.g., 'personal.fullName')
        message: User-facing description
    """

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"Required field is missing: {field}"
        super().__init__(self.message)


class MissingCredentialError(VitaeError):
    """Raised before any AI call when no API key was supplied."""

    def __init__(self, provider: str = "gemini"):
        self.provider = provider
        super().__init__(f"Please set your {provider.capitalize()} API key first")


class GenerationFailedError(VitaeError):
    """
    Raised when the AI text service fails for any reason.

    Attributes:
        message: User-facing description
        original_error: The underlying provider or parsing error
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class StoreError(VitaeError):
    """Raised when the resume store cannot read or write a record."""


class ExportError(VitaeError):
    """Raised when PDF generation fails; there is no partial export."""

    def __init__(self, message: str = "Failed to generate PDF. Please try again."):
        self.message = message
        super().__init__(message)
