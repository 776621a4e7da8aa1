"""
Custom error types for Markdown to Atlassian wiki markup conversion.

Provides user-friendly error messages and structured error handling.
"""

from dataclasses import dataclass
from typing import Any

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class WikiMarkupError(Exception):
    """Base exception for all wiki markup conversion errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(WikiMarkupError):
    """Raised when an environment setting holds an unusable value."""

    def __init__(self, setting: str, value: str, reason: str):
        super().__init__(f"Invalid value {value!r} for {setting}: {reason}")
        self.setting = setting
        self.value = value
        self.reason = reason


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(WikiMarkupError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# Conversion Errors
# =============================================================================


class ConversionError(WikiMarkupError):
    """Raised when a conversion could not be completed."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class UnknownFlavorError(WikiMarkupError):
    """
    Raised when the renderer is handed a flavor outside Jira/Confluence.

    Public entry points validate the flavor before rendering starts, so this
    only surfaces when calling code bypasses them. It signals a defect in the
    caller and is never wrapped by the tool error handler.
    """

    def __init__(self, flavor: Any):
        super().__init__(f"Unknown Atlassian markup flavor: {flavor!r}")
        self.flavor = flavor


@dataclass
class SourceFileNotFoundError(WikiMarkupError):
    """Raised when a Markdown source file does not exist."""

    path: str = ""
    message: str = ""

    def __post_init__(self):
        if not self.message:
            self.message = f"Markdown file not found: '{self.path}'"

    def __str__(self) -> str:
        return self.message


def format_error(operation: str, error: Exception) -> str:
    """Format an error for display to the user."""
    return f"{operation} failed: {error}"
