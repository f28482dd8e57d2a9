"""Custom exception hierarchy for intl-region.

This module provides the exception hierarchy used across the mapping
tables, the region provider and the command-line tool. Using specific
exception types enables:
- Failing loudly on broken mapping data
- Distinguishing caller mistakes from data problems
- Consistent error output in the CLI

Exception Hierarchy:
    IntlRegionError (base)
    ├── ConfigurationError
    │   └── MappingLoadError
    └── ValidationError
        ├── InvalidRegionCodeError
        └── InvalidRegionTypeError
"""
from __future__ import annotations

from typing import Optional, Dict, Any


class IntlRegionError(Exception):
    """Base exception for all intl-region errors.

    All custom exceptions should inherit from this class to enable
    catching all intl-region errors with a single except block.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for machine-readable output."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Configuration Errors
class ConfigurationError(IntlRegionError):
    """Raised when there's a configuration problem.

    Examples:
        - Invalid setting value
        - Mapping directory that does not exist
    """
    pass


class MappingLoadError(ConfigurationError):
    """Raised when a mapping data file is missing or malformed.

    Fatal: every lookup depends on the mapping tables, so the error is
    surfaced to the caller instead of degrading to empty tables.

    Attributes:
        path: The file that failed to load
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.path = path
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, code, details)


# Validation Errors
class ValidationError(IntlRegionError):
    """Raised when input validation fails.

    Examples:
        - Unknown region code
        - Unsupported region type
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code, details)


class InvalidRegionCodeError(ValidationError):
    """Raised when a (normalized) region code is not in its table.

    Attributes:
        region_type: "continent" or "subregion"
        region_code: The code as supplied by the caller
    """

    def __init__(
        self,
        region_type: str,
        region_code: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.region_type = region_type
        self.region_code = region_code
        details = details or {}
        details["region_type"] = region_type
        details["region_code"] = region_code
        super().__init__(
            message or f"Invalid {region_type} code: {region_code}",
            field="code",
            details=details,
        )


class InvalidRegionTypeError(ValidationError):
    """Raised when a region type is neither "continent" nor "subregion"."""

    def __init__(self, region_type: str, details: Optional[Dict[str, Any]] = None):
        self.region_type = region_type
        super().__init__(
            f'Type must be either "continent" or "subregion", got "{region_type}"',
            field="type",
            details=details,
        )


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to an error payload.

    Args:
        error: The exception to convert

    Returns:
        Dictionary suitable for JSON error output
    """
    if isinstance(error, IntlRegionError):
        return error.to_dict()

    return {
        "error": "InternalError",
        "message": str(error),
        "details": {},
    }
