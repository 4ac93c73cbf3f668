"""
Custom exceptions for the training analytics engine.

Missing data (absent heart rate, GPS points without altitude, workouts
without a start time) is never an error here; every analyzer has a
documented skip or sentinel for it. The exceptions below are reserved for
misconfiguration and invalid call parameters. Each exception carries:
- A descriptive message
- An error code usable by an outer API layer
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    ZONE_CONFIGURATION_ERROR = "ZONE_CONFIGURATION_ERROR"


class TrainingAnalyticsError(Exception):
    """
    Base exception for all training analytics errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class InvalidParameterError(TrainingAnalyticsError):
    """Raised when a function is called with a parameter outside its domain."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if parameter:
            error_details["parameter"] = parameter
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_PARAMETER,
            details=error_details,
        )


class ConfigurationError(TrainingAnalyticsError):
    """Raised when the athlete configuration cannot be used."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=details,
        )


class ZoneConfigurationError(ConfigurationError):
    """Raised when an HR zone table is empty, unsorted or degenerate."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.code = ErrorCode.ZONE_CONFIGURATION_ERROR
