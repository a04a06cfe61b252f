"""
Error types shared across the rental card service.

Every error raised by the package derives from AppError, so callers can
catch one base class and still get a structured description of what failed.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """How serious an error is for the caller."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AppError(Exception):
    """Base class for all application errors."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error message
            severity: Severity of the error
            details: Extra context for logging or translation to responses
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details
        }

    def __str__(self) -> str:
        return self.message
