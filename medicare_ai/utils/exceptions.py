"""
Custom Exception Hierarchy

Raised by the service layer only. The decision engine itself is total and
never raises for bad input; it falls back to defaults instead.
"""
from typing import Optional, Dict, Any


class MediCareAIError(Exception):
    """Base exception for all MediCare+ AI errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for UI consumption."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class InvalidInputError(MediCareAIError):
    """Caller supplied input the service refuses to analyse (blank text, non-image upload)."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            details={"field": field, **(details or {})}
        )
        self.field = field


class ModelDisabledError(MediCareAIError):
    """The requested analysis model is switched off in the AI settings."""

    def __init__(
        self,
        message: str,
        model: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="MODEL_DISABLED",
            details={"model": model, **(details or {})}
        )
        self.model = model


class SettingsError(MediCareAIError):
    """AI settings file could not be read, parsed or validated."""

    def __init__(
        self,
        message: str,
        path: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SETTINGS_ERROR",
            details={"path": path, **(details or {})}
        )
        self.path = path
