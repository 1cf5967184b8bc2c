"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    MediCareAIError,
    InvalidInputError,
    ModelDisabledError,
    SettingsError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "MediCareAIError",
    "InvalidInputError",
    "ModelDisabledError",
    "SettingsError",
]
