"""
Error types for translabel.

"No mapping found" is not an error and never raises; these exceptions cover
broken lookups and misconfiguration only.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload for callers that report failures upstream."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class TranslationError(Exception):
    """Base exception for translabel."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ProviderError(TranslationError):
    """The lookup provider could not produce a code map."""

    def __init__(self, key: str, message: str = "Provider load failed", details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__("PROVIDER_ERROR", f"{key}: {message}", {"key": key, **(details or {})})


class StoreError(TranslationError):
    """The external cache store is unreachable or rejected a command."""

    def __init__(self, key: str, message: str = "Cache store error", details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__("STORE_ERROR", f"{key}: {message}", {"key": key, **(details or {})})


class ConfigurationError(TranslationError):
    """Invalid construction parameters."""

    def __init__(self, message: str = "Invalid configuration", config_field: Optional[str] = None):
        self.config_field = config_field
        details = {"field": config_field} if config_field else {}
        super().__init__("CONFIGURATION_ERROR", message, details)


class InvalidKeyError(TranslationError):
    """A translation key was missing or empty."""

    def __init__(self, message: str = "Translation key must be a non-empty string", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_KEY", message, details)
