"""
polychat error types: one class per failure the SDK reports to callers.
"""

from typing import Any, Optional


class PolychatError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ValidationError(PolychatError):
    """Empty or otherwise unusable user input."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(code, message)


class InvalidRequest(ValidationError):
    def __init__(self, message: str):
        super().__init__(message, code="invalid_request")


class ConsentRequired(PolychatError):
    def __init__(self, message: str = "Translation requires consent to share text with the provider."):
        super().__init__("consent_required", message)


class TranslationFailed(PolychatError):
    def __init__(self, message: str, code: str = "translation_failed", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class TranslationInProgress(PolychatError):
    def __init__(self, message: str = "A translation is already in progress."):
        super().__init__("translation_in_progress", message)


class PersistenceError(PolychatError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("persistence_error", message, details)
