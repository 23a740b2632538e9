"""Custom exceptions for the application."""

from __future__ import annotations


class SpeechTestCIException(Exception):
    """Base exception for the speech test pipeline."""
    pass


class ConfigurationError(SpeechTestCIException):
    """Raised when required configuration is missing or invalid."""
    pass


class MalformedOutputError(SpeechTestCIException):
    """Raised when an external tool's output cannot be parsed."""
    pass


class DatasetUploadError(MalformedOutputError):
    """Raised when the testing dataset could not be uploaded."""
    pass


class BaselineModelError(MalformedOutputError):
    """Raised when no valid baseline model could be resolved."""
    pass


class TestCreationError(MalformedOutputError):
    """Raised when the speech test could not be created."""
    __test__ = False  # not a pytest test class


class SpeechServiceError(SpeechTestCIException):
    """Raised when the Azure Speech service (CLI or REST) fails."""
    pass


class BlobStorageError(SpeechTestCIException):
    """Raised when Azure Blob Storage operations fail."""
    pass
