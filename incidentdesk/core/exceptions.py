"""
Core Exceptions
===============

Error types raised by the scoring services and the infrastructure around
them. The API layer maps ``ValidationException`` to a 400; LLM errors
never leave the analysis service.
"""

from typing import List, Optional


class ApplicationException(Exception):
    """Root of every error IncidentDesk raises on purpose."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Required ticket fields are missing or blank."""

    def __init__(
        self,
        message: str = "Missing required fields",
        fields: Optional[List[str]] = None,
        details: Optional[dict] = None
    ):
        self.fields = list(fields or [])
        super().__init__(message, details or {"fields": self.fields})


class ConfigurationException(ApplicationException):
    """Settings or startup resources are unusable."""


class FixtureException(ConfigurationException):
    """The KB / historical ticket corpus file could not be loaded."""

    def __init__(self, path: str, message: str, details: Optional[dict] = None):
        self.path = path
        super().__init__(f"Invalid fixture file '{path}': {message}", details)


class ExternalServiceException(ApplicationException):
    """A remote dependency failed or answered with something unusable."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class LLMException(ExternalServiceException):
    """Chat completion failed, timed out or returned an unparseable reply."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("LLM Service", message, details)
