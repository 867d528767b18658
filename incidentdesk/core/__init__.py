"""
Core Module
============

Exception types shared by every module.
"""

from incidentdesk.core.exceptions import (
    ApplicationException,
    ValidationException,
    ConfigurationException,
    FixtureException,
    ExternalServiceException,
    LLMException,
)

__all__ = [
    "ApplicationException",
    "ValidationException",
    "ConfigurationException",
    "FixtureException",
    "ExternalServiceException",
    "LLMException",
]
