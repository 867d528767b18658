"""
Knowledge Base Application Layer
================================

Contains:
- Services: KBSuggestionService
- DTOs: Data transfer objects for API serialization
"""

from incidentdesk.knowledge.application.dto import (
    KBSuggestionRequest,
    KBSuggestionResponse,
    RelevanceResultInfo,
)
from incidentdesk.knowledge.application.services import KBSuggestionService

__all__ = [
    # DTOs
    "KBSuggestionRequest",
    "KBSuggestionResponse",
    "RelevanceResultInfo",
    # Services
    "KBSuggestionService",
]
