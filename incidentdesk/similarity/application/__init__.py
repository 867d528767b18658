"""
Similarity Application Layer
============================

Contains:
- Services: SimilarityService, InsightGenerator
- DTOs: Data transfer objects for API serialization
"""

from incidentdesk.similarity.application.dto import (
    SimilarityCheckRequest,
    SimilarityCheckResponse,
    SimilarTicketInfo,
    ClusterInfo,
    TicketInfo,
)
from incidentdesk.similarity.application.services import (
    SimilarityService,
    SimilarityReport,
    InsightGenerator,
    NEW_TICKET_ID,
)

__all__ = [
    # DTOs
    "SimilarityCheckRequest",
    "SimilarityCheckResponse",
    "SimilarTicketInfo",
    "ClusterInfo",
    "TicketInfo",
    # Services
    "SimilarityService",
    "SimilarityReport",
    "InsightGenerator",
    "NEW_TICKET_ID",
]
